"""Small string helpers shared by the lexer, the expander and the builtins."""

from __future__ import annotations

import re

LLONG_MIN = -(2**63)
LLONG_MAX = 2**63 - 1

_BLANKS = frozenset(" \t\v\r\f")
_EXIT_ARG = re.compile(r"[ \t]*[+-]?[0-9]+[ \t]*")
_EXIT_PREFIX = re.compile(r"[ \t]*([+-]?)([0-9]*)")


def split_fields(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping empty fields."""
    return [field for field in text.split(sep) if field]


def count_fields(text: str, sep: str) -> int:
    """Number of non-empty fields in ``text`` separated by ``sep``."""
    return len(split_fields(text, sep))


def is_blank(char: str) -> bool:
    """True for the horizontal whitespace the shell treats as a separator."""
    return char in _BLANKS and len(char) == 1


def is_expand_char(char: str) -> bool:
    """True for characters allowed in a variable name: ASCII letters, digits, ``_``."""
    return len(char) == 1 and char.isascii() and (char.isalnum() or char == "_")


def starts_expansion(text: str, pos: int) -> bool:
    """True when ``text[pos]`` is a ``$`` followed by a variable-name character."""
    if pos < 0 or pos + 1 >= len(text):
        return False
    return text[pos] == "$" and is_expand_char(text[pos + 1])


def is_valid_exit_arg(text: str) -> bool:
    """True when ``text`` is an optionally signed integer padded with blanks."""
    return _EXIT_ARG.fullmatch(text) is not None


def parse_exit_number(text: str) -> int:
    """Read a leading signed integer from ``text``.

    Raises ValueError when the number does not fit a signed 64-bit integer.
    """
    match = _EXIT_PREFIX.match(text)
    sign, digits = match.group(1), match.group(2)
    value = int(digits) if digits else 0
    if sign == "-":
        value = -value
    if not LLONG_MIN <= value <= LLONG_MAX:
        raise ValueError(f"exit :{text}: numeric argument required")
    return value


def join_nullable(first: str | None, second: str | None) -> str | None:
    """Concatenate two optional strings; None only when both are None."""
    if first is None:
        return second
    if second is None:
        return first
    return first + second