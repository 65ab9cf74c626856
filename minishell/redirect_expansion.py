"""Expansion of redirection targets, with ambiguous-redirect detection."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from .environment import Environment
from .expansion import (
    BLANK,
    DOUBLE_QUOTED,
    LITERAL,
    SINGLE_QUOTED,
    VARIABLE,
    Segment,
    lookup_variable,
    split_segments,
)
from .strutil import count_fields, is_blank

NOT_CHECKED = 0
UNSET = 1
LEADING_BLANK = 2
TRAILING_BLANK = 3
SURROUNDED = 4
SEVERAL_WORDS = 5
SINGLE_WORD = 6

_REFERENCE = re.compile(r"\$(\?|[0-9]|[A-Za-z_][A-Za-z0-9_]*)")


@dataclass(frozen=True)
class RedirectPiece:
    """One resolved piece of a redirection target.

    ``text`` is None for an expansion whose variable is unset or empty.
    ``word`` is False only for a bare, unquoted expansion; ``joined`` marks
    pieces that came from inside quotes. ``ambiguity`` is one of the
    module's ambiguity codes, NOT_CHECKED for pieces that need no check.
    """

    text: str | None
    expand: bool
    word: bool
    joined: bool
    ambiguity: int = NOT_CHECKED


def is_empty_quotes(text: str | None) -> bool:
    """True when ``text`` is exactly a pair of empty quotes."""
    return text in ('""', "''")


def classify_ambiguity(value: str | None) -> int:
    """Ambiguity code for the value of a bare expansion."""
    if value is None:
        return UNSET
    if count_fields(value, " ") > 1:
        return SEVERAL_WORDS
    leading = is_blank(value[:1])
    trailing = is_blank(value[-1:])
    if leading and trailing:
        return SURROUNDED
    if leading:
        return LEADING_BLANK
    if trailing:
        return TRAILING_BLANK
    return SINGLE_WORD


def _env_value(name: str, env: Environment) -> str | None:
    value = lookup_variable(name, env)
    return value or None


def _first_word(text: str) -> list[Segment]:
    word: list[Segment] = []
    for segment in split_segments(text):
        if segment.kind == BLANK:
            if word:
                break
            continue
        word.append(segment)
    return word


def _double_quoted_pieces(text: str, env: Environment) -> Iterable[RedirectPiece]:
    parts = _REFERENCE.split(text)
    for index, part in enumerate(parts):
        if index % 2:
            yield RedirectPiece(_env_value(part, env), True, True, True)
        elif part:
            yield RedirectPiece(part, False, True, True)


def _resolve(segments: Iterable[Segment], env: Environment) -> list[RedirectPiece]:
    pieces: list[RedirectPiece] = []
    for segment in segments:
        if segment.kind == VARIABLE:
            value = _env_value(segment.text, env)
            pieces.append(
                RedirectPiece(value, True, False, False, classify_ambiguity(value))
            )
        elif segment.kind == LITERAL:
            pieces.append(RedirectPiece(segment.text, False, True, False))
        elif segment.kind == SINGLE_QUOTED:
            if segment.text:
                pieces.append(RedirectPiece(segment.text, False, True, True))
        elif segment.kind == DOUBLE_QUOTED:
            pieces.extend(_double_quoted_pieces(segment.text, env))
    return pieces


def _is_ambiguous(pieces: list[RedirectPiece]) -> bool:
    count = len(pieces)
    for index, piece in enumerate(pieces):
        before = pieces[index - 1] if index > 0 else None
        after = pieces[index + 1] if index + 1 < count else None
        code = piece.ambiguity
        if code == SEVERAL_WORDS:
            return True
        if code == UNSET and count == 1:
            return True
        if code == LEADING_BLANK and before is not None and before.word:
            return True
        if code == TRAILING_BLANK and after is not None and after.word:
            return True
        if code == SURROUNDED and count > 1:
            return True
    return False


def expand_redirect_target(text: str, env: Environment) -> str | None:
    """File name that the first word of ``text`` expands to.

    Returns None when the redirection is ambiguous: an unset bare variable
    standing alone, a bare expansion that splits into several words, or
    blanks that would separate the expansion from a neighbouring word.
    """
    if is_empty_quotes(text):
        return ""
    segments = _first_word(text)
    pieces = _resolve(segments, env)
    if _is_ambiguous(pieces):
        return None
    texts = [piece.text for piece in pieces if piece.text is not None]
    if not texts and not any(segment.quoted for segment in segments):
        return None
    return "".join(texts)