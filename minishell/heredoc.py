"""Here-document input: delimiters, bodies and the files that hold them."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Callable
from typing import Optional

from .delimiter import normalize_delimiter
from .environment import Environment
from .expansion import expand_word, join_expanded

Reader = Callable[[str], Optional[str]]

PROMPT = "> "
_QUOTES = "'\""
_DELIMITER_STOP = frozenset("| <>")
_DELIMITER_SKIP = frozenset(" \t<")


def _scramble_table() -> dict[int, int]:
    table: dict[int, int] = {}
    for base in (ord("a"), ord("A")):
        for offset in range(12):
            table[base + offset] = base + offset + 13
        for offset in range(13, 25):
            table[base + offset] = base + offset - 13
    return table


_SCRAMBLE = _scramble_table()


def _read_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def matches_delimiter(line: str, delimiter: str | None) -> bool:
    """True when ``line``, up to its first newline, equals ``delimiter``."""
    if delimiter is None:
        return False
    return line.split("\n", 1)[0] == delimiter


def scramble_name(name: str) -> str:
    """Rotate letters by 13 places to build a temporary file name.

    ``m``, ``z`` and their capitals are left as they are.
    """
    return name.translate(_SCRAMBLE)


def collect_delimiter(line: str, start: int) -> tuple[str, bool, int]:
    """Read the delimiter that follows a ``<<`` at ``start``.

    Returns the delimiter with its quotes removed, whether it was quoted,
    and the position just after it in ``line``.
    """
    pos = start
    while pos < len(line) and line[pos] in _DELIMITER_SKIP:
        pos += 1
    end = pos
    while end < len(line) and line[end] not in _DELIMITER_STOP:
        end += 1
    delimiter, quoted = normalize_delimiter(line[pos:end])
    return delimiter, quoted, end


def read_heredoc(
    delimiter: str,
    env: Environment,
    quoted: bool = False,
    reader: Reader | None = None,
) -> str:
    """Read body lines until ``delimiter`` or end of input.

    Unless the delimiter was quoted, variables in the body are expanded.
    An empty delimiter consumes one line and yields an empty body.
    """
    read = reader or _read_line
    lines: list[str] = []
    while True:
        line = read(PROMPT)
        if line is None or not delimiter or matches_delimiter(line, delimiter):
            break
        if not quoted:
            line = join_expanded(expand_word(line, env, heredoc_mode=True))
        lines.append(line.split("\n", 1)[0] + "\n")
    return "".join(lines)


def open_heredoc(
    delimiter: str,
    env: Environment,
    quoted: bool = False,
    reader: Reader | None = None,
) -> int:
    """Read a here-document and return a file descriptor positioned at its start.

    The backing file is already removed; the caller owns the descriptor.
    """
    body = read_heredoc(delimiter, env, quoted, reader)
    prefix = scramble_name(delimiter or "eof").replace("/", "_")
    with tempfile.TemporaryFile(prefix=prefix) as handle:
        handle.write(body.encode())
        handle.flush()
        handle.seek(0)
        return os.dup(handle.fileno())


def run_pending_heredocs(
    line: str, env: Environment, reader: Reader | None = None
) -> list[str]:
    """Consume the bodies of every here-document in ``line``.

    Used when a line is rejected, so its here-documents are still read.
    Returns the delimiters in the order they were handled.
    """
    delimiters: list[str] = []
    pos = 0
    while pos < len(line):
        if line.startswith("<<", pos):
            delimiter, quoted, pos = collect_delimiter(line, pos)
            read_heredoc(delimiter, env, quoted, reader)
            delimiters.append(delimiter)
        else:
            pos += 1
    return delimiters


def rest_after_pipe(line: str) -> str:
    """Text after the first ``|`` that is not inside quotes, or ``""``."""
    quote: str | None = None
    for index, char in enumerate(line):
        if quote is not None:
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char == "|":
            return line[index + 1:]
    return ""