"""Variable expansion, quote removal and field splitting of command words."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from .environment import Environment
from .state import current_status
from .strutil import is_blank

LITERAL = "literal"
SINGLE_QUOTED = "single"
DOUBLE_QUOTED = "double"
VARIABLE = "variable"
BLANK = "blank"

_QUOTES = "'\""
_NAME = re.compile(r"\?|[0-9]|[A-Za-z_][A-Za-z0-9_]*")
_REFERENCE = re.compile(r"\$(\?|[0-9]|[A-Za-z_][A-Za-z0-9_]*)")


@dataclass(frozen=True)
class Segment:
    """One lexical piece of a word.

    ``kind`` is one of LITERAL, SINGLE_QUOTED, DOUBLE_QUOTED, VARIABLE or
    BLANK. For quoted pieces ``text`` is the content without the quotes,
    for a variable it is the name without the ``$``.
    """

    kind: str
    text: str

    @property
    def quoted(self) -> bool:
        return self.kind in (SINGLE_QUOTED, DOUBLE_QUOTED)


def split_segments(text: str) -> list[Segment]:
    """Cut ``text`` into literal, quoted, variable and blank segments.

    A ``$`` directly before a quote is dropped; an unclosed quote runs to
    the end of the text; ``$`` followed by a digit names only that digit.
    """
    segments: list[Segment] = []
    pos = 0
    length = len(text)
    while pos < length:
        char = text[pos]
        if char == "$":
            match = _NAME.match(text, pos + 1)
            if match:
                segments.append(Segment(VARIABLE, match.group()))
                pos = match.end()
                continue
            if pos + 1 < length and text[pos + 1] in _QUOTES:
                pos += 1
                continue
        if char in _QUOTES:
            end = text.find(char, pos + 1)
            if end == -1:
                end = length
            kind = SINGLE_QUOTED if char == "'" else DOUBLE_QUOTED
            segments.append(Segment(kind, text[pos + 1:end]))
            pos = end + 1
            continue
        end = pos + 1
        if is_blank(char):
            while end < length and is_blank(text[end]):
                end += 1
            segments.append(Segment(BLANK, text[pos:end]))
        else:
            while end < length and not _ends_literal(text[end]):
                end += 1
            segments.append(Segment(LITERAL, text[pos:end]))
        pos = end
    return segments


def _ends_literal(char: str) -> bool:
    return char in _QUOTES or char == "$" or is_blank(char)


def lookup_variable(name: str, env: Environment) -> str:
    """Value a ``$name`` reference expands to; unset variables give ``""``."""
    if name == "?":
        return str(current_status())
    if name == "$":
        return "$"
    return env.lookup(name) or ""


def _substitute(text: str, env: Environment) -> str:
    return _REFERENCE.sub(lambda match: lookup_variable(match.group(1), env), text)


@dataclass
class _FieldBuilder:
    fields: list[str] = field(default_factory=list)
    parts: list[str] = field(default_factory=list)
    quoted: bool = False

    def add(self, text: str, quoted: bool = False) -> None:
        self.parts.append(text)
        self.quoted = self.quoted or quoted

    def finish(self) -> None:
        word = "".join(self.parts)
        if word or self.quoted:
            self.fields.append(word)
        self.parts = []
        self.quoted = False


def expand_word(text: str, env: Environment, heredoc_mode: bool = False) -> list[str]:
    """Expand ``text`` into the list of resulting arguments.

    Quotes are removed, variables substituted, and unquoted expansions are
    split on spaces. In heredoc mode quotes are kept as ordinary characters,
    no splitting happens, and the result is a single string.
    """
    if heredoc_mode:
        return [_substitute(text, env)]
    builder = _FieldBuilder()
    for segment in split_segments(text):
        if segment.kind == BLANK:
            builder.finish()
        elif segment.kind == VARIABLE:
            first, *rest = lookup_variable(segment.text, env).split(" ")
            builder.add(first)
            for piece in rest:
                builder.finish()
                builder.add(piece)
        elif segment.kind == SINGLE_QUOTED:
            builder.add(segment.text, quoted=True)
        elif segment.kind == DOUBLE_QUOTED:
            builder.add(_substitute(segment.text, env), quoted=True)
        else:
            builder.add(segment.text)
    builder.finish()
    return builder.fields


def join_expanded(parts: Iterable[str]) -> str:
    """Glue expanded pieces back together without separators."""
    return "".join(parts)