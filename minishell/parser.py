"""Turning a command line into commands with their redirections."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from .environment import Environment
from .expansion import expand_word
from .heredoc import Reader, collect_delimiter, open_heredoc
from .redirect_expansion import expand_redirect_target
from .state import record_status
from .strutil import is_blank

import os

_QUOTES = "'\""
_TARGET_STOP = frozenset("<>|")


class RedirType(Enum):
    OUT = "out"
    APPEND = "append"
    IN = "in"
    HEREDOC = "heredoc"


@dataclass
class Redirection:
    """A redirection: a file name, or a descriptor holding a here-document."""

    type: RedirType
    file_name: str | None = None
    fd: int | None = None

    def close(self) -> None:
        """Release the here-document descriptor, if any."""
        if self.fd is not None:
            os.close(self.fd)
            self.fd = None


@dataclass
class Command:
    """One simple command of a pipeline."""

    args: list[str]
    redirections: list[Redirection] = field(default_factory=list)


@dataclass(frozen=True)
class _Span:
    start: int
    end: int
    type: RedirType
    target: str


def _operator(text: str, pos: int) -> tuple[int, RedirType] | None:
    pair = text[pos:pos + 2]
    if pair == ">>":
        return 2, RedirType.APPEND
    if pair == "<<":
        return 2, RedirType.HEREDOC
    following = text[pos + 1:pos + 2]
    if following in ("<", ">"):
        return None
    return 1, RedirType.IN if text[pos] == "<" else RedirType.OUT


def _target_end(text: str, pos: int) -> int:
    quote: str | None = None
    while pos < len(text):
        char = text[pos]
        if quote is not None:
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif is_blank(char) or char in _TARGET_STOP:
            break
        pos += 1
    return pos


def _spans(segment: str) -> Iterator[_Span]:
    pos = 0
    quote: str | None = None
    while pos < len(segment):
        char = segment[pos]
        if quote is not None:
            if char == quote:
                quote = None
            pos += 1
            continue
        if char in _QUOTES:
            quote = char
            pos += 1
            continue
        if char not in "<>":
            pos += 1
            continue
        found = _operator(segment, pos)
        if found is None:
            pos += 1
            continue
        width, kind = found
        if kind is RedirType.HEREDOC:
            _, _, end = collect_delimiter(segment, pos)
            yield _Span(pos, end, kind, segment[pos + width:end])
        else:
            start = pos + width
            while start < len(segment) and is_blank(segment[start]):
                start += 1
            end = _target_end(segment, start)
            yield _Span(pos, end, kind, segment[start:end])
        pos = max(end, pos + width)


def parse_redirections(
    segment: str, env: Environment, reader: Reader | None = None
) -> list[Redirection]:
    """Redirections of one pipeline segment, in order.

    Here-document bodies are read at once. Raises ValueError for an
    ambiguous redirect, after recording status 1.
    """
    result: list[Redirection] = []
    for span in _spans(segment):
        if span.type is RedirType.HEREDOC:
            delimiter, quoted, _ = collect_delimiter(segment, span.start)
            fd = open_heredoc(delimiter, env, quoted, reader)
            result.append(Redirection(span.type, None, fd))
            continue
        name = expand_redirect_target(span.target, env)
        if name is None:
            for redirection in result:
                redirection.close()
            record_status(1)
            raise ValueError(f"bash : {span.target}: ambiguous redirect")
        result.append(Redirection(span.type, name))
    return result


def strip_redirections(segment: str) -> str:
    """``segment`` with every redirection operator and target blanked out."""
    parts: list[str] = []
    last = 0
    for span in _spans(segment):
        parts.append(segment[last:span.start])
        parts.append(" ")
        last = span.end
    parts.append(segment[last:])
    return "".join(parts)


def _split_pipes(line: str) -> Iterator[str]:
    quote: str | None = None
    start = 0
    for index, char in enumerate(line):
        if quote is not None:
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char == "|":
            yield line[start:index]
            start = index + 1
    yield line[start:]


def parse_pipeline(
    line: str, env: Environment, reader: Reader | None = None
) -> list[Command]:
    """Commands of ``line``; empty when some command has no words."""
    commands: list[Command] = []
    for segment in _split_pipes(line):
        redirections = parse_redirections(segment, env, reader)
        args = expand_word(strip_redirections(segment), env)
        commands.append(Command(args, redirections))
        if not args:
            for command in commands:
                for redirection in command.redirections:
                    redirection.close()
            return []
    return commands