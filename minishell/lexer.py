"""Splitting a command line into tokens for syntax checking."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from .strutil import is_blank

_QUOTES = "'\""
_OPERATORS = frozenset("<>|$'\"")
_ERROR_PAIRS = frozenset({"<>", "><", "||", ">|", "<|"})
_LAST_ERROR_PAIRS = frozenset({"|>", "|<"})


class TokenType(Enum):
    WORD = auto()
    PIPE = auto()
    INPUT = auto()
    OUTPUT = auto()
    HEREDOC = auto()
    APPEND = auto()
    DOUBLE_QUOTE = auto()
    SINGLE_QUOTE = auto()
    DOLLAR = auto()
    ERR = auto()
    LAST_ERR = auto()

    @property
    def is_redirect(self) -> bool:
        return self in (
            TokenType.INPUT,
            TokenType.OUTPUT,
            TokenType.APPEND,
            TokenType.HEREDOC,
        )

    @property
    def is_quote(self) -> bool:
        return self in (TokenType.DOUBLE_QUOTE, TokenType.SINGLE_QUOTE)


@dataclass(frozen=True)
class Token:
    """A piece of the command line and its kind."""

    text: str
    type: TokenType


_SIMPLE = {
    "<": TokenType.INPUT,
    ">": TokenType.OUTPUT,
    "<<": TokenType.HEREDOC,
    ">>": TokenType.APPEND,
    "|": TokenType.PIPE,
    '"': TokenType.DOUBLE_QUOTE,
    "'": TokenType.SINGLE_QUOTE,
    "$": TokenType.DOLLAR,
}


def classify(text: str) -> TokenType:
    """Kind of token ``text`` stands for when it is a whole token."""
    if text in _SIMPLE:
        return _SIMPLE[text]
    if text in _ERROR_PAIRS:
        return TokenType.ERR
    if text in _LAST_ERROR_PAIRS:
        return TokenType.LAST_ERR
    return TokenType.WORD


def _token(text: str) -> Token:
    return Token(text, classify(text))


def split_chunk(chunk: str) -> list[Token]:
    """Split a blank-free chunk into operator, quote and word tokens.

    Text between quotes becomes a single word token; an unclosed quote
    runs to the end of the chunk.
    """
    tokens: list[Token] = []
    pos = 0
    length = len(chunk)
    while pos < length:
        pair = chunk[pos:pos + 2]
        char = chunk[pos]
        if pair in ("<<", ">>"):
            tokens.append(_token(pair))
            pos += 2
        elif char in _QUOTES:
            tokens.append(_token(char))
            if pos + 1 == length:
                pos += 1
                continue
            end = chunk.find(char, pos + 1)
            if end == -1:
                tokens.append(Token(chunk[pos + 1:], TokenType.WORD))
                pos = length
            else:
                tokens.append(Token(chunk[pos + 1:end], TokenType.WORD))
                tokens.append(_token(char))
                pos = end + 1
        elif char in _OPERATORS:
            tokens.append(_token(char))
            pos += 1
        else:
            end = pos + 1
            while end < length and chunk[end] not in _OPERATORS:
                end += 1
            tokens.append(_token(chunk[pos:end]))
            pos = end
    return tokens


def _chunks(line: str) -> Iterator[str]:
    current: list[str] = []
    quote: str | None = None
    for char in line:
        if quote is not None:
            current.append(char)
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
            current.append(char)
        elif is_blank(char):
            if current:
                yield "".join(current)
                current = []
        else:
            current.append(char)
    if current:
        yield "".join(current)


def tokenize(line: str) -> list[Token]:
    """All tokens of ``line``; blanks outside quotes separate chunks."""
    return [token for chunk in _chunks(line) for token in split_chunk(chunk)]