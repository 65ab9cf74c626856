"""Syntax checks on a tokenised command line."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from itertools import pairwise
from typing import NoReturn

from .environment import Environment
from .heredoc import Reader, run_pending_heredocs
from .lexer import Token, TokenType

_QUOTES = "'\""


class ShellSyntaxError(Exception):
    """A command line the shell refuses to run."""


def _near(text: str) -> ShellSyntaxError:
    return ShellSyntaxError(f"bash: syntax error near unexpected token `{text}'")


def _unclosed(char: str) -> ShellSyntaxError:
    return ShellSyntaxError(
        f"bash: unexpected EOF while looking for matching `{char}'"
    )


def is_quoted_at(text: str, pos: int) -> bool:
    """True when ``text[pos]`` lies between a pair of quotes (or after an unclosed one)."""
    quote: str | None = None
    for index, char in enumerate(text[:pos + 1]):
        if quote is not None:
            if char == quote:
                quote = None
            elif index == pos:
                return True
        elif char in _QUOTES:
            quote = char
    return False


@dataclass
class _Checker:
    tokens: list[Token]
    line: str
    env: Environment
    reader: Reader | None

    def fail(self, error: ShellSyntaxError, heredocs: bool = False) -> NoReturn:
        if heredocs:
            run_pending_heredocs(self.line, self.env, self.reader)
        raise error

    def heredocs_before(self, index: int) -> int:
        tokens = self.tokens
        return sum(
            1
            for pos in range(min(index + 1, len(tokens)))
            if tokens[pos].type is TokenType.HEREDOC
            and pos + 1 < len(tokens)
            and tokens[pos + 1].type is TokenType.WORD
        )

    def heredoc_first(self) -> bool:
        tokens = self.tokens
        for index, token in enumerate(tokens):
            following = tokens[index + 1] if index + 1 < len(tokens) else None
            if token.type is TokenType.HEREDOC and following is not None:
                return True
            if (
                following is not None
                and token.type is TokenType.PIPE
                and following.type is TokenType.PIPE
            ):
                return False
            if token.type.is_redirect:
                return False
        return False

    def check_error_pairs(self) -> None:
        for index, token in enumerate(self.tokens):
            if token.type is TokenType.ERR:
                bad = token.text[1:2]
                if bad and bad in "<>|":
                    self.fail(_near(bad), self.heredocs_before(index) > 0)

    def check_ends(self) -> None:
        tokens = self.tokens
        first, last = tokens[0], tokens[-1]
        if last.type is TokenType.LAST_ERR:
            self.fail(_near(last.text), self.heredoc_first())
        if first.type is TokenType.PIPE or (
            len(tokens) == 1 and first.type.is_redirect
        ):
            self.fail(_near(first.text))
        if last.type is TokenType.PIPE:
            self.fail(_near(last.text), self.heredoc_first())
        if last.type.is_redirect and not tokens[-2].type.is_redirect:
            self.fail(_near("newline"), self.heredoc_first())
        for index, (prev, cur) in enumerate(pairwise(tokens), start=1):
            if prev.type is TokenType.PIPE and cur.type is TokenType.PIPE:
                self.fail(_near("|"), self.heredocs_before(index) > 0)

    def check_operators(self) -> None:
        for index, (prev, cur) in enumerate(pairwise(self.tokens), start=1):
            if prev.type.is_redirect and (
                cur.type.is_redirect or cur.type is TokenType.PIPE
            ):
                self.fail(_near(cur.text), self.heredocs_before(index) > 0)

    def check_quotes(self, tokens: Sequence[Token]) -> None:
        pending: Token | None = None
        for token in tokens:
            if pending is None:
                if token.type.is_quote:
                    pending = token
            elif token.type is pending.type:
                pending = None
        if pending is not None:
            has_heredoc = any(t.type is TokenType.HEREDOC for t in tokens)
            self.fail(_unclosed(pending.text[:1]), has_heredoc)

    def check_echo_quotes(self) -> None:
        for index, (prev, cur) in enumerate(pairwise(self.tokens), start=1):
            if prev.text == "echo" and cur.type.is_quote:
                self.check_quotes(self.tokens[index:])


def check_syntax(
    tokens: Iterable[Token],
    line: str,
    env: Environment,
    reader: Reader | None = None,
) -> Token | None:
    """Validate ``tokens`` taken from ``line``.

    Raises ShellSyntaxError on the first problem found. Where the line
    holds here-documents that come before the error, their bodies are read
    first. Returns the last token, or None for an empty list.
    """
    token_list = list(tokens)
    if not token_list:
        return None
    checker = _Checker(token_list, line, env, reader)
    checker.check_error_pairs()
    checker.check_ends()
    checker.check_operators()
    checker.check_quotes(token_list)
    checker.check_echo_quotes()
    return token_list[-1]