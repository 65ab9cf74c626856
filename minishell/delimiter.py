"""Normalisation of here-document delimiters."""

from __future__ import annotations

from .expansion import BLANK, VARIABLE, split_segments
from .redirect_expansion import is_empty_quotes


def normalize_delimiter(text: str) -> tuple[str, bool]:
    """Strip quotes from a here-document delimiter.

    Returns the delimiter and whether it counts as quoted: every piece of
    it came from inside quotes, which turns off expansion of the body.
    Variables are not expanded; only the first word is used.
    """
    if is_empty_quotes(text):
        return "", True
    parts: list[tuple[str, bool]] = []
    started = False
    for segment in split_segments(text):
        if segment.kind == BLANK:
            if started:
                break
            continue
        started = True
        if segment.quoted:
            if segment.text:
                parts.append((segment.text, True))
        elif segment.kind == VARIABLE:
            parts.append(("$" + segment.text, False))
        else:
            parts.append((segment.text, False))
    if not parts:
        return "", True
    return "".join(part for part, _ in parts), all(quoted for _, quoted in parts)