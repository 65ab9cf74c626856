"""The last exit status, shared across the shell."""

from __future__ import annotations


class _StatusHolder:
    code: int = 0


_holder = _StatusHolder()


def record_status(code: int) -> int:
    """Remember ``code`` as the last exit status and return it."""
    _holder.code = code
    return code


def current_status() -> int:
    """The last recorded exit status."""
    return _holder.code