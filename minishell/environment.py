"""The shell's environment variables and command lookup."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator

from .strutil import split_fields


class Environment:
    """Ordered set of variables; a variable may be declared without a value."""

    def __init__(self) -> None:
        self._vars: dict[str, str | None] = {}

    @classmethod
    def from_strings(cls, entries: Iterable[str]) -> "Environment":
        """Build from ``NAME=value`` strings; entries without ``=`` are skipped."""
        env = cls()
        for entry in entries:
            name, eq, value = entry.partition("=")
            if eq:
                env._vars[name] = value
        return env

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._vars))

    def __len__(self) -> int:
        return len(self._vars)

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def set(self, name: str, value: str | None) -> None:
        """Change the value of an existing variable; unknown names are ignored."""
        if name in self._vars:
            self._vars[name] = value

    def add(self, name: str, value: str | None) -> None:
        """Declare ``name``; a None value leaves an existing value untouched."""
        if name in self._vars:
            if value is not None:
                self._vars[name] = value
        else:
            self._vars[name] = value

    def remove(self, name: str) -> None:
        """Delete ``name`` if it exists."""
        self._vars.pop(name, None)

    def lookup(self, name: str) -> str | None:
        """Value of ``name``, or None when unset or declared without a value."""
        return self._vars.get(name)

    def to_strings(self) -> list[str]:
        """All variables as ``NAME=value`` strings, in declaration order."""
        return [f"{name}={value or ''}" for name, value in self._vars.items()]

    def search_paths(self) -> list[str]:
        """Directories listed in PATH, empty when PATH is not set."""
        path = self._vars.get("PATH")
        if path is None:
            return []
        return split_fields(path, ":")

    def format_env(self) -> str:
        """Text printed by ``env``: one ``NAME=value`` line per valued variable."""
        return "".join(
            f"{name}={value}\n"
            for name, value in self._vars.items()
            if value is not None
        )


def resolve_command(paths: Iterable[str] | None, name: str) -> str | None:
    """Find the executable for ``name``, searching ``paths`` unless it holds a ``/``."""
    if "/" in name:
        return name if os.access(name, os.X_OK) else None
    for directory in paths or ():
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None