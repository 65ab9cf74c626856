"""Commands the shell runs itself."""

from __future__ import annotations

import os
import re
import sys
from typing import TextIO

from .environment import Environment
from .state import record_status
from .strutil import is_valid_exit_arg, parse_exit_number

BUILTINS = frozenset({"echo", "cd", "export", "pwd", "env", "exit", "unset"})

_N_OPTION = re.compile(r"-n+")
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\+?=.*)?", re.DOTALL)


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with ``code``."""

    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code


class _CwdMemory:
    path: str = ""


_cwd_memory = _CwdMemory()


def _error(message: str) -> None:
    sys.stderr.write(message)
    sys.stderr.flush()


def _current_dir() -> str:
    try:
        _cwd_memory.path = os.getcwd()
    except OSError:
        pass
    return _cwd_memory.path


def is_builtin(name: str) -> bool:
    """True when ``name`` is run by the shell itself."""
    return name in BUILTINS


def run_builtin(args: list[str], env: Environment, out: TextIO) -> int:
    """Run the builtin named by ``args[0]`` and return its status."""
    name = args[0]
    if name == "echo":
        status = echo(args, out)
    elif name == "cd":
        status = change_directory(args, env)
    elif name == "export":
        status = export(args, env, out)
    elif name == "pwd":
        status = pwd(out)
    elif name == "env":
        status = show_env(env, out)
    elif name == "exit":
        status = exit_builtin(args)
    elif name == "unset":
        status = unset(args, env)
    else:
        raise ValueError(f"{name}: not a builtin")
    return record_status(status)


def is_n_option(arg: str | None) -> bool:
    """True for ``-n``, ``-nn`` and so on."""
    return arg is not None and _N_OPTION.fullmatch(arg) is not None


def echo(args: list[str], out: TextIO) -> int:
    """Print the arguments; leading ``-n`` options drop the newline."""
    words = args[1:]
    newline = True
    while words and is_n_option(words[0]):
        newline = False
        words = words[1:]
    out.write(" ".join(words) + ("\n" if newline else ""))
    return 0


def _home(env: Environment) -> str:
    return env.lookup("HOME") or os.path.expanduser("~")


def change_directory(args: list[str], env: Environment) -> int:
    """Change directory, updating PWD and OLDPWD."""
    if len(args) < 2:
        os.chdir(_home(env))
        env.set("PWD", _current_dir())
        return 0
    target = args[1]
    old = _current_dir()
    status = 0
    try:
        os.getcwd()
        lost = False
    except OSError:
        lost = True
    if lost and target == "..":
        os.chdir(_home(env))
    else:
        try:
            os.chdir(target)
        except OSError:
            _error(f"cd: {target}: No such file or directory\n")
            status = 1
    env.set("OLDPWD", old)
    env.set("PWD", _current_dir())
    return status


def is_valid_identifier(arg: str) -> bool:
    """True for ``NAME``, ``NAME=value`` and ``NAME+=value``."""
    return _IDENTIFIER.fullmatch(arg) is not None


def export(args: list[str], env: Environment, out: TextIO) -> int:
    """Declare variables, or list them all when called without arguments."""
    if len(args) < 2:
        for name in env:
            value = env.lookup(name)
            suffix = "" if value is None else f'="{value}"'
            out.write(f"declare -x {name}{suffix}\n")
        return 0
    status = 0
    for arg in args[1:]:
        if not is_valid_identifier(arg):
            _error(f"export: {arg}: not a valid identifier\n")
            status = 1
            continue
        name, eq, value = arg.partition("=")
        if not eq:
            env.add(name, None)
        elif name.endswith("+"):
            name = name[:-1]
            env.add(name, (env.lookup(name) or "") + value)
        else:
            env.add(name, value)
    return status


def pwd(out: TextIO) -> int:
    """Print the working directory, or the last one known if it is gone."""
    out.write(_current_dir() + "\n")
    return 0


def show_env(env: Environment, out: TextIO) -> int:
    """Print every variable that has a value."""
    out.write(env.format_env())
    return 0


def unset(args: list[str], env: Environment) -> int:
    """Remove the named variables."""
    for name in args[1:]:
        env.remove(name)
    return 0


def exit_builtin(args: list[str]) -> int:
    """Raise ShellExit, or return 1 when given too many arguments."""
    _error("exit\n")
    if len(args) < 2:
        raise ShellExit(record_status(0))
    arg = args[1]
    if not is_valid_exit_arg(arg):
        _error(f"exit :{arg}: numeric argument required\n")
        raise ShellExit(record_status(255))
    if len(args) > 2:
        _error("exit: too many arguments\n")
        return record_status(1)
    try:
        value = parse_exit_number(arg)
    except ValueError as exc:
        _error(f"{exc}\n")
        raise ShellExit(record_status(255)) from None
    raise ShellExit(record_status(value % 256))