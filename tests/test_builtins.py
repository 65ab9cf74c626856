import io
import os

import pytest

from minishell.builtins import (
    ShellExit,
    change_directory,
    echo,
    exit_builtin,
    export,
    is_builtin,
    is_n_option,
    is_valid_identifier,
    pwd,
    run_builtin,
    show_env,
    unset,
)
from minishell.environment import Environment


def test_is_builtin():
    assert is_builtin("echo") and is_builtin("unset")
    assert not is_builtin("ls")


@pytest.mark.parametrize(
    "arg,expected", [("-n", True), ("-nnn", True), ("-", False), ("-n-", False), ("n", False)]
)
def test_is_n_option(arg, expected):
    assert is_n_option(arg) is expected


def test_echo_plain():
    out = io.StringIO()
    echo(["echo", "a", "b"], out)
    assert out.getvalue() == "a b\n"


def test_echo_without_newline():
    out = io.StringIO()
    echo(["echo", "-n", "-nn", "a"], out)
    assert out.getvalue() == "a"


@pytest.mark.parametrize(
    "arg,expected",
    [("A", True), ("_x=1", True), ("A+=b", True), ("1A", False), ("A-B", False)],
)
def test_is_valid_identifier(arg, expected):
    assert is_valid_identifier(arg) is expected


def test_export_and_append():
    env = Environment.from_strings(["A=x"])
    export(["export", "A+=y", "B=2", "C"], env, io.StringIO())
    assert env.lookup("A") == "xy"
    assert env.lookup("B") == "2"
    assert "C" in env and env.lookup("C") is None


def test_export_invalid_returns_one():
    env = Environment()
    assert export(["export", "9x=1"], env, io.StringIO()) == 1
    assert "9x" not in env


def test_export_without_name_keeps_value():
    env = Environment.from_strings(["A=x"])
    export(["export", "A"], env, io.StringIO())
    assert env.lookup("A") == "x"


def test_env_and_unset():
    env = Environment.from_strings(["A=1", "B=2"])
    unset(["unset", "A"], env)
    out = io.StringIO()
    show_env(env, out)
    assert out.getvalue() == "B=2\n"


def test_pwd_and_cd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    env = Environment.from_strings([f"PWD={tmp_path}", "OLDPWD=x"])
    (tmp_path / "sub").mkdir()
    assert change_directory(["cd", "sub"], env) == 0
    assert env.lookup("PWD") == os.getcwd()
    assert env.lookup("OLDPWD") == str(tmp_path.resolve())
    out = io.StringIO()
    pwd(out)
    assert out.getvalue() == os.getcwd() + "\n"


def test_cd_missing_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    env = Environment()
    assert change_directory(["cd", "nope"], env) == 1
    assert os.getcwd() == str(tmp_path.resolve())


def test_exit_codes():
    with pytest.raises(ShellExit) as info:
        exit_builtin(["exit"])
    assert info.value.code == 0
    with pytest.raises(ShellExit) as info:
        exit_builtin(["exit", "abc"])
    assert info.value.code == 255
    with pytest.raises(ShellExit) as info:
        exit_builtin(["exit", " 7 "])
    assert info.value.code == 7


def test_exit_too_many_arguments():
    assert exit_builtin(["exit", "1", "2"]) == 1


def test_run_builtin_dispatch():
    out = io.StringIO()
    assert run_builtin(["echo", "x"], Environment(), out) == 0
    assert out.getvalue() == "x\n"