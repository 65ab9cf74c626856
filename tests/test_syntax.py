import pytest

from minishell.environment import Environment
from minishell.lexer import Token, TokenType, tokenize
from minishell.syntax import ShellSyntaxError, check_syntax, is_quoted_at


def make_reader(lines):
    remaining = iter(lines)
    prompts = []

    def reader(prompt):
        prompts.append(prompt)
        return next(remaining, None)

    return reader, prompts


@pytest.fixture
def env():
    return Environment.from_strings(["USER=bob"])


def check(line, env, reader=None):
    return check_syntax(tokenize(line), line, env, reader)


def test_is_quoted_at():
    assert is_quoted_at("a'b'c", 2) is True
    assert is_quoted_at("a'b'c", 1) is False
    assert is_quoted_at("a'b'c", 3) is False
    assert is_quoted_at("a'bc", 3) is True
    assert is_quoted_at("abc", 1) is False


def test_valid_line_returns_last_token(env):
    tokens = tokenize("ls -l | wc")
    assert check_syntax(tokens, "ls -l | wc", env) == tokens[-1]


def test_empty_tokens(env):
    assert check_syntax([], "", env) is None


@pytest.mark.parametrize(
    "line, token",
    [
        ("| ls", "|"),
        ("ls |", "|"),
        ("ls >", "newline"),
        ("ls > | wc", "|"),
        ("ls < > f", ">"),
        ("ls || wc", "|"),
        ("<", "<"),
    ],
)
def test_unexpected_token(env, line, token):
    with pytest.raises(ShellSyntaxError) as info:
        check(line, env)
    assert str(info.value) == f"bash: syntax error near unexpected token `{token}'"


def test_unclosed_quote(env):
    with pytest.raises(ShellSyntaxError) as info:
        check('echo "abc', env)
    assert str(info.value) == "bash: unexpected EOF while looking for matching `\"'"


def test_closed_quotes_pass(env):
    tokens = tokenize("echo 'a b' \"c\"")
    assert check_syntax(tokens, "echo 'a b' \"c\"", env).type is TokenType.DOUBLE_QUOTE


def test_heredoc_read_before_pipe_error(env):
    reader, prompts = make_reader(["body", "EOF", "unused"])
    with pytest.raises(ShellSyntaxError, match="`\\|'"):
        check("cat << EOF |", env, reader)
    assert prompts == ["> ", "> "]


def test_no_heredoc_read_without_heredoc(env):
    reader, prompts = make_reader(["line"])
    with pytest.raises(ShellSyntaxError):
        check("ls | | wc", env, reader)
    assert prompts == []


def test_err_pair_token(env):
    tokens = [
        Token("ls", TokenType.WORD),
        Token("<>", TokenType.ERR),
        Token("f", TokenType.WORD),
    ]
    with pytest.raises(ShellSyntaxError) as info:
        check_syntax(tokens, "ls <> f", env)
    assert str(info.value).endswith("`>'")


def test_last_err_token(env):
    tokens = [Token("ls", TokenType.WORD), Token("|>", TokenType.LAST_ERR)]
    with pytest.raises(ShellSyntaxError) as info:
        check_syntax(tokens, "ls |>", env)
    assert str(info.value).endswith("`|>'")


def test_echo_followed_by_unbalanced_quote(env):
    tokens = [
        Token("'", TokenType.SINGLE_QUOTE),
        Token("echo", TokenType.WORD),
        Token("'", TokenType.SINGLE_QUOTE),
        Token("x", TokenType.WORD),
    ]
    with pytest.raises(ShellSyntaxError, match="matching `'"):
        check_syntax(tokens, "' echo ' x", env)