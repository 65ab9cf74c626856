import pytest

from minishell.environment import Environment
from minishell.redirect_expansion import (
    LEADING_BLANK,
    SEVERAL_WORDS,
    SINGLE_WORD,
    SURROUNDED,
    TRAILING_BLANK,
    UNSET,
    classify_ambiguity,
    expand_redirect_target,
    is_empty_quotes,
)


def make_env(**values):
    return Environment.from_strings(f"{name}={value}" for name, value in values.items())


@pytest.mark.parametrize("text", ['""', "''"])
def test_empty_quotes_detected(text):
    assert is_empty_quotes(text) is True


@pytest.mark.parametrize("text", ['"a"', "'", "", "x", None, '""x'])
def test_non_empty_quotes_rejected(text):
    assert is_empty_quotes(text) is False


@pytest.mark.parametrize(
    "value, code",
    [
        (None, 1),
        (" a", 2),
        ("a ", 3),
        (" a ", 4),
        ("a b", 5),
        ("a", 6),
    ],
)
def test_ambiguity_codes_match_header_values(value, code):
    assert classify_ambiguity(value) == code


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, UNSET),
        ("a b", SEVERAL_WORDS),
        (" a ", SURROUNDED),
        (" a", LEADING_BLANK),
        ("a ", TRAILING_BLANK),
        ("a", SINGLE_WORD),
    ],
)
def test_classify_ambiguity(value, expected):
    assert classify_ambiguity(value) == expected


def test_plain_name_unchanged():
    assert expand_redirect_target("out.txt", make_env()) == "out.txt"


def test_only_first_word_taken():
    assert expand_redirect_target("  out rest", make_env()) == "out"


def test_bare_variable_expanded():
    assert expand_redirect_target("$F", make_env(F="file")) == "file"


def test_unset_bare_variable_is_ambiguous():
    assert expand_redirect_target("$NOPE", make_env()) is None


def test_empty_bare_variable_is_ambiguous():
    assert expand_redirect_target("$F", make_env(F="")) is None


def test_several_words_is_ambiguous():
    assert expand_redirect_target("$F", make_env(F="a b")) is None


def test_double_quotes_protect_spaces():
    assert expand_redirect_target('"$F"', make_env(F="a b")) == "a b"


def test_single_quotes_keep_dollar():
    assert expand_redirect_target("'$F'", make_env(F="x")) == "$F"


def test_empty_quotes_give_empty_name():
    assert expand_redirect_target('""', make_env()) == ""


def test_quoted_unset_variable_gives_empty_name():
    assert expand_redirect_target('"$NOPE"', make_env()) == ""


def test_literal_and_variable_joined():
    assert expand_redirect_target("pre_$F", make_env(F="x")) == "pre_x"


def test_leading_blank_after_word_is_ambiguous():
    assert expand_redirect_target("a$F", make_env(F=" x")) is None


def test_trailing_blank_before_word_is_ambiguous():
    assert expand_redirect_target("$F.txt", make_env(F="x ")) is None


def test_surrounded_value_alone_is_kept():
    assert expand_redirect_target("$F", make_env(F=" x ")) == " x "


def test_unset_variable_beside_word_vanishes():
    assert expand_redirect_target("$NOPE.log", make_env()) == ".log"


def test_two_unset_variables_are_ambiguous():
    assert expand_redirect_target("$A$B", make_env()) is None


def test_empty_text_is_ambiguous():
    assert expand_redirect_target("", make_env()) is None