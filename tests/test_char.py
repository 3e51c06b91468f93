from hypothesis import assume, given
from hypothesis import strategies as st

from combparse.Char import (
    alpha_num,
    any_char,
    char,
    digit,
    letter,
    none_of,
    one_of,
    satisfy,
    space,
    spaces,
    string,
)
from combparse.Parsec import Cursor, Failure, Success, Suggestion
from combparse.Prim import run_parser


def run(parser, input_str):
    return run_parser(parser, input_str)


# --- Basic Character Parsers ---


@given(st.characters(), st.characters())
def test_char_parser(c, other):
    # Should match the character
    res, err = run(char(c), c)
    assert res == c
    assert err is None

    # Should fail on different character
    assume(other != c)
    res_fail, err_fail = run(char(c), other)
    assert res_fail is None
    assert err_fail.message == f"expecting '{c}'"
    assert err_fail.suggestions == (Suggestion(c, f"'{c}'"),)


def test_char_at_end_of_input():
    res = char('a')(Cursor("", 0))
    assert isinstance(res, Failure)
    assert res.offset == 0


@given(st.characters(), st.text())
def test_satisfy(c, text):
    # Predicate: matches specific char
    p = satisfy(lambda x: x == c)

    if text.startswith(c):
        res, _ = run(p, text)
        assert res == c
    else:
        res, err = run(p, text)
        assert res is None
        assert err is not None


def test_satisfy_messages():
    _, err_eof = run(satisfy(str.isdigit), "")
    assert err_eof.message == "unexpected end of input"
    _, err_tok = run(satisfy(str.isdigit), "x")
    assert err_tok.message == "unexpected 'x'"


@given(st.text(min_size=1))
def test_one_of(text):
    p = one_of(text)

    # Should match any char from the allowed set
    res, _ = run(p, text[-1])
    assert res == text[-1]


@given(st.text(min_size=1))
def test_none_of(text):
    p = none_of(text)

    # Should fail for char in the set
    res, err = run(p, text[0])
    assert res is None
    assert err is not None


def test_character_classes():
    assert run(digit(), "5")[0] == "5"
    assert run(digit(), "x")[1].message == "expecting digit"
    assert run(letter(), "q")[0] == "q"
    assert run(alpha_num(), "9")[0] == "9"
    assert run(any_char(), "%")[0] == "%"
    assert run(any_char(), "")[1].message == "expecting any character"
    assert run(space(), "\t")[0] == "\t"


def test_spaces_skips_whitespace():
    p = spaces() > letter()
    assert run(p, "  \n z")[0] == "z"
    assert run(p, "z")[0] == "z"


# --- String Parsers ---


@given(st.text())
def test_string_parser(s):
    p = string(s)

    # Positive case
    res, err = run(p, s + "suffix")
    assert res == s
    assert err is None


@given(st.text(min_size=1), st.characters())
def test_string_partial_match_consumes_nothing(s, c):
    assume(c != s[-1])
    partial = s[:-1] + c
    res = string(s)(Cursor(partial, 0))
    assert isinstance(res, Failure)
    assert res.offset == 0
    # Should expect the full string
    assert f"'{s}'" in str(res.error)
    assert res.error.suggestions == (Suggestion(s, f"'{s}'"),)


def test_string_empty_succeeds_without_consuming():
    res = string("")(Cursor("123", 1))
    assert res == Success("", Cursor("123", 1))


def test_string_alternatives_share_prefix():
    # A partial match of 'let' does not stop 'lambda' from being tried
    p = string("let") | string("lambda")
    assert run(p, "lambda")[0] == "lambda"


def test_string_alternatives_collect_suggestions():
    p = string("true") | string("false") | string("null")
    _, err = run(p, "nope")
    assert [s.auto_complete for s in err.suggestions] == ["true", "false", "null"]
