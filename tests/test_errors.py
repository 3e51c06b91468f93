from hypothesis import given, strategies as st

from combparse.Parsec import ParseError, Suggestion

suggestions = st.builds(Suggestion, st.text(max_size=5), st.text(max_size=5))
errors = st.builds(ParseError, st.text(max_size=10), st.lists(suggestions, max_size=3))


def test_suggestions_are_stored_as_tuple():
    err = ParseError("x", [Suggestion("a", "hint")])
    assert err.suggestions == (Suggestion("a", "hint"),)
    assert hash(err) == hash(ParseError("x", (Suggestion("a", "hint"),)))


def test_equality():
    assert ParseError("x") == ParseError("x", ())
    assert ParseError("x", [Suggestion("a")]) != ParseError("x", [Suggestion("b")])
    assert ParseError("x") != ParseError("y")


@given(st.lists(errors, max_size=6))
def test_errors_sort_and_dedupe(errs):
    ordered = sorted(set(errs))
    assert ordered == sorted(ordered)
    assert len(ordered) == len(set(errs))


def test_ordering_is_by_message_then_suggestions():
    a = ParseError("a", [Suggestion("z")])
    b1 = ParseError("b", [Suggestion("a")])
    b2 = ParseError("b", [Suggestion("b")])
    assert sorted([b2, a, b1]) == [a, b1, b2]


@given(errors, st.lists(suggestions, max_size=3))
def test_with_suggestions_prepends_without_reordering(err, earlier):
    combined = err.with_suggestions(earlier)
    assert combined.message == err.message
    assert combined.suggestions == tuple(earlier) + err.suggestions


def test_str_is_readable():
    assert str(ParseError("expecting 'a'")) == "Parse error: expecting 'a'"
    err = ParseError("bad", [Suggestion("let", "keyword"), Suggestion("x")])
    assert str(err) == "Parse error: bad (suggestions: let (keyword), x)"
