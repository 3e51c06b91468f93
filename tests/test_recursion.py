import sys

from combparse.Char import char, digit, string
from combparse.Combinators import between, chainl1, count, many_till, sep_by, sep_end_by
from combparse.Parsec import Done, Loop
from combparse.Prim import lazy, many, pure, run_parser, skip_many, tail_rec

N = 100_000


def test_stack_safety():
    input_str = "a" * N
    parser = many(char('a'))
    res, err = run_parser(parser, input_str)
    assert err is None
    assert len(res) == N


def test_stack_safety_below_recursion_limit():
    # The repetition count is far beyond what recursive descent could survive
    assert N > sys.getrecursionlimit() * 10
    res, err = run_parser(skip_many(char('a')) >> pure("done"), "a" * N)
    assert err is None
    assert res == "done"


def test_sep_by_many_elements():
    input_str = ",".join(["1"] * N)
    res, err = run_parser(sep_by(digit(), char(',')), input_str)
    assert err is None
    assert len(res) == N


def test_sep_end_by_many_elements():
    parser = sep_end_by(char('a'), char(';'))
    for input_str in (";".join(["a"] * N), "a;" * N):
        res, err = run_parser(parser, input_str)
        assert err is None
        assert len(res) == N


def test_chainl1_long_chain():
    input_str = "+".join(["1"] * N)
    expr = chainl1(digit().map(int), char('+').map(lambda _: lambda x, y: x + y))
    res, err = run_parser(expr, input_str)
    assert err is None
    assert res == N


def test_count_and_many_till_long_input():
    res, err = run_parser(count(N, char('x')), "x" * N)
    assert err is None
    assert len(res) == N

    res, err = run_parser(many_till(char('x'), char(';')), "x" * N + ";")
    assert err is None
    assert len(res) == N


def test_tail_rec_counts_up():
    # Loop over a state without consuming anything until the counter hits N
    def step(k):
        if k == N:
            return pure(Done(k))
        return pure(Loop(k + 1))

    res, err = run_parser(tail_rec(step, 0), "")
    assert err is None
    assert res == N


def test_tail_rec_threads_cursor():
    def step(acc):
        return char('a').map(lambda _: Loop(acc + 1)) | string(";").map(lambda _: Done(acc))

    res, err = run_parser(tail_rec(step, 0), "aaaa;")
    assert err is None
    assert res == 4


def test_tail_rec_aborts_on_failure():
    def step(acc):
        return char('a').map(lambda _: Loop(acc + 1))

    res, err = run_parser(tail_rec(step, 0), "aab")
    assert res is None
    assert err.message == "expecting 'a'"


def test_recursive_grammar_with_lazy():
    # nested := '[' nested* ']'   ->   depth of the deepest bracket
    def nested():
        return between(char('['), char(']'), many(lazy(nested))).map(
            lambda inner: 1 + max(inner, default=0)
        )

    parser = nested()
    assert run_parser(parser, "[]") == (1, None)
    assert run_parser(parser, "[[][[]]]") == (3, None)

    res, err = run_parser(parser, "[[]")
    assert res is None
    assert err is not None
