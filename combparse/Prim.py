import logging
from typing import Any, Callable, List, Optional, Tuple, TypeVar

from .Parsec import (
    Cursor, Done, Failure, Loop, ParseError, ParseException, Parsec, Result,
    S, Success, Suggestion, T,
)

log = logging.getLogger("combparse")

ItemType = TypeVar('ItemType')


def pure(value: T) -> Parsec[T]:
    """Return a parser that succeeds with a value without consuming input."""
    def parse(cursor: Cursor) -> Result[T]:
        return Success(value, cursor)
    return Parsec(parse)


def fail(msg: str, suggestions: Tuple[Suggestion, ...] = ()) -> Parsec[Any]:
    """A parser that always fails with a message, without consuming input."""
    error = ParseError(msg, suggestions)

    def parse(cursor: Cursor) -> Result[Any]:
        return Failure(cursor.offset, error)
    return Parsec(parse)


# Identity of (<|>)
empty: Parsec[Any] = fail("No alternative")


def try_parse(parser: Parsec[T]) -> Parsec[T]:
    """Try a parser, reporting any failure as if no input had been consumed."""
    def parse(cursor: Cursor) -> Result[T]:
        res = parser(cursor)
        if isinstance(res, Failure) and res.offset != cursor.offset:
            return Failure(cursor.offset, res.error)
        # Success advances as usual
        return res
    return Parsec(parse)


def look_ahead(parser: Parsec[T]) -> Parsec[T]:
    """Parse without consuming input. Failures are passed through unchanged."""
    def parse(cursor: Cursor) -> Result[T]:
        res = parser(cursor)
        if isinstance(res, Failure):
            return res
        return Success(res.value, cursor)
    return Parsec(parse)


def position() -> Parsec[int]:
    """Return the current input offset without consuming anything."""
    def parse(cursor: Cursor) -> Result[int]:
        return Success(cursor.offset, cursor)
    return Parsec(parse)


def lazy(thunk: Callable[[], Parsec[T]]) -> Parsec[T]:
    """
    Defer building a parser until it is first run.

    Needed for self-referential grammars: ``expr`` can mention ``lazy(expr)``
    without recursing forever while the grammar is being built.
    """
    cache: List[Parsec[T]] = []

    def parse(cursor: Cursor) -> Result[T]:
        if not cache:
            cache.append(thunk())
        return cache[0](cursor)
    return Parsec(parse)


defer = lazy


def tail_rec(step: Callable[[S], Parsec[Any]], initial: S) -> Parsec[Any]:
    """
    Stack-safe looping.

    ``step(state)`` must return a parser producing ``Loop(new_state)`` to go
    round again or ``Done(result)`` to stop. The cursor is threaded through
    every iteration with a plain while loop, so the Python stack does not grow
    with the number of iterations. The first failure aborts the loop.
    """
    def parse(cursor: Cursor) -> Result[Any]:
        state = initial
        while True:
            res = step(state)(cursor)
            if isinstance(res, Failure):
                return res
            cursor = res.remaining
            outcome = res.value
            if isinstance(outcome, Done):
                return Success(outcome.result, cursor)
            if not isinstance(outcome, Loop):
                raise TypeError(f"tail_rec step must produce Loop or Done, got {outcome!r}")
            state = outcome.state
    return Parsec(parse)


def _advancing(p: Parsec[T]) -> Parsec[T]:
    # A zero-width success is turned into an empty failure so that repetition stops
    def parse(cursor: Cursor) -> Result[T]:
        res = p(cursor)
        if isinstance(res, Success) and res.remaining.offset == cursor.offset:
            return Failure(cursor.offset, ParseError("parser succeeded without consuming input inside a repetition"))
        return res
    return Parsec(parse)


# Accumulators are persistent cons cells (item, rest) so that each iteration
# is O(1) and no list is shared between runs of the same parser.
Cons = Optional[Tuple[Any, Any]]


def _unwind(acc: Cons) -> List[Any]:
    items = []
    while acc is not None:
        item, acc = acc
        items.append(item)
    items.reverse()
    return items


def _many_accum(p: Parsec[ItemType]) -> Parsec[Cons]:
    step_p = _advancing(p)

    def step(acc: Cons) -> Parsec[Any]:
        return step_p.map(lambda item: Loop((item, acc))) | pure(Done(acc))
    return tail_rec(step, None)


def many(p: Parsec[T]) -> Parsec[List[T]]:
    """Parse zero or more occurrences of `p`."""
    return _many_accum(p).map(_unwind)


def skip_many(parser: Parsec[Any]) -> Parsec[None]:
    """Skips zero or more occurrences of `parser`."""
    step_p = _advancing(parser)

    def step(_: None) -> Parsec[Any]:
        return step_p.map(lambda _: Loop(None)) | pure(Done(None))
    return tail_rec(step, None)


def run_parser(parser: Parsec[T], input_str: str) -> Tuple[Optional[T], Optional[ParseError]]:
    """
    Run ``parser`` over the whole of ``input_str``.

    Returns ``(value, None)`` on success and ``(None, error)`` on failure.
    Check the error slot: a successful parser may well produce None.
    """
    res = parser(Cursor(input_str, 0))
    if isinstance(res, Failure):
        log.debug("parse failed at offset %d: %s", res.offset, res.error.message)
        return None, res.error
    return res.value, None


def parse(parser: Parsec[T], input_str: str) -> T:
    """Like ``run_parser`` but raises ParseException instead of returning the error."""
    value, err = run_parser(parser, input_str)
    if err is not None:
        raise ParseException(err)
    return value  # type: ignore
