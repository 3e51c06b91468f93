from typing import Any, Callable, List, Optional, Sequence, Tuple

from .Parsec import Cursor, Done, Failure, Loop, ParseError, Parsec, Result, Success, T
from .Prim import (
    _advancing, _many_accum, _unwind, empty, log, look_ahead, many, pure,
    skip_many, tail_rec, try_parse,
)
from .Char import any_char


# 1. choice: Tries parsers in order until one succeeds
def choice(parsers: Sequence[Parsec[T]]) -> Parsec[T]:
    """
    Applies a list of parsers in order until one succeeds.
    An empty list gives the identity of choice, which always fails.
    """
    if not parsers:
        return empty
    result = parsers[0]
    for p in parsers[1:]:
        result = result | p
    return result


# 2. count: Parses n occurrences of a parser
def count(n: int, p: Parsec[T]) -> Parsec[List[T]]:
    if n <= 0:
        return pure([])

    def step(st: Tuple[int, Any]) -> Parsec[Any]:
        k, acc = st
        if k == n:
            return pure(Done(acc))
        return p.map(lambda x: Loop((k + 1, (x, acc))))
    return tail_rec(step, (0, None)).map(_unwind)


# 3. between: Parses an opening parser, a main parser, and a closing parser
def between(open: Parsec[Any], close: Parsec[Any], p: Parsec[T]) -> Parsec[T]:
    """Parses 'open', then 'p', then 'close', returning the result of 'p'."""
    return open > (p < close)


# 4. option: Tries a parser, returning a default value on failure
def option(x: T, p: Parsec[T]) -> Parsec[T]:
    """
    Tries parser p; returns its result if successful, else x if it fails without consuming input.
    """
    return p | pure(x)


# 5. optionMaybe: Tries a parser, returning Optional[T]
def option_maybe(p: Parsec[T]) -> Parsec[Optional[T]]:
    return p | pure(None)


# 6. optional: Tries a parser, discarding the result
def optional(p: Parsec[Any]) -> Parsec[None]:
    return p.map(lambda _: None) | pure(None)


# 7. many1: Applies a parser one or more times
def many1(p: Parsec[T]) -> Parsec[List[T]]:
    return p.bind(lambda x: many(p).map(lambda xs: [x] + xs))


# 8. skipMany1: Skips one or more occurrences of a parser
def skip_many1(p: Parsec[Any]) -> Parsec[None]:
    return p > skip_many(p)


# 9. sepBy1: Parses one or more occurrences separated by a separator
def sep_by1(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    rest = _many_accum(sep > p)
    return p.bind(lambda x: rest.map(lambda acc: [x] + _unwind(acc)))


# 10. sepBy: Parses zero or more occurrences separated by a separator
def sep_by(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    return sep_by1(p, sep) | pure([])


# 11. endBy: Parses zero or more occurrences, each ended by a separator
def end_by(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    return many(p < sep)


# 12. sepEndBy: separated and optionally ended by a separator
def sep_end_by1(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    def step(acc: Any) -> Parsec[Any]:
        # After a separator the next item is optional, so a trailing sep is fine
        after_sep = p.map(lambda y: Loop((y, acc))) | pure(Done(acc))
        # A separator and item that both match nothing end the loop
        return _advancing(sep > after_sep) | pure(Done(acc))
    return p.bind(lambda x: tail_rec(step, (x, None))).map(_unwind)


def sep_end_by(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    return sep_end_by1(p, sep) | pure([])


# 13. chainl1: Left-associative operator chain
def chainl1(p: Parsec[T], op: Parsec[Callable[[T, T], T]]) -> Parsec[T]:
    """
    Parses one or more p separated by op, applying op left-associatively.
    Runs on the trampoline, so long chains do not grow the stack.
    """
    op_then_p = _advancing(op & p)

    def step(acc: T) -> Parsec[Any]:
        return op_then_p.map(lambda fy: Loop(fy[0](acc, fy[1]))) | pure(Done(acc))
    return p.bind(lambda x: tail_rec(step, x))


# 14. chainr1: Right-associative operator chain
def chainr1(p: Parsec[T], op: Parsec[Callable[[T, T], T]]) -> Parsec[T]:
    """Parses one or more p separated by op, applying op right-associatively."""
    def fold_right(first: T, rest: List[Tuple[Callable[[T, T], T], T]]) -> T:
        # first f1 x1 f2 x2 ... fn xn  ->  f1(first, f2(x1, ... fn(x(n-1), xn)))
        if not rest:
            return first
        acc = rest[-1][1]
        for i in range(len(rest) - 1, 0, -1):
            acc = rest[i][0](rest[i - 1][1], acc)
        return rest[0][0](first, acc)

    return p.bind(lambda x: many(op & p).map(lambda rest: fold_right(x, rest)))


# 15. chainl / chainr: chains with a default value
def chainl(p: Parsec[T], op: Parsec[Callable[[T, T], T]], x: T) -> Parsec[T]:
    return chainl1(p, op) | pure(x)


def chainr(p: Parsec[T], op: Parsec[Callable[[T, T], T]], x: T) -> Parsec[T]:
    return chainr1(p, op) | pure(x)


# 16. notFollowedBy: Succeeds only if p fails
def not_followed_by(p: Parsec[Any]) -> Parsec[None]:
    attempt = try_parse(look_ahead(p))

    def parse(cursor: Cursor) -> Result[None]:
        res = attempt(cursor)
        if isinstance(res, Failure):
            return Success(None, cursor)
        return Failure(cursor.offset, ParseError(f"unexpected {res.value!r}"))
    return Parsec(parse)


# 17. eof: Succeeds only at the end of input
def eof() -> Parsec[None]:
    """Succeeds only if no input remains, labeled as 'end of input'."""
    return not_followed_by(any_char()).label("end of input")


# 18. manyTill: Parses p zero or more times until end succeeds
def many_till(p: Parsec[T], end: Parsec[Any]) -> Parsec[List[T]]:
    """
    Applies p zero or more times until end succeeds, returning a list of p's results.
    A p that succeeds without consuming anything is reported as an error.
    """
    step_p = _advancing(p)

    def step(acc: Any) -> Parsec[Any]:
        return end.map(lambda _: Done(acc)) | step_p.map(lambda x: Loop((x, acc)))
    return tail_rec(step, None).map(_unwind)


# 19. parserTrace: Debugging parser that logs the remaining input
def parser_trace(label_str: str) -> Parsec[None]:
    def parse(cursor: Cursor) -> Result[None]:
        rest = cursor.text[cursor.offset:cursor.offset + 30]
        more = '...' if len(cursor.text) - cursor.offset > 30 else ''
        log.debug('%s: "%s%s" at offset %d', label_str, rest, more, cursor.offset)
        return Success(None, cursor)
    return Parsec(parse)


# 20. parserTraced: Traces entry into p and logs when p fails
def parser_traced(label_str: str, p: Parsec[T]) -> Parsec[T]:
    """
    Logs entry into p. An empty failure is logged as backtracking and reported
    as a failure labelled label_str; a failure after consuming input is logged
    and passed through unchanged.
    """
    enter = parser_trace(label_str)
    backtrack = parser_trace(f"{label_str} backtracked") > Parsec(_fail_with(label_str))

    def parse(cursor: Cursor) -> Result[T]:
        enter(cursor)
        res = p(cursor)
        if isinstance(res, Success):
            return res
        if res.offset == cursor.offset:
            return backtrack(cursor)
        log.debug("%s failed after consuming input at offset %d", label_str, res.offset)
        return res
    return Parsec(parse)


def _fail_with(msg: str) -> Callable[[Cursor], Result[Any]]:
    error = ParseError(msg)
    return lambda cursor: Failure(cursor.offset, error)
