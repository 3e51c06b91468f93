from typing import Callable, Iterable

from .Parsec import Cursor, Failure, ParseError, Parsec, Result, Success, Suggestion
from .Prim import skip_many


# Core function: Succeeds if the character satisfies a predicate
def satisfy(f: Callable[[str], bool]) -> Parsec[str]:
    """Succeeds for any character where f returns True. Returns the parsed character."""
    def parse(cursor: Cursor) -> Result[str]:
        token = cursor.peek()
        if token is None:
            return Failure(cursor.offset, ParseError("unexpected end of input"))
        if f(token):
            return Success(token, cursor.advance())
        return Failure(cursor.offset, ParseError(f"unexpected {token!r}"))
    return Parsec(parse)


def char(c: str) -> Parsec[str]:
    """Parses a single character c and returns it."""
    return satisfy(lambda x: x == c).label(f"'{c}'").suggest(c, f"'{c}'")


def string(s: str) -> Parsec[str]:
    """
    Parses the exact string s and returns it.

    The match is all or nothing: a partial match fails without consuming,
    so alternatives sharing a prefix still get their turn.
    """
    error = ParseError(f"expecting '{s}'", (Suggestion(s, f"'{s}'"),))

    def parse(cursor: Cursor) -> Result[str]:
        if cursor.startswith(s):
            return Success(s, cursor.advance(len(s)))
        return Failure(cursor.offset, error)
    return Parsec(parse)


def any_char() -> Parsec[str]:
    """Parses any character and returns it."""
    return satisfy(lambda _: True).label("any character")


def one_of(cs: Iterable[str]) -> Parsec[str]:
    """Succeeds if the current character is in cs. Returns the parsed character."""
    chars = frozenset(cs)
    return satisfy(lambda c: c in chars).label(f"one of {''.join(sorted(chars))}")


def none_of(cs: Iterable[str]) -> Parsec[str]:
    """Succeeds if the current character is not in cs. Returns the parsed character."""
    chars = frozenset(cs)
    return satisfy(lambda c: c not in chars).label(f"none of {''.join(sorted(chars))}")


def digit() -> Parsec[str]:
    """Parses an ASCII digit and returns it."""
    return satisfy(lambda c: '0' <= c <= '9').label("digit")


def letter() -> Parsec[str]:
    """Parses an alphabetic character and returns it."""
    return satisfy(str.isalpha).label("letter")


def alpha_num() -> Parsec[str]:
    """Parses an alphabetic or numeric character and returns it."""
    return satisfy(str.isalnum).label("letter or digit")


def space() -> Parsec[str]:
    """Parses a whitespace character and returns it."""
    return satisfy(str.isspace).label("space")


def spaces() -> Parsec[None]:
    """Skips zero or more whitespace characters."""
    return skip_many(space()).label("white space")
