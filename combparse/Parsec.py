import operator
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Optional, Sequence, Tuple, TypeVar, Union

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')
S = TypeVar('S')  # Trampoline loop state


@dataclass(frozen=True)
class Cursor:
    """The unconsumed remainder of the input: ``text[offset:]``, without slicing."""
    text: str
    offset: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.offset <= len(self.text):
            raise ValueError(
                f"cursor offset {self.offset} out of range for input of length {len(self.text)}"
            )

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.text)

    def peek(self) -> Optional[str]:
        """The next character, or None at the end of input."""
        if self.at_end:
            return None
        return self.text[self.offset]

    def advance(self, n: int = 1) -> 'Cursor':
        # Shares the same text object; only the offset moves
        return Cursor(self.text, self.offset + n)

    def startswith(self, s: str) -> bool:
        return self.text.startswith(s, self.offset)

    def remaining(self) -> str:
        """Copy of the unconsumed input. Meant for diagnostics, not for parsing."""
        return self.text[self.offset:]

    def __repr__(self) -> str:
        rest = self.text[self.offset:self.offset + 30]
        more = '...' if len(self.text) - self.offset > 30 else ''
        return f"Cursor(offset={self.offset}, rest={rest!r}{more})"


@dataclass(frozen=True, order=True)
class Suggestion:
    """An autocompletion hint attached to a parse error."""
    auto_complete: str
    completion_hint: str = ""

    def __str__(self) -> str:
        if self.completion_hint:
            return f"{self.auto_complete} ({self.completion_hint})"
        return self.auto_complete


@dataclass(frozen=True, order=True)
class ParseError:
    """A parse failure: a message plus the suggestions gathered on the way."""
    message: str
    suggestions: Tuple[Suggestion, ...] = field(default=())

    def __post_init__(self) -> None:
        # Accept any sequence, store a tuple so errors stay hashable and immutable
        if not isinstance(self.suggestions, tuple):
            object.__setattr__(self, 'suggestions', tuple(self.suggestions))

    def with_suggestions(self, earlier: Sequence[Suggestion]) -> 'ParseError':
        """Prepend ``earlier`` to this error's suggestions, keeping both orders."""
        if not earlier:
            return self
        return ParseError(self.message, tuple(earlier) + self.suggestions)

    def __str__(self) -> str:
        if not self.suggestions:
            return f"Parse error: {self.message}"
        hints = ", ".join(str(s) for s in self.suggestions)
        return f"Parse error: {self.message} (suggestions: {hints})"


class ParseException(Exception):
    """Raised by ``parse`` when the final result is a ParseError."""
    def __init__(self, error: ParseError):
        super().__init__(str(error))
        self.error = error


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    remaining: Cursor


@dataclass(frozen=True)
class Failure:
    # Offset of the cursor at the moment of failure, used by choice to decide
    # whether backtracking is allowed
    offset: int
    error: ParseError


Result = Union[Success[T], Failure]


@dataclass(frozen=True)
class Loop(Generic[S]):
    """Trampoline step result: keep going with a new state."""
    state: S


@dataclass(frozen=True)
class Done(Generic[T]):
    """Trampoline step result: stop and succeed with ``result``."""
    result: T


class Parsec(Generic[T]):
    """A parser combinator that processes input and returns a result."""
    def __init__(self, parse_fn: Callable[[Cursor], Result[T]]):
        self.parse_fn = parse_fn

    def __call__(self, cursor: Cursor) -> Result[T]:
        return self.parse_fn(cursor)

    # Functor (<$>)
    def map(self, f: Callable[[T], U]) -> 'Parsec[U]':
        def parse(cursor: Cursor) -> Result[U]:
            res = self(cursor)
            if isinstance(res, Failure):
                return res
            return Success(f(res.value), res.remaining)
        return Parsec(parse)

    # Applicative (<*>): self yields a function, other yields its argument
    def apply(self, other: 'Parsec[Any]') -> 'Parsec[Any]':
        def parse(cursor: Cursor) -> Result[Any]:
            res_f = self(cursor)
            if isinstance(res_f, Failure):
                return res_f
            res_x = other(res_f.remaining)
            if isinstance(res_x, Failure):
                return res_x
            return Success(res_f.value(res_x.value), res_x.remaining)
        return Parsec(parse)

    # Monadic bind (>>=)
    def bind(self, f: Callable[[T], 'Parsec[U]']) -> 'Parsec[U]':
        def parse(cursor: Cursor) -> Result[U]:
            res = self(cursor)
            if isinstance(res, Failure):
                return res
            return f(res.value)(res.remaining)
        return Parsec(parse)

    # Alternative (<|>)
    def alt(self, other: 'Parsec[T]') -> 'Parsec[T]':
        def parse(cursor: Cursor) -> Result[T]:
            res = self(cursor)
            if isinstance(res, Success):
                return res
            # Only try other if no input was consumed
            if res.offset != cursor.offset:
                return res
            res_other = other(cursor)
            if isinstance(res_other, Failure):
                return Failure(res_other.offset, res_other.error.with_suggestions(res.error.suggestions))
            return res_other
        return Parsec(parse)

    def __or__(self, other: 'Parsec[T]') -> 'Parsec[T]':
        return self.alt(other)

    # Semigroup append: combine <$> self <*> other
    def append(self, other: 'Parsec[T]', combine: Callable[[T, T], T] = operator.add) -> 'Parsec[T]':
        return self.map(lambda x: lambda y: combine(x, y)).apply(other)

    def __add__(self, other: 'Parsec[T]') -> 'Parsec[T]':
        return self.append(other)

    # Sequence (&): keep both results as a pair
    def __and__(self, other: 'Parsec[U]') -> 'Parsec[Tuple[T, U]]':
        return self.map(lambda x: lambda y: (x, y)).apply(other)

    # Sequence (*>)
    def __gt__(self, other: 'Parsec[U]') -> 'Parsec[U]':
        return self.bind(lambda _: other)

    # Sequence (<*)
    def __lt__(self, other: 'Parsec[U]') -> 'Parsec[T]':
        return self.bind(lambda x: other.map(lambda _: x))

    # p >> q sequences two parsers; p >> f is bind when f is a plain function
    def __rshift__(self, other: Union['Parsec[U]', Callable[[T], 'Parsec[U]']]) -> 'Parsec[U]':
        if isinstance(other, Parsec):
            return self > other
        return self.bind(other)

    # Label (<?>)
    def label(self, msg: str) -> 'Parsec[T]':
        def parse(cursor: Cursor) -> Result[T]:
            res = self(cursor)
            if isinstance(res, Failure) and res.offset == cursor.offset:  # Empty failure
                return Failure(res.offset, ParseError(f"expecting {msg}", res.error.suggestions))
            return res
        return Parsec(parse)

    def suggest(self, auto_complete: str, completion_hint: str = "") -> 'Parsec[T]':
        """Attach a suggestion to failures that happen before any input is consumed."""
        suggestion = Suggestion(auto_complete, completion_hint)

        def parse(cursor: Cursor) -> Result[T]:
            res = self(cursor)
            if isinstance(res, Failure) and res.offset == cursor.offset:
                return Failure(res.offset, res.error.with_suggestions([suggestion]))
            return res
        return Parsec(parse)
