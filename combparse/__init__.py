# Core
from .Parsec import (
    Parsec, Cursor, Suggestion, ParseError, ParseException,
    Success, Failure, Result, Loop, Done,
)
from .Prim import (
    run_parser, parse, pure, fail, empty, try_parse, look_ahead, position,
    lazy, defer, tail_rec, many, skip_many,
)

# Characters
from .Char import (
    satisfy, char, string, any_char, one_of, none_of,
    digit, letter, alpha_num, space, spaces,
)

# Combinators
from .Combinators import (
    choice, count, between, option, option_maybe, optional,
    many1, skip_many1, sep_by, sep_by1, end_by, sep_end_by, sep_end_by1,
    chainl, chainl1, chainr, chainr1, eof, not_followed_by, many_till,
    parser_trace, parser_traced,
)

__version__ = "0.1.0"
