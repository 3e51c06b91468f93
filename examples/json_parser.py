import json
import sys

from combparse.Char import char, digit, none_of, one_of, spaces, string
from combparse.Combinators import between, choice, eof, many1, option, sep_by
from combparse.Prim import lazy, many, pure, run_parser

# 1. Lexical helpers: every token swallows the whitespace after it
def lexeme(p):
    return p < spaces()

def symbol(s):
    return lexeme(string(s))

# JSON allows "null", "true", "false". We map them to Python equivalents.
null_val = symbol("null") >> pure(None)
true_val = symbol("true") >> pure(True)
false_val = symbol("false") >> pure(False)

_escapes = {'n': '\n', 'r': '\r', 't': '\t', 'b': '\b', 'f': '\f', '/': '/', '\\': '\\', '"': '"'}

escape = char('\\') > one_of(_escapes).map(lambda c: _escapes[c])
string_literal = lexeme(
    between(char('"'), char('"'), many(none_of('"\\') | escape)).map("".join)
)

# Digits are glued together with '+' (string concatenation of parsed values)
digits = many1(digit()).map("".join)
fraction = option("", char('.') + digits)
exponent = option("", one_of("eE") + option("", one_of("+-")) + digits)
number = lexeme(option("", string("-")) + digits + fraction + exponent).map(
    lambda s: float(s) if any(c in s for c in ".eE") else int(s)
)

# 2. Recursive JSON Parser
def json_value():
    return choice([
        null_val,
        true_val,
        false_val,
        string_literal,
        number,
        json_object(),
        json_array(),
    ])

def json_array():
    # [ value, value, ... ]
    return between(symbol("["), symbol("]"), sep_by(lazy(json_value), symbol(",")))

def json_object():
    # { "key": value, ... }
    entry = string_literal.bind(lambda key:
            symbol(":") >>
            lazy(json_value).map(lambda val: (key, val)))

    return between(symbol("{"), symbol("}"), sep_by(entry, symbol(","))).map(dict)

parser = spaces() > (json_value() < eof())

if __name__ == "__main__":
    text = open(sys.argv[1]).read() if len(sys.argv) > 1 else '{"a": [1, 2.5, true, null], "b": "x\\ny"}'

    result, err = run_parser(parser, text)

    if err:
        print("Parsing Failed:", err)
    else:
        print("Successfully Parsed:")
        print(json.dumps(result, indent=4))
