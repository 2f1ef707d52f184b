"""Lexical primitives of arrowlang: identifiers, number literals and string literals. They are parsers in the sense of
combinators.py and are used inline by the grammar.

```
<identifier> ::= <id_char> (<id_char> | <digit>)*      ; <id_char> is an ASCII letter or '_'
<number>     ::= "-"? ("0" | <digit>+) ("." <digit>+)? (("e" | "E") ("+" | "-")? <digit>+)?
<string>     ::= '"' (<any char but '"' or '\'> | '\"')* '"'   ; '\"' is the only escape
```

A number is its mantissa scaled by 10 ** exponent, so "1.5e2" is 150 and a number without an exponent is just its
mantissa.
"""

import string

from arrowlang.core.combinators import (alternative, char_in, char_not_in, literal, many, mapped, optional,
                                        recognized, sequence, take_while, value)

IDENTIFIER_CHARSET = frozenset(string.ascii_letters + "_")
IDENTIFIER_CHARS = IDENTIFIER_CHARSET | frozenset(string.digits)  # characters allowed after the first one

RESERVED_WORDS = frozenset(["let", "true", "false", "if", "else"])


def is_digit(char):
    return "0" <= char <= "9"


digits = take_while(is_digit, "digit")


_identifier_start = char_in(IDENTIFIER_CHARSET, "identifier")
_identifier_body = many(alternative(char_in(IDENTIFIER_CHARSET, "identifier character"), digits))


def identifier(state, pos):
    """Name made of letters, digits and underscores, not starting with a digit."""
    pos, first = _identifier_start(state, pos)
    pos, rest = _identifier_body(state, pos)
    return pos, first + "".join(rest)


_exponent = sequence(char_in("eE", "exponent"), optional(char_in("+-", "exponent sign")), digits)

_number = sequence(
    optional(literal("-")),
    alternative(literal("0"), digits),
    optional(sequence(literal("."), digits)),
    optional(_exponent),
)

_number_literal = mapped(recognized(_number), float)


def number_literal(state, pos):
    """Number literal as a float. The matched text is valid float() syntax."""
    return _number_literal(state, pos)


_string_char = alternative(
    char_not_in('"\\', "string character"),
    value('"', literal('\\"')),
)

_string_body = many(_string_char)


def string_literal(state, pos):
    """Text between double quotes, with escaped quotes unescaped."""
    pos, __ = literal('"')(state, pos)
    pos, chars = _string_body(state, pos)

    if pos >= len(state.source) or state.source[pos] != '"':
        state.fail(pos, "'\"' to close string literal")
    return pos + 1, "".join(chars)
