"""Expression grammar of arrowlang. Parsing and AST construction happen in one recursive-descent pass: each rule below
is a parser in the sense of combinators.py, and every precedence level parses its operands from the next tighter one.

```
<program>     ::= <expression> (";" <expression>)* ";"?          ; may also be empty
<expression>  ::= <assignment>
<assignment>  ::= "let" <name> "=" <assignment>                  ; declaration
                | <name> "=" <assignment>                        ; right associative
                | <logic_or>
<logic_or>    ::= <logic_and> ("||" <logic_and>)*
<logic_and>   ::= <equality> ("&&" <equality>)*                  ; "&&" builds the same node as "||"
<equality>    ::= <comparison> (("==" | "!==") <comparison>)*
<comparison>  ::= <term> (("<=" | "<" | ">=" | ">") <term>)*
<term>        ::= <factor> (("-" | "+") <factor>)*
<factor>      ::= <unary> (("/" | "*") <unary>)*
<unary>       ::= ("!" | "-") <unary> | <call>
<call>        ::= <primary> (":>" (<expression> ("::" <expression>)*)?)?
<primary>     ::= "(" <expression> ")" | "true" | "false" | <number> | <string> | <name>
```

All binary levels fold left to right: "2 - 3 - 1" is ((2 - 3) - 1). Whitespace is allowed around every operator and
every primary. <name> is an identifier that is not a reserved word.
"""

from arrowlang.core.combinators import (Mismatch, ParseState, alternative, end_of_input, keyword, labelled, literal,
                                        located, many, mapped, optional, parse_all, sep_by, sequence, value, wrapped,
                                        ws)
from arrowlang.core.expressions import (Assignment, BinaryOp, BoolLiteral, Call, Declaration, Identifier,
                                        NumberLiteral, StringLiteral, UnaryOp)
from arrowlang.core.lexical import IDENTIFIER_CHARS, RESERVED_WORDS, identifier, number_literal, string_literal
from arrowlang.core.operators import BinaryOperator, UnaryOperator


def operators(*pairs):
    """Parser for one of the (text, operator) pairs, surrounded by whitespace. Pairs are tried in order, so a longer
    operator must come before any operator that is a prefix of it.
    """
    return wrapped(ws, alternative(*(value(op, literal(text)) for text, op in pairs)), ws)


LOGIC_OR_OPERATORS = operators(("||", BinaryOperator.OR))
LOGIC_AND_OPERATORS = operators(("&&", BinaryOperator.OR))
EQUALITY_OPERATORS = operators(("==", BinaryOperator.EQ), ("!==", BinaryOperator.NEQ))
COMPARISON_OPERATORS = operators(("<=", BinaryOperator.LEQ), ("<", BinaryOperator.LT),
                                 (">=", BinaryOperator.GEQ), (">", BinaryOperator.GT))
TERM_OPERATORS = operators(("-", BinaryOperator.SUB), ("+", BinaryOperator.ADD))
FACTOR_OPERATORS = operators(("/", BinaryOperator.DIV), ("*", BinaryOperator.MUL))
UNARY_OPERATORS = alternative(value(UnaryOperator.NOT, literal("!")), value(UnaryOperator.NEGATE, literal("-")))

EQUALS = wrapped(ws, literal("="), ws)
STATEMENT_SEPARATOR = wrapped(ws, literal(";"), ws)
CALL_ARROW = wrapped(ws, literal(":>"), ws)
ARGUMENT_SEPARATOR = wrapped(ws, literal("::"), ws)


def fold_expressions(initial, pairs):
    """Left-associative fold of [(operator, operand), ...] onto initial."""
    for op, operand in pairs:
        initial = BinaryOp(op, initial, operand)
    return initial


def binary_level(operand, ops):
    """Parser for operand (ops operand)*, folded to the left."""
    pairs = many(sequence(ops, operand))

    def parse(state, pos):
        pos, initial = operand(state, pos)
        pos, rest = pairs(state, pos)
        return pos, fold_expressions(initial, rest)

    return parse


def name(state, pos):
    """Identifier that is not a reserved word."""
    end, text = identifier(state, pos)
    if text in RESERVED_WORDS:
        state.fail(pos, "identifier")
    return end, text


def expression(state, pos):
    return assignment(state, pos)


def assignment(state, pos):
    return _assignment(state, pos)


def logic_or(state, pos):
    return _logic_or(state, pos)


def logic_and(state, pos):
    return _logic_and(state, pos)


def equality(state, pos):
    return _equality(state, pos)


def comparison(state, pos):
    return _comparison(state, pos)


def term(state, pos):
    return _term(state, pos)


def factor(state, pos):
    return _factor(state, pos)


def unary(state, pos):
    return _unary(state, pos)


def call(state, pos):
    return _call(state, pos)


def primary(state, pos):
    return _primary(state, pos)


_declaration = mapped(
    sequence(keyword("let", IDENTIFIER_CHARS), ws, name, EQUALS, assignment),
    lambda values: Declaration(values[2], values[4]),
)

_assignment = alternative(
    _declaration,
    mapped(sequence(name, EQUALS, assignment), lambda values: Assignment(values[0], values[2])),
    logic_or,
)

_logic_or = binary_level(logic_and, LOGIC_OR_OPERATORS)
_logic_and = binary_level(equality, LOGIC_AND_OPERATORS)
_equality = binary_level(comparison, EQUALITY_OPERATORS)
_comparison = binary_level(term, COMPARISON_OPERATORS)
_term = binary_level(factor, TERM_OPERATORS)
_factor = binary_level(unary, FACTOR_OPERATORS)

_unary = wrapped(
    ws,
    alternative(
        mapped(sequence(UNARY_OPERATORS, unary), lambda values: UnaryOp(*values)),
        call,
    ),
    ws,
)

_call = wrapped(
    ws,
    mapped(
        sequence(primary, optional(mapped(sequence(CALL_ARROW, sep_by(expression, ARGUMENT_SEPARATOR)),
                                          lambda values: values[1]))),
        lambda values: values[0] if values[1] is None else Call(values[0], values[1]),
    ),
    ws,
)

_primary = wrapped(
    ws,
    labelled(
        alternative(
            wrapped(literal("("), expression, wrapped(ws, literal(")"), ws)),
            value(BoolLiteral(True), keyword("true", IDENTIFIER_CHARS)),
            value(BoolLiteral(False), keyword("false", IDENTIFIER_CHARS)),
            mapped(number_literal, NumberLiteral),
            mapped(string_literal, StringLiteral),
            mapped(name, Identifier),
        ),
        "expression",
    ),
    ws,
)

_program = wrapped(ws, sep_by(located(expression), STATEMENT_SEPARATOR, trailing=True), ws)


def parse_statements(source):
    """Parses source into a list of (offset, Expr), one per ';'-separated statement, offset being where the statement
    starts in source. Raises ParseError if any statement cannot be parsed or if input is left over once every statement
    has been parsed.
    """
    state = ParseState(source)
    try:
        pos, statements = _program(state, 0)
        end_of_input(state, pos)
    except Mismatch:
        raise state.error() from None
    except RecursionError:
        state.expected = ["less deeply nested expression"]
        raise state.error() from None
    return statements


def parse_language(source):
    """Parses source into a list of Exprs, one per ';'-separated statement."""
    return [expr for __, expr in parse_statements(source)]


parse = parse_language

_literal = wrapped(
    ws,
    labelled(
        alternative(
            value(BoolLiteral(True), keyword("true", IDENTIFIER_CHARS)),
            value(BoolLiteral(False), keyword("false", IDENTIFIER_CHARS)),
            mapped(number_literal, NumberLiteral),  # sign included: "-1" is a literal here, not a negation
            mapped(string_literal, StringLiteral),
        ),
        "literal",
    ),
    ws,
)


def parse_literal(source):
    """Parses source as exactly one boolean, number or string literal."""
    return parse_all(_literal, source)
