"""arrowlang: a small expression language with a recursive-descent parser and a tree-walking evaluator.

Basic program flow:
    1. Parser: parse(source) turns ';'-separated source text into a list of Exprs (see arrowlang/core/grammar.py)
    2. Evaluator: interpret(expr, env) reduces each Expr to a Value, threading one Env through the whole program
"""

from arrowlang.core.env import Env
from arrowlang.core.evaluator import evaluate_each, interpret, run_program
from arrowlang.core.expressions import (Assignment, BinaryOp, BoolLiteral, Call, Declaration, Expr, Identifier,
                                        NumberLiteral, StringLiteral, UnaryOp)
from arrowlang.core.grammar import parse, parse_language
from arrowlang.core.operators import BinaryOperator, UnaryOperator
from arrowlang.core.values import Boolean, NoValue, Number, String, Value
from arrowlang.lang.error import (EvaluationError, GenericException, InvalidBinaryOperation, InvalidUnaryOperation,
                                  NestingTooDeep, NoValueOperation, NotCallable, ParseError, ReservedWord,
                                  UndeclaredVariable)

__version__ = "0.1.0"
