"""Tree-walking evaluator: reduces an Expr to a Value against an Env.

Operands are always evaluated left to right, so side effects of assignments nested in an operand happen in source
order. Errors are EvaluationErrors with the failing Expr attached; nothing is retried.
"""

from arrowlang.core.expressions import (Assignment, BinaryOp, BoolLiteral, Call, Declaration, Identifier,
                                        NumberLiteral, StringLiteral, UnaryOp)
from arrowlang.core.lexical import RESERVED_WORDS
from arrowlang.core.values import Boolean, Number, String, apply_binary, apply_unary
from arrowlang.lang.error import (EvaluationError, GenericException, NestingTooDeep, NotCallable, ReservedWord,
                                  UndeclaredVariable)


def interpret(expr, env):
    """Evaluates expr against env and returns its Value. Assignments and declarations mutate env."""
    try:
        return _evaluate(expr, env)
    except RecursionError:
        raise NestingTooDeep() from None


def _evaluate(expr, env):
    if isinstance(expr, StringLiteral):
        return String(expr.text)
    elif isinstance(expr, NumberLiteral):
        return Number(expr.value)
    elif isinstance(expr, BoolLiteral):
        return Boolean(expr.value)

    elif isinstance(expr, Identifier):
        try:
            return env.lookup(expr.name)
        except EvaluationError as error:
            raise error.attach(expr)

    elif isinstance(expr, Assignment):
        result = _evaluate(expr.value, env)
        if not env.assign(expr.name, result):
            raise UndeclaredVariable(expr.name, expr)
        return result

    elif isinstance(expr, Declaration):
        if expr.name in RESERVED_WORDS:
            raise ReservedWord(expr.name, expr)
        result = _evaluate(expr.value, env)
        env.declare(expr.name, result)
        return result

    elif isinstance(expr, BinaryOp):
        return _evaluate_binary(expr, env)

    elif isinstance(expr, UnaryOp):
        operand = _evaluate(expr.operand, env)
        try:
            return apply_unary(expr.operator, operand)
        except EvaluationError as error:
            raise error.attach(expr)

    elif isinstance(expr, Call):
        callee = _evaluate(expr.callee, env)
        for argument in expr.arguments:
            _evaluate(argument, env)
        raise NotCallable(callee, expr)  # no value in arrowlang is callable yet

    raise GenericException("cannot evaluate '{}'", repr(expr), internal=True)


def _evaluate_binary(expr, env):
    """Evaluates expr and every BinaryOp down its left operands with a loop, so that a left-folded chain such as
    1 + 1 + ... + 1 only recurses into its right operands.
    """
    spine = []
    while isinstance(expr, BinaryOp):
        spine.append(expr)
        expr = expr.left

    left = _evaluate(expr, env)
    for node in reversed(spine):
        right = _evaluate(node.right, env)
        try:
            left = apply_binary(node.operator, left, right)
        except EvaluationError as error:
            raise error.attach(node)
    return left


def evaluate_each(exprs, env):
    """Yields the Value of each of exprs in order, evaluated against the same env. Stops at the first failure, which is
    raised; whatever earlier exprs assigned stays in env.
    """
    for expr in exprs:
        yield interpret(expr, env)


def run_program(exprs, env):
    """Evaluates exprs in order against the same env and returns their Values. The first failure is raised and no
    later expr is evaluated; whatever earlier exprs assigned stays in env.
    """
    return list(evaluate_each(exprs, env))
