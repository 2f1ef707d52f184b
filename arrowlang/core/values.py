"""Runtime values of arrowlang and the operator overload tables that combine them.

The value domain is closed: NoValue, Number, Boolean and String. Binary operators are dispatched on the
(left class, right class, operator) triple through BINARY_OPERATIONS; the table is not commutative, so a combination
is only defined if it is listed in that exact order. Anything not listed is an InvalidBinaryOperation.
"""

import math
import operator
from abc import ABC, abstractmethod
from dataclasses import dataclass

from arrowlang.core.operators import BinaryOperator, UnaryOperator
from arrowlang.lang.error import InvalidBinaryOperation, InvalidUnaryOperation, NoValueOperation


def format_number(number):
    """Decimal text of number: integral values are shown without a fractional part ('7', not '7.0').

    Non-finite values are shown as inf, -inf and NaN, which arrowlang reads back as identifiers rather than numbers.
    """
    if math.isnan(number):
        return "NaN"
    elif math.isinf(number):
        return "inf" if number > 0 else "-inf"
    elif number.is_integer():
        return str(int(number))
    return repr(number)


class Value(ABC):
    """Superclass of every runtime value. Values are immutable, so they are never shared mutably."""
    kind = "value"

    @abstractmethod
    def is_truthy(self):
        """Interpretation of this value as a boolean. Raises NoValueOperation for NoValue."""

    @staticmethod
    def from_python(obj):
        """Converts None, bool, int, float or str into the matching Value."""
        if obj is None:
            return NoValue()
        elif isinstance(obj, bool):  # bool before int: bool is an int subclass
            return Boolean(obj)
        elif isinstance(obj, (int, float)):
            return Number(obj)
        elif isinstance(obj, str):
            return String(obj)
        raise TypeError(f"cannot convert {type(obj).__name__} to an arrowlang value")


@dataclass(frozen=True)
class NoValue(Value):
    kind = "no value"

    def is_truthy(self):
        raise NoValueOperation()

    def __str__(self):
        return "()"


@dataclass(frozen=True)
class Number(Value):
    value: float
    kind = "number"

    def __post_init__(self):
        object.__setattr__(self, "value", float(self.value))  # ints are stored as 64-bit floats

    def is_truthy(self):
        return self.value != 0

    def __str__(self):
        return format_number(self.value)


@dataclass(frozen=True)
class Boolean(Value):
    value: bool
    kind = "boolean"

    def is_truthy(self):
        return self.value

    def __str__(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class String(Value):
    value: str
    kind = "string"

    def is_truthy(self):
        return self.value != ""

    def __str__(self):
        return self.value


def divide(left, right):
    """IEEE 754 division: dividing by zero gives an infinity (or NaN for 0 / 0) instead of raising."""
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


MAX_STRING_LENGTH = 2 ** 28  # chars; longer results of a repetition are refused


def repeat(text, times):
    """text repeated times times, times truncated toward zero. Non-positive counts give ''. Raises OverflowError if the
    result would be longer than MAX_STRING_LENGTH.
    """
    count = int(times)
    if len(text) * count > MAX_STRING_LENGTH:
        raise OverflowError(f"repeated string would be longer than {MAX_STRING_LENGTH} chars")
    return text * count


ARITHMETIC = {
    BinaryOperator.MUL: operator.mul,
    BinaryOperator.ADD: operator.add,
    BinaryOperator.DIV: divide,
    BinaryOperator.SUB: operator.sub,
    BinaryOperator.OR: operator.mul,  # || on numbers multiplies
}

COMPARISON = {
    BinaryOperator.EQ: operator.eq,
    BinaryOperator.NEQ: operator.ne,
    BinaryOperator.LEQ: operator.le,
    BinaryOperator.LT: operator.lt,
    BinaryOperator.GEQ: operator.ge,
    BinaryOperator.GT: operator.gt,
}


def _build_binary_operations():
    table = {}

    for op, func in ARITHMETIC.items():
        table[Number, Number, op] = lambda left, right, func=func: Number(func(left.value, right.value))
    for op, func in COMPARISON.items():
        table[Number, Number, op] = lambda left, right, func=func: Boolean(func(left.value, right.value))
        table[Boolean, Boolean, op] = lambda left, right, func=func: Boolean(func(left.value, right.value))

    table[Number, String, BinaryOperator.MUL] = lambda left, right: String(repeat(right.value, left.value))
    table[Number, String, BinaryOperator.ADD] = lambda left, right: String(f"{left}{right}")
    table[String, Number, BinaryOperator.MUL] = lambda left, right: String(repeat(left.value, right.value))
    table[String, Number, BinaryOperator.ADD] = lambda left, right: String(f"{left}{right}")

    table[String, String, BinaryOperator.ADD] = lambda left, right: String(left.value + right.value)
    table[String, String, BinaryOperator.EQ] = lambda left, right: Boolean(left.value == right.value)
    table[String, String, BinaryOperator.NEQ] = lambda left, right: Boolean(left.value != right.value)

    table[Boolean, Boolean, BinaryOperator.OR] = lambda left, right: Boolean(left.value or right.value)

    return table


BINARY_OPERATIONS = _build_binary_operations()

UNARY_OPERATIONS = {
    (Number, UnaryOperator.NEGATE): lambda value: Number(-value.value),
    (Boolean, UnaryOperator.NOT): lambda value: Boolean(not value.value),
}


def apply_binary(op, left, right):
    """Combines left and right with op according to BINARY_OPERATIONS."""
    if isinstance(left, NoValue) or isinstance(right, NoValue):
        raise NoValueOperation()

    func = BINARY_OPERATIONS.get((type(left), type(right), op))
    if func is None:
        raise InvalidBinaryOperation(left, right, op)

    try:
        return func(left, right)
    except (OverflowError, ValueError, MemoryError):  # string repetition count out of range
        raise InvalidBinaryOperation(left, right, op)


def apply_unary(op, value):
    """Applies op to value according to UNARY_OPERATIONS."""
    if isinstance(value, NoValue):
        raise NoValueOperation()

    func = UNARY_OPERATIONS.get((type(value), op))
    if func is None:
        raise InvalidUnaryOperation(value, op)
    return func(value)
