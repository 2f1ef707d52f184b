"""Binary and unary operators of arrowlang. Each operator carries the canonical text used to display it."""

from enum import Enum


class BinaryOperator(Enum):
    MUL = "*"
    ADD = "+"
    DIV = "/"
    SUB = "-"
    OR = "||"
    EQ = "=="
    NEQ = "!=="
    LEQ = "<="
    LT = "<"
    GEQ = ">="
    GT = ">"

    @property
    def symbol(self):
        return self.value

    def __str__(self):
        return self.value


class UnaryOperator(Enum):
    NEGATE = "-"
    NOT = "!"

    @property
    def symbol(self):
        return self.value

    def __str__(self):
        return self.value
