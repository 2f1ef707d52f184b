"""Abstract syntax tree of arrowlang. Every node is immutable once built and owns its children: trees never share
subtrees. str(expr) gives the node back in arrowlang notation, with every binary operation parenthesized.
"""

from dataclasses import dataclass
from typing import Tuple

from arrowlang.core.operators import BinaryOperator, UnaryOperator
from arrowlang.core.values import format_number


class Expr:
    """Superclass of every syntax tree node."""

    def display(self, indents=0):
        """Recursively displays Expr tree with readable format.

        Format:
        <Expr>('<expr>', nodes=[
            <Expr>('<expr>')
            ...
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}('{self}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    @property
    def nodes(self):
        """Child nodes, left to right."""
        return ()


@dataclass(frozen=True)
class StringLiteral(Expr):
    text: str

    def __str__(self):
        escaped = self.text.replace('"', '\\"')
        return f'"{escaped}"'


@dataclass(frozen=True)
class NumberLiteral(Expr):
    value: float

    def __str__(self):
        return format_number(self.value)


@dataclass(frozen=True)
class BoolLiteral(Expr):
    value: bool

    def __str__(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Identifier(Expr):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Assignment(Expr):
    """Assigns to a variable that must already be declared."""
    name: str
    value: Expr

    @property
    def nodes(self):
        return (self.value,)

    def __str__(self):
        return f"{self.name} = {self.value}"


@dataclass(frozen=True)
class Declaration(Expr):
    """Declares a variable in the current scope: let <name> = <value>."""
    name: str
    value: Expr

    @property
    def nodes(self):
        return (self.value,)

    def __str__(self):
        return f"let {self.name} = {self.value}"


@dataclass(frozen=True)
class BinaryOp(Expr):
    operator: BinaryOperator
    left: Expr
    right: Expr

    @property
    def nodes(self):
        return self.left, self.right

    def __str__(self):
        # left operands are walked with a loop, flat chains like 1 + 1 + ... + 1 can be longer than the recursion limit
        spine = []
        node = self
        while isinstance(node, BinaryOp):
            spine.append(node)
            node = node.left

        text = str(node)
        for node in reversed(spine):
            text = f"({text} {node.operator} {node.right})"
        return text


@dataclass(frozen=True)
class UnaryOp(Expr):
    operator: UnaryOperator
    operand: Expr

    @property
    def nodes(self):
        return (self.operand,)

    def __str__(self):
        return f"{self.operator}{self.operand}"


@dataclass(frozen=True)
class Call(Expr):
    callee: Expr
    arguments: Tuple[Expr, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "arguments", tuple(self.arguments))

    @property
    def nodes(self):
        return (self.callee, *self.arguments)

    def __str__(self):
        arguments = " :: ".join(str(argument) for argument in self.arguments)
        return f"{self.callee} :> ({arguments})"
