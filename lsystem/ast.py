"""Expression trees used by L-system rules.

Two families of nodes exist. Arithmetic nodes evaluate to a float and
appear in module templates (``A(x+1)``) and inside comparisons. Boolean
nodes evaluate to a bool and form the guard condition of a module
pattern (``A(x) : x < 5``). All nodes are immutable; the string form of
a node is a fully parenthesised rendering that the parser reads back.
"""

from __future__ import annotations

from dataclasses import dataclass
import math


def format_number(value: float) -> str:
    """Render a float the short way: 1.0 -> '1', 0.5 -> '0.5'."""
    if math.isfinite(value) and value == int(value) and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class Node:
    """Base class for all expression nodes."""
    pass


@dataclass(frozen=True)
class ArithNode(Node):
    """Base class for expressions that evaluate to a number."""
    pass


@dataclass(frozen=True)
class BoolNode(Node):
    """Base class for expressions that evaluate to a boolean."""
    pass


@dataclass(frozen=True)
class Add(ArithNode):
    left: ArithNode
    right: ArithNode

    def __str__(self) -> str:
        return f"({self.left} + {self.right})"


@dataclass(frozen=True)
class Sub(ArithNode):
    left: ArithNode
    right: ArithNode

    def __str__(self) -> str:
        return f"({self.left} - {self.right})"


@dataclass(frozen=True)
class Mul(ArithNode):
    left: ArithNode
    right: ArithNode

    def __str__(self) -> str:
        return f"({self.left} * {self.right})"


@dataclass(frozen=True)
class Div(ArithNode):
    left: ArithNode
    right: ArithNode

    def __str__(self) -> str:
        return f"({self.left} / {self.right})"


@dataclass(frozen=True)
class Pow(ArithNode):
    base: ArithNode
    exponent: ArithNode

    def __str__(self) -> str:
        return f"({self.base}^{self.exponent})"


@dataclass(frozen=True)
class Neg(ArithNode):
    operand: ArithNode

    def __str__(self) -> str:
        return f"(-{self.operand})"


@dataclass(frozen=True)
class Const(ArithNode):
    value: float

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class Param(ArithNode):
    name: str  # a single lowercase letter

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Not(BoolNode):
    operand: BoolNode

    def __str__(self) -> str:
        return f"!({self.operand})"


@dataclass(frozen=True)
class And(BoolNode):
    left: BoolNode
    right: BoolNode

    def __str__(self) -> str:
        return f"({self.left} && {self.right})"


@dataclass(frozen=True)
class Or(BoolNode):
    left: BoolNode
    right: BoolNode

    def __str__(self) -> str:
        return f"({self.left} || {self.right})"


@dataclass(frozen=True)
class Lth(BoolNode):
    left: ArithNode
    right: ArithNode

    def __str__(self) -> str:
        return f"({self.left} < {self.right})"


@dataclass(frozen=True)
class Leq(BoolNode):
    left: ArithNode
    right: ArithNode

    def __str__(self) -> str:
        return f"({self.left} <= {self.right})"


@dataclass(frozen=True)
class Gth(BoolNode):
    left: ArithNode
    right: ArithNode

    def __str__(self) -> str:
        return f"({self.left} > {self.right})"


@dataclass(frozen=True)
class Geq(BoolNode):
    left: ArithNode
    right: ArithNode

    def __str__(self) -> str:
        return f"({self.left} >= {self.right})"


@dataclass(frozen=True)
class Eq(BoolNode):
    left: ArithNode
    right: ArithNode

    def __str__(self) -> str:
        return f"({self.left} == {self.right})"


@dataclass(frozen=True)
class BoolConst(BoolNode):
    value: bool

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


TRUE = BoolConst(True)
