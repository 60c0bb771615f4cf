"""Evaluation of arithmetic and boolean expression trees.

Evaluation is pure: the environment is only read, and the same tree
evaluated against the same environment always yields the same value.
Arithmetic follows IEEE float semantics, so division by zero produces an
infinity or nan rather than an exception.
"""

from __future__ import annotations

import math

from .ast import (
    Node, ArithNode, BoolNode,
    Add, Sub, Mul, Div, Pow, Neg, Const, Param,
    Not, And, Or, Lth, Leq, Gth, Geq, Eq, BoolConst,
)
from .environment import Environment


def _divide(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _power(base: float, exponent: float) -> float:
    # Only odd integer exponents keep the sign of the base, -0.0 included.
    odd = math.isfinite(exponent) and exponent == int(exponent) and int(exponent) % 2 == 1
    try:
        result = math.pow(base, exponent)
    except OverflowError:
        if base < 0 and odd:
            return -math.inf
        return math.inf
    except ValueError:
        # Negative base with a fractional exponent, or 0 to a negative power.
        if base == 0.0:
            return math.copysign(math.inf, base) if odd else math.inf
        return math.nan
    return result


def evaluate_arith(node: ArithNode, env: Environment) -> float:
    if isinstance(node, Const):
        return node.value
    if isinstance(node, Param):
        return env.get(node.name)
    if isinstance(node, Add):
        return evaluate_arith(node.left, env) + evaluate_arith(node.right, env)
    if isinstance(node, Sub):
        return evaluate_arith(node.left, env) - evaluate_arith(node.right, env)
    if isinstance(node, Mul):
        return evaluate_arith(node.left, env) * evaluate_arith(node.right, env)
    if isinstance(node, Div):
        return _divide(evaluate_arith(node.left, env), evaluate_arith(node.right, env))
    if isinstance(node, Pow):
        return _power(evaluate_arith(node.base, env), evaluate_arith(node.exponent, env))
    if isinstance(node, Neg):
        return -evaluate_arith(node.operand, env)
    raise NotImplementedError(f"evaluate_arith: unexpected node type {type(node)}")


def evaluate_bool(node: BoolNode, env: Environment) -> bool:
    if isinstance(node, BoolConst):
        return node.value
    if isinstance(node, Not):
        return not evaluate_bool(node.operand, env)
    if isinstance(node, And):
        # Both sides are always evaluated so that an unbound parameter on
        # the right is reported even when the left side is false.
        left = evaluate_bool(node.left, env)
        right = evaluate_bool(node.right, env)
        return left and right
    if isinstance(node, Or):
        left = evaluate_bool(node.left, env)
        right = evaluate_bool(node.right, env)
        return left or right
    if isinstance(node, (Lth, Leq, Gth, Geq, Eq)):
        a = evaluate_arith(node.left, env)
        b = evaluate_arith(node.right, env)
        if isinstance(node, Lth):
            return a < b
        if isinstance(node, Leq):
            return a <= b
        if isinstance(node, Gth):
            return a > b
        if isinstance(node, Geq):
            return a >= b
        return a == b
    raise NotImplementedError(f"evaluate_bool: unexpected node type {type(node)}")


def evaluate(node: Node, env: Environment):
    """Evaluate any expression node, dispatching on its family."""
    if isinstance(node, ArithNode):
        return evaluate_arith(node, env)
    if isinstance(node, BoolNode):
        return evaluate_bool(node, env)
    raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")
