"""
Canonical text for expression trees.

The output is exact: spacing and symbols are part of the format, and
``parse_equation(text).to_text() == text`` holds for any text produced here.
"""

import math

import numpy as np

from .errors import NoEquationError
from .expressions import (
    BinaryOpExpr,
    BracketsExpr,
    DoubleFunctionExpr,
    Equation,
    Expression,
    NegateExpr,
    NumberExpr,
    SingleFunctionExpr,
    VarExpr,
)

# %g switches to exponent form outside 1e-4 <= |v| < 1e6
SCIENTIFIC_BELOW = -4
SCIENTIFIC_FROM = 6


def format_number(value: float) -> str:
    """
    Shortest ``%g``-style text that reads back as the same float.

    ``42.0 -> "42"``, ``55.75 -> "55.75"``, ``1e-05 -> "1e-05"``,
    ``1234567.0 -> "1.234567e+06"``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    scientific = np.format_float_scientific(value, unique=True, trim="-", exp_digits=2)
    exponent = int(scientific.split("e")[1])
    if exponent < SCIENTIFIC_BELOW or exponent >= SCIENTIFIC_FROM:
        return scientific
    return np.format_float_positional(value, unique=True, trim="-")


def to_text(expr: Expression) -> str:
    if isinstance(expr, NumberExpr):
        return format_number(expr.value)

    elif isinstance(expr, VarExpr):
        return expr.name

    elif isinstance(expr, BinaryOpExpr):
        return f"{to_text(expr.left)} {expr.operator} {to_text(expr.right)}"

    elif isinstance(expr, NegateExpr):
        return f"-({to_text(expr.operand)})"

    elif isinstance(expr, BracketsExpr):
        return f"({to_text(expr.expr)})"

    elif isinstance(expr, SingleFunctionExpr):
        return f"{expr.name}({to_text(expr.arg)})"

    elif isinstance(expr, DoubleFunctionExpr):
        if expr.infix:
            return f"{to_text(expr.arg1)} {expr.name} {to_text(expr.arg2)}"
        return f"{expr.name}({to_text(expr.arg1)}, {to_text(expr.arg2)})"

    raise TypeError(f"Cannot serialize {type(expr).__name__}")


def equation_to_text(equation: Equation) -> str:
    if not equation.is_bound:
        raise NoEquationError()
    return f"{to_text(equation.lhs)} = {to_text(equation.rhs)}"
