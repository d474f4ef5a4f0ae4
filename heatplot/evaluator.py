"""
Numeric evaluation of expression trees.

All arithmetic is float64 and runs under ``np.errstate(all="ignore")``:
division by zero, overflow and domain errors produce inf/nan rather than
exceptions. The same code evaluates one point (scalars) or a whole grid
(arrays broadcast against each other).

Operand order follows the parsed node: for ``a OP b`` the node's left is
``a`` and right is ``b``, and

    +  ->  b + a        -  ->  b - a        *  ->  b * a
    /  ->  b / a        ^  ->  a ** b       %  ->  fmod(a, b)

Unregistered function names are permissive: a single-argument call returns
its argument, a double-argument call returns its first argument.
"""

import warnings
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .errors import EvaluationFault, NoEquationError, UnknownFunctionError
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
from .functions import lookup_double, lookup_single

BINARY_OPERATIONS = {
    "+": lambda l, r: np.add(r, l),
    "-": lambda l, r: np.subtract(r, l),
    "*": lambda l, r: np.multiply(r, l),
    "/": lambda l, r: np.divide(r, l),
    "^": lambda l, r: np.power(l, r),
    "%": lambda l, r: np.fmod(l, r),
}


@dataclass
class EvalState:
    """
    Bound variable values for one evaluation, plus which of them were read.

    Created fresh for every evaluation call and never shared.
    """
    x: object
    y: object
    t: object
    strict: bool = False
    accessed_x: bool = False
    accessed_y: bool = False
    accessed_t: bool = False

    def cur_x(self):
        self.accessed_x = True
        return self.x

    def cur_y(self):
        self.accessed_y = True
        return self.y

    def cur_t(self):
        self.accessed_t = True
        return self.t

    def read(self, name: str):
        key = name.upper()
        if key == "X":
            return self.cur_x()
        elif key == "Y":
            return self.cur_y()
        elif key == "T":
            return self.cur_t()
        return np.float64(0.0)

    @property
    def time_used(self) -> bool:
        return self.accessed_t


def evaluate_expression(expr: Expression, state: EvalState):
    """
    Evaluate a tree against ``state``.

    Returns a float64 scalar or an array shaped like the state's bound
    values. Exceptions other than numeric ones propagate to the caller.
    """
    if isinstance(expr, NumberExpr):
        return np.float64(expr.value)

    elif isinstance(expr, VarExpr):
        return state.read(expr.name)

    elif isinstance(expr, BinaryOpExpr):
        left = evaluate_expression(expr.left, state)
        right = evaluate_expression(expr.right, state)
        if expr.operator in BINARY_OPERATIONS:
            return BINARY_OPERATIONS[expr.operator](left, right)
        raise ValueError(f"Unknown operator: {expr.operator}")

    elif isinstance(expr, NegateExpr):
        return np.negative(evaluate_expression(expr.operand, state))

    elif isinstance(expr, BracketsExpr):
        return evaluate_expression(expr.expr, state)

    elif isinstance(expr, SingleFunctionExpr):
        value = evaluate_expression(expr.arg, state)
        function = lookup_single(expr.name)
        if function is None:
            if state.strict:
                raise UnknownFunctionError(expr.name, 1)
            return value
        return function(value)

    elif isinstance(expr, DoubleFunctionExpr):
        first = evaluate_expression(expr.arg1, state)
        second = evaluate_expression(expr.arg2, state)
        function = lookup_double(expr.name)
        if function is None:
            if state.strict:
                raise UnknownFunctionError(expr.name, 2)
            return first
        return function(first, second)

    raise TypeError(f"Cannot evaluate {type(expr).__name__}")


def _residual(equation: Equation, state: EvalState):
    if not equation.is_bound:
        raise NoEquationError()
    with np.errstate(all="ignore"):
        return np.subtract(evaluate_expression(equation.rhs, state),
                           evaluate_expression(equation.lhs, state))


def evaluate_equation(equation: Equation, x, y, t, strict: bool = False) -> Tuple[float, bool]:
    """
    Residual ``rhs - lhs`` at one point.

    A runtime fault inside the tree (anything but ``NoEquationError``) is
    normalised to a residual of 0 with a warning, so one bad sample never
    aborts a grid scan. With ``strict`` the fault is raised as
    ``EvaluationFault`` and unknown function names raise
    ``UnknownFunctionError``.

    Args:
        equation: equation to evaluate
        x, y: real coordinates
        t: time value
        strict: disable the permissive policies

    Returns:
        ``(residual, time_used)``

    Raises:
        NoEquationError: the equation has no sides bound
    """
    state = EvalState(np.float64(x), np.float64(y), np.float64(t), strict=strict)
    try:
        residual = _residual(equation, state)
    except (NoEquationError, UnknownFunctionError):
        raise
    except Exception as e:
        if strict:
            raise EvaluationFault(x, y, t, e) from e
        warnings.warn(f"Recovered from evaluation fault: {type(e).__name__}: {e}")
        return 0.0, state.time_used
    return float(residual), state.time_used


def evaluate_equation_grid(equation: Equation, xs: np.ndarray, ys: np.ndarray, t,
                           strict: bool = False) -> Tuple[np.ndarray, bool]:
    """
    Residuals for every point of a grid in one pass.

    ``xs`` and ``ys`` must broadcast together; the result has their
    broadcast shape. Faults are not normalised here: the caller decides how
    to recover (see ``heatplot.sampler.plot_for_time``).
    """
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    state = EvalState(xs, ys, np.float64(t), strict=strict)
    residual = _residual(equation, state)
    shape = np.broadcast_shapes(xs.shape, ys.shape)
    residual = np.broadcast_to(np.asarray(residual, dtype=np.float64), shape).copy()
    return residual, state.time_used
