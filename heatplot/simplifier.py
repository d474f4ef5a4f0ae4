"""
Negation-collapsing rewrite pass.

Only two rewrites are applied, bottom-up:

    -(-(e))     ->  e
    -((-(e)))   ->  e

Everything else keeps its shape; there is no constant folding or
reordering. The result is a new tree and ``simplify`` is idempotent.

A collapsed ``-( )`` also removes the parentheses it printed with. When the
surviving expression is an operator chain sitting in an operand position,
it is wrapped in ``Brackets`` so that ``1 - -(-(a + b))`` becomes
``1 - (a + b)`` rather than ``1 - a + b``.
"""

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
    is_compound,
)


def simplify(expr: Expression, grouped: bool = False) -> Expression:
    """
    Simplify ``expr``.

    Args:
        expr: tree to simplify
        grouped: ``expr`` is an operand of an operator chain, so a collapse
            that exposes another chain must keep it parenthesised

    Returns:
        New tree (or ``expr`` itself for leaves)
    """
    if isinstance(expr, (NumberExpr, VarExpr)):
        return expr

    elif isinstance(expr, NegateExpr):
        inner = expr.operand
        if isinstance(inner, BracketsExpr) and isinstance(inner.expr, NegateExpr):
            inner = inner.expr
        if isinstance(inner, NegateExpr):
            collapsed = simplify(inner.operand, grouped)
            if grouped and is_compound(collapsed):
                return BracketsExpr(collapsed)
            return collapsed
        return NegateExpr(simplify(expr.operand))

    elif isinstance(expr, BracketsExpr):
        return BracketsExpr(simplify(expr.expr))

    elif isinstance(expr, BinaryOpExpr):
        return BinaryOpExpr(simplify(expr.left, True), expr.operator, simplify(expr.right, True))

    elif isinstance(expr, SingleFunctionExpr):
        return SingleFunctionExpr(expr.name, simplify(expr.arg))

    elif isinstance(expr, DoubleFunctionExpr):
        return DoubleFunctionExpr(expr.name,
                                  simplify(expr.arg1, expr.infix),
                                  simplify(expr.arg2, expr.infix),
                                  expr.infix)

    raise TypeError(f"Cannot simplify {type(expr).__name__}")


def simplify_equation(equation: Equation) -> Equation:
    lhs = simplify(equation.lhs) if equation.lhs is not None else None
    rhs = simplify(equation.rhs) if equation.rhs is not None else None
    return Equation(lhs, rhs)
