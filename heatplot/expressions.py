"""
Expression tree for implicit equations over X, Y and T.

Nodes are frozen dataclasses: a parsed tree is never mutated, and
simplification builds a new tree so both can be kept side by side.

The closed set of node types is ``EXPRESSION_TYPES``. Every visitor
(evaluator, serializer, simplifier, symbolic engine) dispatches over exactly
this set and raises ``TypeError`` for anything else.
"""

from dataclasses import dataclass
from typing import Literal, Optional, Tuple, Union

# ============================================================================
# AST NODES
# ============================================================================

BINARY_OPERATORS = ("+", "-", "*", "/", "^", "%")


class ASTNode:
    """Base class for all AST nodes"""

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class Expression(ASTNode):
    """Base class for all expressions"""

    def evaluate(self, state):
        from .evaluator import evaluate_expression
        return evaluate_expression(self, state)

    def simplify(self) -> "Expression":
        from .simplifier import simplify
        return simplify(self)

    def to_text(self) -> str:
        from .serializer import to_text
        return to_text(self)

    def depth(self) -> int:
        return expression_depth(self)

    def __str__(self):
        return self.to_text()


@dataclass(frozen=True, repr=False)
class NumberExpr(Expression):
    value: float

    def __repr__(self):
        return f"Num({self.value})"


@dataclass(frozen=True, repr=False)
class VarExpr(Expression):
    """Free variable; ``name`` keeps the spelling it was written with"""
    name: str

    def __repr__(self):
        return f"Var({self.name})"


@dataclass(frozen=True, repr=False)
class BinaryOpExpr(Expression):
    left: Expression
    operator: Literal["+", "-", "*", "/", "^", "%"]
    right: Expression

    def __repr__(self):
        return f"BinOp({self.left!r} {self.operator} {self.right!r})"


@dataclass(frozen=True, repr=False)
class NegateExpr(Expression):
    operand: Expression

    def __repr__(self):
        return f"Neg({self.operand!r})"


@dataclass(frozen=True, repr=False)
class BracketsExpr(Expression):
    """Explicit user-visible grouping"""
    expr: Expression

    def __repr__(self):
        return f"Brackets({self.expr!r})"


@dataclass(frozen=True, repr=False)
class SingleFunctionExpr(Expression):
    name: str
    arg: Expression

    def __repr__(self):
        return f"Call({self.name}, {self.arg!r})"


@dataclass(frozen=True, repr=False)
class DoubleFunctionExpr(Expression):
    name: str
    arg1: Expression
    arg2: Expression
    infix: bool = False

    def __repr__(self):
        style = "infix" if self.infix else "prefix"
        return f"Call2({self.name}, {self.arg1!r}, {self.arg2!r}, {style})"


EXPRESSION_TYPES: Tuple[type, ...] = (
    NumberExpr,
    VarExpr,
    BinaryOpExpr,
    NegateExpr,
    BracketsExpr,
    SingleFunctionExpr,
    DoubleFunctionExpr,
)

AnyExpression = Union[
    NumberExpr,
    VarExpr,
    BinaryOpExpr,
    NegateExpr,
    BracketsExpr,
    SingleFunctionExpr,
    DoubleFunctionExpr,
]


# ============================================================================
# EQUATION
# ============================================================================

@dataclass(frozen=True)
class Equation(ASTNode):
    """
    ``lhs = rhs``, evaluated as the signed residual ``rhs - lhs``.

    Either side may be ``None`` only for an unbound equation, which fails to
    evaluate with ``NoEquationError``.
    """
    lhs: Optional[Expression]
    rhs: Optional[Expression]

    @property
    def is_bound(self) -> bool:
        return self.lhs is not None and self.rhs is not None

    def evaluate(self, x, y, t, strict: bool = False) -> Tuple[float, bool]:
        """
        Residual of the equation at one point.

        Args:
            x, y: real coordinates
            t: time value
            strict: raise on unknown functions and runtime faults instead of
                the permissive defaults

        Returns:
            ``(residual, time_used)``
        """
        from .evaluator import evaluate_equation
        return evaluate_equation(self, x, y, t, strict=strict)

    def simplify(self) -> "Equation":
        from .simplifier import simplify_equation
        return simplify_equation(self)

    def to_text(self) -> str:
        from .serializer import equation_to_text
        return equation_to_text(self)

    def depth(self) -> int:
        from .errors import NoEquationError
        if not self.is_bound:
            raise NoEquationError()
        return max(self.lhs.depth(), self.rhs.depth()) + 1

    def __str__(self):
        return self.to_text()

    def __repr__(self):
        return f"Equation({self.lhs!r} = {self.rhs!r})"


def expression_depth(expr: Expression) -> int:
    """Height of the tree; leaves count as 1"""
    if isinstance(expr, (NumberExpr, VarExpr)):
        return 1
    elif isinstance(expr, NegateExpr):
        return expr.operand.depth() + 1
    elif isinstance(expr, BracketsExpr):
        return expr.expr.depth() + 1
    elif isinstance(expr, SingleFunctionExpr):
        return expr.arg.depth() + 1
    elif isinstance(expr, BinaryOpExpr):
        return max(expr.left.depth(), expr.right.depth()) + 1
    elif isinstance(expr, DoubleFunctionExpr):
        return max(expr.arg1.depth(), expr.arg2.depth()) + 1
    raise TypeError(f"Cannot measure depth of {type(expr).__name__}")


def is_compound(expr: Expression) -> bool:
    """True for nodes whose text is an unparenthesised operator chain"""
    if isinstance(expr, BinaryOpExpr):
        return True
    return isinstance(expr, DoubleFunctionExpr) and expr.infix
