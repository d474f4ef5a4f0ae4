"""
SymPy view of an equation, used for labels and static inspection.

The conversion mirrors what the evaluator computes (operand order, permissive
unknown functions), so the symbolic residual is the function being plotted.
"""

from typing import Callable, Dict, Set

import sympy as sp

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
from .functions import is_double, is_single

SYMPY_SINGLE: Dict[str, Callable[[sp.Expr], sp.Expr]] = {
    "ABS": sp.Abs,
    "ACOS": sp.acos,
    "ACOSH": sp.acosh,
    "ASIN": sp.asin,
    "ASINH": sp.asinh,
    "ATAN": sp.atan,
    "ATANH": sp.atanh,
    "CBRT": lambda a: sp.real_root(a, 3),
    "CEIL": sp.ceiling,
    "COS": sp.cos,
    "COSH": sp.cosh,
    "ERF": sp.erf,
    "ERFC": sp.erfc,
    "ERFCINV": sp.erfcinv,
    "ERFINV": sp.erfinv,
    "EXP": sp.exp,
    "EXP2": lambda a: sp.Integer(2) ** a,
    "EXPM1": lambda a: sp.exp(a) - 1,
    "FLOOR": sp.floor,
    "GAMMA": sp.gamma,
    "J0": lambda a: sp.besselj(0, a),
    "J1": lambda a: sp.besselj(1, a),
    "LOG": sp.log,
    "LOG10": lambda a: sp.log(a, 10),
    "LOG1P": lambda a: sp.log(1 + a),
    "LOG2": lambda a: sp.log(a, 2),
    "SIN": sp.sin,
    "SINH": sp.sinh,
    "SQRT": sp.sqrt,
    "TAN": sp.tan,
    "TANH": sp.tanh,
    "Y0": lambda a: sp.bessely(0, a),
    "Y1": lambda a: sp.bessely(1, a),
}

SYMPY_DOUBLE: Dict[str, Callable[[sp.Expr, sp.Expr], sp.Expr]] = {
    "ATAN2": sp.atan2,
    "HYPOT": lambda a, b: sp.sqrt(a ** 2 + b ** 2),
    "JN": sp.besselj,
    "MAX": sp.Max,
    "MIN": sp.Min,
    "POW": lambda a, b: a ** b,
    "YN": sp.bessely,
}


class SymbolicEngine:
    """Converts equation trees to SymPy with a cached symbol table"""

    def __init__(self):
        self.symbol_map = {}
        self.function_map = {}

    def get_symbol(self, name: str) -> sp.Symbol:
        """Real symbol for a variable, shared across calls (x, y, t)"""
        key = name.lower()
        if key not in self.symbol_map:
            self.symbol_map[key] = sp.Symbol(key, real=True)
        return self.symbol_map[key]

    def get_function(self, name: str) -> sp.Function:
        """Opaque SymPy function for registered names SymPy has no equivalent for"""
        if name not in self.function_map:
            self.function_map[name] = sp.Function(name, real=True)
        return self.function_map[name]

    def ast_to_sympy(self, expr: Expression) -> sp.Expr:
        """
        Convert an expression tree to SymPy.

        Args:
            expr: AST expression node

        Returns:
            SymPy expression with the evaluator's semantics
        """
        if isinstance(expr, NumberExpr):
            if float(expr.value).is_integer():
                return sp.Integer(int(expr.value))
            return sp.Float(expr.value)

        elif isinstance(expr, VarExpr):
            return self.get_symbol(expr.name)

        elif isinstance(expr, BinaryOpExpr):
            left = self.ast_to_sympy(expr.left)
            right = self.ast_to_sympy(expr.right)

            ops = {
                "+": lambda l, r: r + l,
                "-": lambda l, r: r - l,
                "*": lambda l, r: r * l,
                "/": lambda l, r: r / l,
                "^": lambda l, r: l ** r,
                # truncated remainder: the sign follows the dividend, like fmod
                "%": lambda l, r: sp.sign(l) * sp.Mod(sp.Abs(l), sp.Abs(r)),
            }

            if expr.operator in ops:
                return ops[expr.operator](left, right)
            raise ValueError(f"Unknown operator: {expr.operator}")

        elif isinstance(expr, NegateExpr):
            return -self.ast_to_sympy(expr.operand)

        elif isinstance(expr, BracketsExpr):
            return self.ast_to_sympy(expr.expr)

        elif isinstance(expr, SingleFunctionExpr):
            arg = self.ast_to_sympy(expr.arg)
            key = expr.name.upper()
            if key in SYMPY_SINGLE:
                return SYMPY_SINGLE[key](arg)
            if is_single(expr.name):
                return self.get_function(expr.name)(arg)
            return arg

        elif isinstance(expr, DoubleFunctionExpr):
            first = self.ast_to_sympy(expr.arg1)
            second = self.ast_to_sympy(expr.arg2)
            key = expr.name.upper()
            if key in SYMPY_DOUBLE:
                return SYMPY_DOUBLE[key](first, second)
            if is_double(expr.name):
                return self.get_function(expr.name)(first, second)
            return first

        raise ValueError(f"Cannot convert {type(expr).__name__} to SymPy")

    def equation_to_sympy(self, equation: Equation) -> sp.Expr:
        """Residual ``rhs - lhs`` as a SymPy expression"""
        if not equation.is_bound:
            raise NoEquationError()
        return self.ast_to_sympy(equation.rhs) - self.ast_to_sympy(equation.lhs)

    def latex(self, equation: Equation) -> str:
        """LaTeX for ``residual = 0``"""
        return f"{sp.latex(self.equation_to_sympy(equation))} = 0"

    def free_variables(self, equation: Equation) -> Set[str]:
        """Upper-case names of the variables the residual depends on"""
        residual = self.equation_to_sympy(equation)
        return {symbol.name.upper() for symbol in residual.free_symbols}
