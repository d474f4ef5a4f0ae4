"""
heatplot: animated heat maps of implicit equations.

An equation such as ``y / 4 = x * (x + 2)`` is parsed into an expression
tree, sampled over an integer grid for each time step T, and every sample's
residual (``rhs - lhs``) is binned into a heat colour. Equations that never
read T produce a single frame.
"""

__version__ = "0.3.0"

from .errors import (
    EvaluationFault,
    HeatPlotError,
    NoEquationError,
    ParseError,
    UnknownFunctionError,
)
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
from .tokens import Token, tokenize
from .parser import EquationParser, parse_equation
from .functions import DOUBLE_FUNCTIONS, FUNCTION_NAMES, SINGLE_FUNCTIONS
from .evaluator import EvalState, evaluate_equation
from .simplifier import simplify
from .serializer import format_number, to_text
from .sampler import GridRect, Plot, plot, plot_for_time
from .colours import heat_colour, heat_colours
from .acceptance import FrameAssessment, assess_frames
from .generator import RandomEquationGenerator, find_interesting_equation
from .config import RenderConfig

__all__ = [
    'BinaryOpExpr',
    'BracketsExpr',
    'DOUBLE_FUNCTIONS',
    'DoubleFunctionExpr',
    'Equation',
    'EquationParser',
    'EvalState',
    'EvaluationFault',
    'Expression',
    'FUNCTION_NAMES',
    'FrameAssessment',
    'GridRect',
    'HeatPlotError',
    'NegateExpr',
    'NoEquationError',
    'NumberExpr',
    'ParseError',
    'Plot',
    'RandomEquationGenerator',
    'RenderConfig',
    'SINGLE_FUNCTIONS',
    'SingleFunctionExpr',
    'Token',
    'UnknownFunctionError',
    'VarExpr',
    'assess_frames',
    'evaluate_equation',
    'find_interesting_equation',
    'format_number',
    'heat_colour',
    'heat_colours',
    'parse_equation',
    'plot',
    'plot_for_time',
    'simplify',
    'to_text',
    'tokenize',
]
