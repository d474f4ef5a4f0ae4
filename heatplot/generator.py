"""
Random equations and the search for one worth rendering.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from .acceptance import FrameAssessment, assess_frames
from .expressions import (
    BINARY_OPERATORS,
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
from .functions import FUNCTION_NAMES, is_single
from .sampler import GridRect, Plot, plot

MIN_DEPTH = 4
MAX_DEPTH = 10
VARIABLES = ("X", "Y", "T")


class RandomEquationGenerator:
    """
    Builds random expression trees.

    Every node kind is equally likely at each level; at depth 0 a variable
    is produced so each branch ends in something that can vary.
    """

    def __init__(self, seed: Optional[int] = None, max_depth: int = MAX_DEPTH):
        self.seed = seed
        self.max_depth = max_depth
        self.rng = np.random.default_rng(seed)
        self.builders: List[Callable[[int], Expression]] = [
            self.constant,
            self.variable,
            *[self._binary_builder(op) for op in BINARY_OPERATORS],
            self.negate,
            self.brackets,
            self.function,
        ]

    def choice(self, options):
        return options[int(self.rng.integers(len(options)))]

    def equation(self) -> Equation:
        return Equation(lhs=self.expression(self.max_depth), rhs=self.expression(self.max_depth))

    def expression(self, depth: int) -> Expression:
        if depth <= 0:
            return self.variable(0)
        return self.choice(self.builders)(depth - 1)

    def constant(self, depth: int) -> Expression:
        return NumberExpr(int(self.rng.integers(400)) / 4.0)

    def variable(self, depth: int) -> Expression:
        return VarExpr(self.choice(VARIABLES))

    def _binary_builder(self, operator: str) -> Callable[[int], Expression]:
        def build(depth: int) -> Expression:
            return BinaryOpExpr(self.expression(depth), operator, self.expression(depth))
        return build

    def negate(self, depth: int) -> Expression:
        return NegateExpr(BracketsExpr(self.expression(depth)))

    def brackets(self, depth: int) -> Expression:
        return BracketsExpr(self.expression(depth))

    def function(self, depth: int) -> Expression:
        name = self.choice(FUNCTION_NAMES)
        if is_single(name):
            return SingleFunctionExpr(name, self.expression(depth))
        return DoubleFunctionExpr(name, self.expression(depth), self.expression(depth),
                                  infix=bool(self.rng.integers(2) == 0))


@dataclass
class RandomResult:
    equation: Equation
    original_text: str
    time_used: bool
    plots: List[Plot]
    assessment: FrameAssessment
    attempts: int


def find_interesting_equation(generator: RandomEquationGenerator, rect: GridRect,
                              t_lower: int, t_upper: int, cell_size: float,
                              max_attempts: int = 1000, verbose: bool = False) -> RandomResult:
    """
    Generate, simplify and sample random equations until one passes
    ``assess_frames``.

    Raises:
        RuntimeError: no equation accepted within ``max_attempts``
    """
    for attempt in range(1, max_attempts + 1):
        candidate = generator.equation()
        original_text = candidate.to_text()
        equation = candidate.simplify()
        if verbose:
            print(f"Got function: {original_text}")
            simplified_text = equation.to_text()
            if simplified_text != original_text:
                print(f"Got simplified function: {simplified_text}")

        depth = equation.depth()
        if depth < MIN_DEPTH:
            if verbose:
                print("Not deep enough")
            continue
        if depth > MAX_DEPTH:
            if verbose:
                print("Too deep")
            continue

        time_used, plots = plot(equation, t_lower, t_upper, rect, cell_size)
        assessment = assess_frames(plots)
        if not assessment.accepted:
            if verbose:
                print(assessment.reason)
            continue

        return RandomResult(equation, original_text, time_used, plots, assessment, attempt)

    raise RuntimeError(f"No acceptable random equation after {max_attempts} attempts")
