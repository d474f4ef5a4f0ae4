"""
Sampling an equation over an integer grid, one frame per time step.
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .errors import NoEquationError
from .evaluator import evaluate_equation, evaluate_equation_grid
from .expressions import Equation

# Residuals in this closed band count as "on or near the curve"
NEAR_ZERO_LOW = -1.0
NEAR_ZERO_HIGH = 1.0


@dataclass(frozen=True)
class GridRect:
    """Half-open integer rectangle ``[min_x, max_x) x [min_y, max_y)``"""
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @classmethod
    def around_origin(cls, size: int) -> "GridRect":
        """``[-size, size)`` on both axes"""
        return cls(-size, -size, size, size)

    @property
    def width(self) -> int:
        return max(0, self.max_x - self.min_x)

    @property
    def height(self) -> int:
        return max(0, self.max_y - self.min_y)

    @property
    def shape(self) -> Tuple[int, int]:
        """NumPy shape of a buffer over this rect, rows are y"""
        return (self.height, self.width)

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y


def count_near_zero(values: np.ndarray) -> int:
    return int(np.count_nonzero((values >= NEAR_ZERO_LOW) & (values <= NEAR_ZERO_HIGH)))


@dataclass(eq=False)
class Plot:
    """
    Residuals of one frame.

    ``values[y - rect.min_y, x - rect.min_x]`` holds the residual of cell
    ``(x, y)``; ``sets`` counts cells with a residual in ``[-1, 1]``.
    """
    rect: GridRect
    values: np.ndarray
    t: int = 0
    sets: int = 0

    @classmethod
    def empty(cls, rect: GridRect, t: int = 0) -> "Plot":
        return cls(rect, np.zeros(rect.shape, dtype=np.float64), t)

    @classmethod
    def from_values(cls, rect: GridRect, values: np.ndarray, t: int = 0) -> "Plot":
        values = np.asarray(values, dtype=np.float64)
        if values.shape != rect.shape:
            raise ValueError(f"Buffer shape {values.shape} does not match grid {rect.shape}")
        return cls(rect, values, t, count_near_zero(values))

    def get(self, x: int, y: int) -> float:
        """Residual at cell ``(x, y)``; 0 outside the grid"""
        if not self.rect.contains(x, y):
            return 0.0
        return float(self.values[y - self.rect.min_y, x - self.rect.min_x])

    def set(self, x: int, y: int, residual: float):
        if not self.rect.contains(x, y):
            return
        self.values[y - self.rect.min_y, x - self.rect.min_x] = residual
        if NEAR_ZERO_LOW <= residual <= NEAR_ZERO_HIGH:
            self.sets += 1

    def __eq__(self, other):
        if not isinstance(other, Plot):
            return NotImplemented
        return self.values.shape == other.values.shape and bool(np.array_equal(self.values, other.values))

    def __repr__(self):
        return f"Plot(t={self.t}, rect={self.rect}, sets={self.sets})"


def _plot_per_cell(equation: Equation, rect: GridRect, t, cell_size: float) -> Tuple[Plot, bool]:
    plot = Plot.empty(rect, t)
    time_used = False
    for x in range(rect.min_x, rect.max_x):
        for y in range(rect.min_y, rect.max_y):
            residual, used = evaluate_equation(equation, x * cell_size, y * cell_size, t)
            time_used = time_used or used
            plot.set(x, y, residual)
    return plot, time_used


def plot_for_time(equation: Equation, rect: GridRect, t, cell_size: float) -> Tuple[Plot, bool]:
    """
    Sample ``equation`` at every cell of ``rect`` for one time value.

    Cell ``(x, y)`` is evaluated at real coordinates
    ``(x * cell_size, y * cell_size, t)``. The whole grid is evaluated with
    NumPy in one pass; if that raises, the grid is rescanned cell by cell so
    only the faulting cells get a residual of 0. The two paths agree up to
    float rounding: NumPy array kernels can differ from the scalar ones in
    the last bit, so frames sampled by different paths may not compare equal.

    Args:
        equation: equation to sample
        rect: integer grid
        t: time value
        cell_size: real distance between neighbouring cells

    Returns:
        ``(plot, time_used)``

    Raises:
        NoEquationError: the equation is unbound
    """
    if not equation.is_bound:
        raise NoEquationError()

    xs = np.arange(rect.min_x, rect.max_x, dtype=np.float64) * cell_size
    ys = np.arange(rect.min_y, rect.max_y, dtype=np.float64) * cell_size
    try:
        values, time_used = evaluate_equation_grid(equation, xs[np.newaxis, :], ys[:, np.newaxis], t)
    except Exception:
        return _plot_per_cell(equation, rect, t, cell_size)

    return Plot.from_values(rect, values, t), time_used


def plot(equation: Equation, t_lower: int, t_upper: int, rect: GridRect,
         cell_size: float) -> Tuple[bool, List[Plot]]:
    """
    Sample ``equation`` across the time range ``[t_lower, t_upper)``.

    The first frame (``t = t_lower``) is always produced. Whether T was read
    while sampling it decides, once, if the remaining time steps are
    sampled: an equation that ignores T yields exactly one frame.

    Returns:
        ``(time_used, frames)``
    """
    first, time_used = plot_for_time(equation, rect, t_lower, cell_size)
    frames = [first]

    if time_used:
        for t in range(t_lower + 1, t_upper):
            frame, _ = plot_for_time(equation, rect, t, cell_size)
            frames.append(frame)

    return time_used, frames
