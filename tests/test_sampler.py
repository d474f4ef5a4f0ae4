import numpy as np
import pytest

from heatplot.errors import NoEquationError
from heatplot.expressions import BracketsExpr, Equation, VarExpr
from heatplot.parser import parse_equation
from heatplot.sampler import GridRect, Plot, _plot_per_cell, count_near_zero, plot, plot_for_time


def test_grid_rect():
    rect = GridRect.around_origin(3)
    assert rect == GridRect(-3, -3, 3, 3)
    assert (rect.width, rect.height, rect.area) == (6, 6, 36)
    assert rect.shape == (6, 6)
    assert rect.contains(-3, 2)
    assert not rect.contains(3, 0)
    assert GridRect(2, 2, 1, 1).area == 0


def test_identity_line_samples():
    frame, time_used = plot_for_time(parse_equation("Y = X"), GridRect(-2, -2, 2, 2), 0, 1)
    assert time_used is False
    assert frame.get(1, 1) == 0
    assert frame.get(0, 1) == -1
    assert frame.get(1, 0) == 1
    assert frame.sets == 10


def test_get_outside_grid_is_zero():
    frame, _ = plot_for_time(parse_equation("Y = X + 5"), GridRect(-2, -2, 2, 2), 0, 1)
    assert frame.get(10, 10) == 0
    assert frame.get(-3, 0) == 0
    assert frame.get(0, 0) == 5


def test_cell_size_scales_coordinates():
    frame, _ = plot_for_time(parse_equation("0 = X"), GridRect(-4, -4, 4, 4), 0, 0.25)
    assert frame.get(2, 0) == 0.5
    assert frame.get(-4, 3) == -1


def test_vectorized_values_match_point_evaluation():
    equation = parse_equation("y / 4 = x * (x + 2) - Sin(T) + Max(x, y)")
    rect = GridRect(-3, -2, 4, 3)
    frame, _ = plot_for_time(equation, rect, 3, 0.5)
    for x in range(rect.min_x, rect.max_x):
        for y in range(rect.min_y, rect.max_y):
            expected, _ = equation.evaluate(x * 0.5, y * 0.5, 3)
            assert frame.get(x, y) == pytest.approx(expected, nan_ok=True)


def test_faulting_equation_falls_back_to_zero_cells():
    expr = VarExpr("x")
    for _ in range(5000):
        expr = BracketsExpr(expr)
    rect = GridRect(0, 0, 2, 2)
    with pytest.warns(UserWarning):
        frame, _ = plot_for_time(Equation(expr, VarExpr("y")), rect, 0, 1)
    assert np.all(frame.values == 0)
    assert frame.sets == rect.area


def test_unbound_equation():
    with pytest.raises(NoEquationError):
        plot_for_time(Equation(None, None), GridRect(0, 0, 2, 2), 0, 1)


def test_equation_without_time_yields_one_frame():
    time_used, frames = plot(parse_equation("y = x"), 0, 10, GridRect(-2, -2, 2, 2), 1)
    assert time_used is False
    assert len(frames) == 1
    assert frames[0].t == 0


def test_equation_with_time_yields_frame_per_step():
    time_used, frames = plot(parse_equation("y = x * T"), 0, 10, GridRect(-2, -2, 2, 2), 1)
    assert time_used is True
    assert [frame.t for frame in frames] == list(range(10))
    assert frames[0] != frames[1]


def test_empty_time_range_still_samples_first_frame():
    time_used, frames = plot(parse_equation("y = x * T"), 5, 5, GridRect(-2, -2, 2, 2), 1)
    assert time_used is True
    assert len(frames) == 1
    assert frames[0].t == 5


def test_plot_equality_compares_values():
    rect = GridRect(0, 0, 2, 2)
    a = Plot.from_values(rect, [[0.0, 2.0], [3.0, 0.5]])
    b = Plot.from_values(rect, [[0.0, 2.0], [3.0, 0.5]], t=4)
    c = Plot.from_values(rect, [[0.0, 2.0], [3.0, 0.25]])
    assert a == b
    assert a != c
    assert a.sets == 2


def test_from_values_checks_shape():
    with pytest.raises(ValueError):
        Plot.from_values(GridRect(0, 0, 2, 2), np.zeros((3, 2)))


def test_set_counts_near_zero():
    frame = Plot.empty(GridRect(0, 0, 3, 3))
    frame.set(0, 0, 0.5)
    frame.set(1, 0, 1.0)
    frame.set(2, 0, 1.5)
    frame.set(7, 7, 0.0)
    assert frame.sets == 2
    assert frame.get(2, 0) == 1.5


def test_count_near_zero_ignores_nan():
    assert count_near_zero(np.array([np.nan, -1.0, 1.0, np.inf, -1.01])) == 2


def test_vectorized_frames_agree_with_cell_scan_up_to_rounding():
    rect = GridRect(-6, -6, 6, 6)
    for source in [
        "y / 4 = x * (x + 2) - Sin(T) + Max(x, y)",
        "Exp(x) * Cos(y * T) = Hypot(x, y) ^ 2",
        "Log(x) = Atan2(y, x) % 3",
        "Sqrt(x * x + y * y) = Tanh(T - x) / 0.25",
    ]:
        equation = parse_equation(source)
        vectorized, _ = plot_for_time(equation, rect, 2, 0.5)
        scanned, _ = _plot_per_cell(equation, rect, 2, 0.5)
        np.testing.assert_allclose(vectorized.values, scanned.values, rtol=1e-12, atol=1e-9, equal_nan=True)
