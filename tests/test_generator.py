import pytest

from heatplot.expressions import (
    BinaryOpExpr,
    BracketsExpr,
    DoubleFunctionExpr,
    NegateExpr,
    NumberExpr,
    SingleFunctionExpr,
    VarExpr,
)
from heatplot.functions import is_double, is_single
from heatplot.generator import RandomEquationGenerator, find_interesting_equation
from heatplot.parser import parse_equation
from heatplot.sampler import GridRect


def walk(expr):
    yield expr
    if isinstance(expr, BinaryOpExpr):
        yield from walk(expr.left)
        yield from walk(expr.right)
    elif isinstance(expr, NegateExpr):
        yield from walk(expr.operand)
    elif isinstance(expr, BracketsExpr):
        yield from walk(expr.expr)
    elif isinstance(expr, SingleFunctionExpr):
        yield from walk(expr.arg)
    elif isinstance(expr, DoubleFunctionExpr):
        yield from walk(expr.arg1)
        yield from walk(expr.arg2)


def nodes(equation):
    yield from walk(equation.lhs)
    yield from walk(equation.rhs)


class FixedGenerator:
    def __init__(self, *sources):
        self.equations = [parse_equation(source) for source in sources]

    def equation(self):
        return self.equations.pop(0)


def test_seeded_generators_agree():
    a = RandomEquationGenerator(seed=5)
    b = RandomEquationGenerator(seed=5)
    assert [a.equation().to_text() for _ in range(20)] == [b.equation().to_text() for _ in range(20)]


def test_different_seeds_differ():
    a = RandomEquationGenerator(seed=1)
    b = RandomEquationGenerator(seed=2)
    assert [a.equation().to_text() for _ in range(10)] != [b.equation().to_text() for _ in range(10)]


def test_generated_nodes_are_well_formed():
    generator = RandomEquationGenerator(seed=11, max_depth=6)
    kinds = set()
    for _ in range(300):
        for node in nodes(generator.equation()):
            kinds.add(type(node))
            if isinstance(node, NumberExpr):
                assert 0 <= node.value < 100
                assert (node.value * 4).is_integer()
            elif isinstance(node, VarExpr):
                assert node.name in ("X", "Y", "T")
            elif isinstance(node, NegateExpr):
                assert isinstance(node.operand, BracketsExpr)
            elif isinstance(node, SingleFunctionExpr):
                assert is_single(node.name)
            elif isinstance(node, DoubleFunctionExpr):
                assert is_double(node.name)
    assert kinds == {BinaryOpExpr, BracketsExpr, DoubleFunctionExpr, NegateExpr,
                     NumberExpr, SingleFunctionExpr, VarExpr}


def test_depth_zero_is_a_variable():
    generator = RandomEquationGenerator(seed=3)
    for _ in range(20):
        assert isinstance(generator.expression(0), VarExpr)


def test_generated_text_round_trips():
    generator = RandomEquationGenerator(seed=2024, max_depth=5)
    for _ in range(200):
        text = generator.equation().to_text()
        assert parse_equation(text).to_text() == text


def test_find_interesting_equation_skips_shallow_candidates(capsys):
    generator = FixedGenerator("y = x", "Sin(X * 3 + T) = Y * 3")
    result = find_interesting_equation(generator, GridRect.around_origin(10), 0, 6, 0.1, verbose=True)
    assert result.attempts == 2
    assert result.time_used is True
    assert len(result.plots) == 6
    assert result.assessment.accepted
    assert result.equation.to_text() == "Sin(X * 3 + T) = Y * 3"
    assert "Not deep enough" in capsys.readouterr().out


def test_find_interesting_equation_reports_rejections(capsys):
    generator = FixedGenerator("X * 0 + T * 0 = Y * 0", "Sin(X * 3 + T) = Y * 3")
    result = find_interesting_equation(generator, GridRect.around_origin(10), 0, 6, 0.1, verbose=True)
    assert result.attempts == 2
    assert "Too few frames are different" in capsys.readouterr().out


def test_find_interesting_equation_simplifies():
    generator = FixedGenerator("-(-(Sin(X * 3 + T))) = Y * 3")
    result = find_interesting_equation(generator, GridRect.around_origin(10), 0, 6, 0.1)
    assert result.original_text == "-(-(Sin(X * 3 + T))) = Y * 3"
    assert result.equation.to_text() == "Sin(X * 3 + T) = Y * 3"


def test_find_interesting_equation_gives_up():
    with pytest.raises(RuntimeError):
        find_interesting_equation(RandomEquationGenerator(seed=1), GridRect.around_origin(2), 0, 3, 0.1,
                                  max_attempts=0)


@pytest.mark.parametrize("source, depth", [
    ("y = x", 2),
    ("y = -(x)", 3),
    ("y = Sin(x + 1)", 4),
    ("Sin(X * 3 + T) = Y * 3", 5),
    ("x Max (y - 1) = 0", 5),
])
def test_equation_depth(source, depth):
    assert parse_equation(source).depth() == depth
