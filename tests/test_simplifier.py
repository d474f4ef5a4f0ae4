import pytest

from heatplot.expressions import BracketsExpr, NegateExpr, VarExpr
from heatplot.generator import RandomEquationGenerator
from heatplot.parser import parse_equation
from heatplot.simplifier import simplify


@pytest.mark.parametrize("source, expected", [
    ("-(42 + 55.75) = X / 16.25", "-(42 + 55.75) = X / 16.25"),
    ("-(-(42 + 55.75)) = X", "42 + 55.75 = X"),
    ("1 - -(-(42 + 55.75)) = X", "1 - (42 + 55.75) = X"),
    ("42 Expm1 55.75 = X", "42 Expm1 55.75 = X"),
    ("42 Expm1 T = X", "42 Expm1 T = X"),
    ("42 % T = X", "42 % T = X"),
    ("-(-(-(42 + 55.75) - -(-(T + Y - X ^ T)))) = X / 16.25",
     "-(42 + 55.75) - (T + Y - X ^ T) = X / 16.25"),
    ("-((-(x))) = y", "x = y"),
    ("-(-(-(x))) = y", "-(x) = y"),
    ("Sin(-(-(x + 1))) = y", "Sin(x + 1) = y"),
    ("2 * -(-(x)) = y", "2 * x = y"),
    ("(x + 1) = y", "(x + 1) = y"),
    ("x Max -(-(y - 1)) = 0", "x Max (y - 1) = 0"),
])
def test_simplify(source, expected):
    equation = parse_equation(source)
    assert equation.to_text() == source
    assert equation.simplify().to_text() == expected


def test_simplify_returns_new_tree_and_keeps_original():
    equation = parse_equation("-(-(x)) = y")
    simplified = equation.simplify()
    assert simplified is not equation
    assert equation.to_text() == "-(-(x)) = y"
    assert simplified.to_text() == "x = y"


def test_negation_through_brackets():
    tree = NegateExpr(BracketsExpr(NegateExpr(VarExpr("x"))))
    assert simplify(tree) == VarExpr("x")


def test_idempotent_on_corpus():
    for source in [
        "-(-(-(42 + 55.75) - -(-(T + Y - X ^ T)))) = X / 16.25",
        "1 - -(-(42 + 55.75)) = X",
        "-((-(-(-(x))))) = -(-(-(-(y))))",
    ]:
        once = parse_equation(source).simplify()
        assert once.simplify() == once


def test_idempotent_on_random_trees():
    generator = RandomEquationGenerator(seed=1234, max_depth=6)
    for _ in range(200):
        once = generator.equation().simplify()
        twice = once.simplify()
        assert twice == once
        assert twice.to_text() == once.to_text()


def test_simplified_text_round_trips():
    generator = RandomEquationGenerator(seed=99, max_depth=5)
    for _ in range(100):
        text = generator.equation().simplify().to_text()
        assert parse_equation(text).to_text() == text


def test_simplify_preserves_value():
    generator = RandomEquationGenerator(seed=7, max_depth=5)
    for _ in range(100):
        equation = generator.equation()
        before, _ = equation.evaluate(0.5, -1.25, 3)
        after, _ = equation.simplify().evaluate(0.5, -1.25, 3)
        assert before == pytest.approx(after, nan_ok=True)
