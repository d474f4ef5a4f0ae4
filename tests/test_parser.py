import pytest

from heatplot.errors import ParseError
from heatplot.expressions import (
    BinaryOpExpr,
    BracketsExpr,
    DoubleFunctionExpr,
    NegateExpr,
    NumberExpr,
    SingleFunctionExpr,
    VarExpr,
)
from heatplot.parser import parse_equation

ROUND_TRIP_CORPUS = [
    "y = x + 2",
    "y / 4 = x * (x + 2)",
    "T = Y ^ 2 + X ^ 2",
    "-(42 + 55.75) = X / 16.25",
    "-(-(42 + 55.75)) = X",
    "1 - -(-(42 + 55.75)) = X",
    "42 Expm1 55.75 = X",
    "42 Expm1 T = X",
    "42 % T = X",
    "-(-(-(42 + 55.75) - -(-(T + Y - X ^ T)))) = X / 16.25",
    "Sin(x) = Cos(y * T)",
    "Atan2(y, x) = 0.25",
    "x Max y = Hypot(x, -(y))",
    "-((-(x))) = y",
    "Y0(x) = Jn(2, y)",
    "1e-05 = 1.234567e+06",
]


@pytest.mark.parametrize("source", ROUND_TRIP_CORPUS)
def test_round_trip(source):
    assert parse_equation(source).to_text() == source


def test_serialize_parse_serialize_is_stable():
    text = parse_equation("  y=-x   ^2 +Sin( t )").to_text()
    assert text == "y = -(x) ^ 2 + Sin(t)"
    assert parse_equation(text).to_text() == text


def test_precedence():
    equation = parse_equation("y = 1 + 2 * x ^ 3")
    assert equation.rhs == BinaryOpExpr(
        NumberExpr(1.0), "+",
        BinaryOpExpr(NumberExpr(2.0), "*", BinaryOpExpr(VarExpr("x"), "^", NumberExpr(3.0))),
    )


def test_left_associative_chain():
    equation = parse_equation("y = 1 - 2 - 3")
    assert equation.rhs == BinaryOpExpr(
        BinaryOpExpr(NumberExpr(1.0), "-", NumberExpr(2.0)), "-", NumberExpr(3.0))


def test_power_is_right_associative():
    equation = parse_equation("y = 2 ^ 3 ^ x")
    assert equation.rhs == BinaryOpExpr(
        NumberExpr(2.0), "^", BinaryOpExpr(NumberExpr(3.0), "^", VarExpr("x")))


def test_negation_owns_its_parentheses():
    equation = parse_equation("-(x + 1) = (y)")
    assert equation.lhs == NegateExpr(BinaryOpExpr(VarExpr("x"), "+", NumberExpr(1.0)))
    assert equation.rhs == BracketsExpr(VarExpr("y"))


def test_bracketed_negation_keeps_both_layers():
    equation = parse_equation("-((-(x))) = y")
    assert equation.lhs == NegateExpr(BracketsExpr(NegateExpr(VarExpr("x"))))


def test_function_calls():
    equation = parse_equation("Sin(x) = Max(x, y)")
    assert equation.lhs == SingleFunctionExpr("Sin", VarExpr("x"))
    assert equation.rhs == DoubleFunctionExpr("Max", VarExpr("x"), VarExpr("y"), infix=False)


def test_infix_function():
    equation = parse_equation("42 Expm1 T = X")
    assert equation.lhs == DoubleFunctionExpr("Expm1", NumberExpr(42.0), VarExpr("T"), infix=True)


def test_unknown_function_names_parse():
    equation = parse_equation("Frobnicate(x) = y")
    assert equation.lhs == SingleFunctionExpr("Frobnicate", VarExpr("x"))


@pytest.mark.parametrize("source", [
    "",
    "y",
    "y = ",
    "y = x = 2",
    "y = (x + 2",
    "y = x + 2)",
    "y = Sin x",
    "y = Max(x, y, 2)",
    "= x",
    "y = * 2",
])
def test_malformed_input(source):
    with pytest.raises(ParseError) as excinfo:
        parse_equation(source)
    assert repr(source) in str(excinfo.value)
    assert excinfo.value.text == source


def test_parse_error_is_a_syntax_error():
    with pytest.raises(SyntaxError):
        parse_equation("y = = x")
