import pytest

from heatplot.errors import ParseError
from heatplot.tokens import tokenize


def token_types(source):
    return [token.type for token in tokenize(source)]


def test_arithmetic_token_stream():
    assert token_types("1 + 2 * (3 / 4)") == [
        "NUMBER", "PLUS", "NUMBER", "MULTIPLY", "LPAREN", "NUMBER", "DIVIDE", "NUMBER", "RPAREN",
    ]


def test_whitespace_is_insignificant():
    assert token_types("y=x+2") == token_types("  y  =  x +   2 ")


@pytest.mark.parametrize("name", ["x", "X", "y", "Y", "t", "T"])
def test_variables_are_case_insensitive(name):
    tokens = tokenize(name)
    assert [t.type for t in tokens] == ["VAR"]
    assert tokens[0].value == name


def test_function_names_starting_with_variable_letters_stay_identifiers():
    assert token_types("Y0(x) Yn Tan") == ["IDENT", "LPAREN", "VAR", "RPAREN", "IDENT", "IDENT"]


def test_numbers_keep_their_text_and_position():
    tokens = tokenize("12.5 % 3")
    assert tokens[0].value == "12.5"
    assert tokens[2].position == 7
    assert tokens[1].type == "MODULUS"


def test_exponent_numbers():
    assert token_types("1e-05 + 1.234567e+06") == ["NUMBER", "PLUS", "NUMBER"]


def test_unknown_character_is_a_parse_error():
    with pytest.raises(ParseError) as excinfo:
        tokenize("y = x $ 2")
    assert excinfo.value.position == 6
    assert "y = x $ 2" in str(excinfo.value)
