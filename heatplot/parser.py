"""
Recursive-descent parser for equation text.

Grammar, loosest binding first::

    equation       := expression '=' expression
    expression     := additive (IDENT additive)*          infix function
    additive       := multiplicative (('+' | '-') multiplicative)*
    multiplicative := power (('*' | '/' | '%') power)*
    power          := unary ('^' power)?                  right associative
    unary          := '-' unary | primary
    primary        := NUMBER | VAR
                    | IDENT '(' expression [',' expression] ')'
                    | '(' expression ')'

A unary minus directly in front of a parenthesised group owns those
parentheses: ``-(a)`` is ``Negate(a)``, not ``Negate(Brackets(a))``. This
matches the ``-(...)`` text the serializer always writes for a negation.
"""

from typing import List, Optional

from .errors import ParseError
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

ADDITIVE_OPERATORS = {"PLUS": "+", "MINUS": "-"}
MULTIPLICATIVE_OPERATORS = {"MULTIPLY": "*", "DIVIDE": "/", "MODULUS": "%"}


class EquationParser:
    """Parser over a token list; one instance per source string"""

    def __init__(self, tokens: List[Token], source: str = ""):
        self.tokens = tokens
        self.source = source
        self.pos = 0

    def peek(self, offset: int = 0) -> Optional[Token]:
        pos = self.pos + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return None

    def match(self, *expected_types: str) -> Optional[Token]:
        token = self.peek()
        if token and token.type in expected_types:
            self.pos += 1
            return token
        return None

    def expect(self, expected_type: str) -> Token:
        token = self.match(expected_type)
        if not token:
            current = self.peek()
            if current:
                raise self.error(f"expected {expected_type} but got {current.type} '{current.value}'",
                                 current)
            raise self.error(f"expected {expected_type} but reached end of input")
        return token

    def error(self, detail: str, token: Optional[Token] = None) -> ParseError:
        position = token.position if token else len(self.source)
        return ParseError(self.source, detail, position)

    def parse(self) -> Equation:
        """Parse exactly one equation and require the input to end there"""
        if not self.tokens:
            raise self.error("empty formula")
        lhs = self.parse_expression()
        self.expect("EQUALS")
        rhs = self.parse_expression()
        trailing = self.peek()
        if trailing:
            raise self.error(f"unexpected token {trailing.type} '{trailing.value}'", trailing)
        return Equation(lhs, rhs)

    def parse_expression(self) -> Expression:
        """Infix two-argument functions: ``a Name b``"""
        left = self.parse_additive()

        while True:
            name = self.match("IDENT")
            if not name:
                break
            right = self.parse_additive()
            left = DoubleFunctionExpr(name.value, left, right, infix=True)

        return left

    def parse_additive(self) -> Expression:
        left = self.parse_multiplicative()

        while True:
            token = self.match(*ADDITIVE_OPERATORS)
            if not token:
                break
            right = self.parse_multiplicative()
            left = BinaryOpExpr(left, ADDITIVE_OPERATORS[token.type], right)

        return left

    def parse_multiplicative(self) -> Expression:
        left = self.parse_power()

        while True:
            token = self.match(*MULTIPLICATIVE_OPERATORS)
            if not token:
                break
            right = self.parse_power()
            left = BinaryOpExpr(left, MULTIPLICATIVE_OPERATORS[token.type], right)

        return left

    def parse_power(self) -> Expression:
        """Exponentiation (right associative)"""
        left = self.parse_unary()

        if self.match("POWER"):
            right = self.parse_power()
            return BinaryOpExpr(left, "^", right)

        return left

    def parse_unary(self) -> Expression:
        if self.match("MINUS"):
            operand = self.parse_unary()
            if isinstance(operand, BracketsExpr):
                return NegateExpr(operand.expr)
            return NegateExpr(operand)

        return self.parse_primary()

    def parse_primary(self) -> Expression:
        """Numbers, variables, function calls and parenthesised groups"""
        token = self.peek()

        if self.match("NUMBER"):
            return NumberExpr(float(token.value))

        if self.match("VAR"):
            return VarExpr(token.value)

        if self.match("IDENT"):
            return self.parse_call(token)

        if self.match("LPAREN"):
            expr = self.parse_expression()
            self.expect("RPAREN")
            return BracketsExpr(expr)

        if token:
            raise self.error(f"unexpected token {token.type} '{token.value}'", token)
        raise self.error("unexpected end of input")

    def parse_call(self, name: Token) -> Expression:
        """``Name(a)`` or ``Name(a, b)``"""
        if not self.peek() or self.peek().type != "LPAREN":
            raise self.error(f"function {name.value} must be followed by '('", self.peek() or name)
        self.expect("LPAREN")
        first = self.parse_expression()
        if self.match("COMMA"):
            second = self.parse_expression()
            self.expect("RPAREN")
            return DoubleFunctionExpr(name.value, first, second, infix=False)
        self.expect("RPAREN")
        return SingleFunctionExpr(name.value, first)


def parse_equation(source: str) -> Equation:
    """
    Parse equation text into an ``Equation``.

    Args:
        source: single-line equation, e.g. ``"y / 4 = x * (x + 2)"``

    Returns:
        The parsed equation

    Raises:
        ParseError: malformed input; the message quotes ``source``
    """
    tokens = tokenize(source)
    parser = EquationParser(tokens, source)
    return parser.parse()
