"""
Regex tokenizer for equation text.

Produces the token stream consumed by ``heatplot.parser``. Whitespace is
insignificant; any character outside the token table is a ``ParseError``.
"""

import re
from dataclasses import dataclass
from typing import List

from .errors import ParseError

# ============================================================================
# TOKEN TABLE - order matters, first alternative wins
# ============================================================================

TOKEN_TYPES = [
    ("NUMBER", r"\d+(?:\.\d+)?(?:[eE][+-]?\d+)?"),
    ("IDENT", r"[A-Za-z_][A-Za-z0-9_]*"),
    ("PLUS", r"\+"),
    ("MINUS", r"-"),
    ("MULTIPLY", r"\*"),
    ("DIVIDE", r"/"),
    ("POWER", r"\^"),
    ("MODULUS", r"%"),
    ("EQUALS", r"="),
    ("COMMA", r","),
    ("LPAREN", r"\("),
    ("RPAREN", r"\)"),
    ("WHITESPACE", r"\s+"),
    ("MISMATCH", r"."),
]

token_regex = "|".join(f"(?P<{name}>{pattern})" for name, pattern in TOKEN_TYPES)
token_pattern = re.compile(token_regex)

# Identifiers that name a free variable rather than a function
VARIABLE_NAMES = frozenset({"X", "Y", "T"})


@dataclass(frozen=True)
class Token:
    """Token with its offset into the source text"""
    type: str
    value: str
    position: int = 0

    def __repr__(self):
        return f"{self.type}:{self.value}@{self.position}"


def tokenize(source: str) -> List[Token]:
    """
    Split equation text into tokens.

    Bare identifiers spelling X, Y or T (any case) become VAR tokens; every
    other identifier is a function name (IDENT).

    Args:
        source: equation text, e.g. ``"y / 4 = x * (x + 2)"``

    Returns:
        List of tokens, whitespace removed

    Raises:
        ParseError: on a character that starts no token
    """
    tokens = []
    for match in token_pattern.finditer(source):
        kind = match.lastgroup
        value = match.group()
        position = match.start()

        if kind == "WHITESPACE":
            continue
        if kind == "MISMATCH":
            raise ParseError(source, f"unexpected character {value!r}", position)
        if kind == "IDENT" and value.upper() in VARIABLE_NAMES:
            kind = "VAR"

        tokens.append(Token(kind, value, position))

    return tokens
