"""Data models for the safecalc evaluator.

Symbol enum, Associativity and Number: the typed tokens that flow through
tokenizer → converter → evaluator.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Associativity(str, Enum):
    """Tie-break rule for operators of equal precedence."""

    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


class Symbol(str, Enum):
    """Every non-number token the evaluator understands.

    NEGATE never comes out of the tokenizer; the converter rewrites a
    leading or post-operator MINUS into it.
    """

    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"
    POWER = "^"
    PERCENT = "%"
    NEGATE = "u-"
    LPAREN = "("
    RPAREN = ")"

    @property
    def precedence(self) -> int:
        return _METADATA[self][0]

    @property
    def associativity(self) -> Associativity:
        return _METADATA[self][1]

    @property
    def arity(self) -> int:
        """Operands consumed on the evaluator stack (0 for parentheses)."""
        return _METADATA[self][2]

    @property
    def is_operator(self) -> bool:
        return self.arity > 0


# (precedence, associativity, arity) for every Symbol member.
# Parentheses are never compared against operators; they sit at 0.
_METADATA: dict[Symbol, tuple[int, Associativity, int]] = {
    Symbol.PLUS: (2, Associativity.LEFT, 2),
    Symbol.MINUS: (2, Associativity.LEFT, 2),
    Symbol.TIMES: (3, Associativity.LEFT, 2),
    Symbol.DIVIDE: (3, Associativity.LEFT, 2),
    Symbol.POWER: (4, Associativity.RIGHT, 2),
    Symbol.PERCENT: (5, Associativity.NONE, 1),
    Symbol.NEGATE: (5, Associativity.RIGHT, 1),
    Symbol.LPAREN: (0, Associativity.NONE, 0),
    Symbol.RPAREN: (0, Associativity.NONE, 0),
}


@dataclass(frozen=True)
class Number:
    """A numeric literal as scanned from the input."""

    value: float
    text: str = ""

    @classmethod
    def parse(cls, text: str) -> Number:
        """Build a Number from a `[0-9]*\\.?[0-9]+` literal."""
        return cls(value=float(text), text=text)

    def __str__(self) -> str:
        return self.text or repr(self.value)


Token = Union[Number, Symbol]


def format_tokens(tokens: list[Token]) -> str:
    """Render a token sequence as a space separated string ('2 3 4 * +')."""
    return " ".join(str(t) if isinstance(t, Number) else t.value for t in tokens)
