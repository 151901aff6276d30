"""Shunting-yard conversion from infix tokens to postfix (RPN) order.

Two extensions over the textbook algorithm:
- '-' with no operand before it becomes Symbol.NEGATE.
- '%' is a postfix operator at the highest precedence.
"""

from __future__ import annotations

from enum import Enum

from safecalc.errors import MismatchedParenthesis
from safecalc.models import Associativity, Number, Symbol, Token


class _Prev(Enum):
    """Category of the previously consumed token."""

    START = "start"
    NUMBER = "number"
    OPERATOR = "operator"
    OPEN = "open"
    CLOSE = "close"


# After these, a '-' has no left operand.
_UNARY_CONTEXT = (_Prev.START, _Prev.OPERATOR, _Prev.OPEN)


def _should_pop(top: Symbol, current: Symbol) -> bool:
    if top is Symbol.LPAREN:
        return False
    if top.precedence > current.precedence:
        return True
    return top.precedence == current.precedence and current.associativity is Associativity.LEFT


def to_postfix(tokens: list[Token]) -> list[Token]:
    """Reorder infix tokens into postfix order.

    Raises MismatchedParenthesis for a ')' with no matching '(' or a '('
    that is never closed.
    """
    output: list[Token] = []
    ops: list[Symbol] = []
    prev = _Prev.START

    for tok in tokens:
        if isinstance(tok, Number):
            output.append(tok)
            prev = _Prev.NUMBER
        elif tok is Symbol.LPAREN:
            ops.append(tok)
            prev = _Prev.OPEN
        elif tok is Symbol.RPAREN:
            while ops and ops[-1] is not Symbol.LPAREN:
                output.append(ops.pop())
            if not ops:
                raise MismatchedParenthesis("Unmatched ')'")
            ops.pop()
            prev = _Prev.CLOSE
        elif tok is Symbol.PERCENT:
            while ops and ops[-1] is not Symbol.LPAREN and ops[-1].precedence > tok.precedence:
                output.append(ops.pop())
            ops.append(tok)
            prev = _Prev.OPERATOR
        else:
            if tok is Symbol.MINUS and prev in _UNARY_CONTEXT:
                tok = Symbol.NEGATE
            while ops and _should_pop(ops[-1], tok):
                output.append(ops.pop())
            ops.append(tok)
            prev = _Prev.OPERATOR

    while ops:
        top = ops.pop()
        if top is Symbol.LPAREN:
            raise MismatchedParenthesis("Unclosed '('")
        output.append(top)

    return output
