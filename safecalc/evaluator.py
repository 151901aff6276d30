"""Postfix (RPN) evaluation and precision cleanup.

Arithmetic follows IEEE-754: division by zero, overflow and domain errors
produce inf/NaN instead of Python exceptions.
"""

from __future__ import annotations

import math
import operator
from typing import Callable

from safecalc.errors import InvalidExpression, StackUnderflow
from safecalc.models import Number, Symbol, Token

# 12 decimal places: enough to hide 0.1 + 0.2 noise without touching real digits
PRECISION_SCALE = 1e12

# Above this a scaled value has no fractional bits left to round.
_EXACT_INT_LIMIT = float(2 ** 53)


def precise(value: float) -> float:
    """Round away binary representation noise (0.30000000000000004 → 0.3).

    Exact halves round up, toward +inf (half-up). Non-finite
    values and values too large to carry 12 fractional digits are returned
    unchanged. Applying it twice gives the same result.
    """
    if not math.isfinite(value):
        return value
    scaled = value * PRECISION_SCALE
    if abs(scaled) >= _EXACT_INT_LIMIT:
        return value
    whole = math.floor(scaled)
    # Exact below 2**53, unlike floor(scaled + 0.5)
    if scaled - whole >= 0.5:
        whole += 1
    return whole / PRECISION_SCALE


def _is_odd_integer(x: float) -> bool:
    return x.is_integer() and x % 2 == 1


def _divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _power(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and _is_odd_integer(b) else math.inf
    except ValueError:
        # 0 ** negative, or negative ** fraction
        if a == 0:
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        return math.nan


_BINARY: dict[Symbol, Callable[[float, float], float]] = {
    Symbol.PLUS: operator.add,
    Symbol.MINUS: operator.sub,
    Symbol.TIMES: operator.mul,
    Symbol.DIVIDE: _divide,
    Symbol.POWER: _power,
}

_UNARY: dict[Symbol, Callable[[float], float]] = {
    Symbol.NEGATE: operator.neg,
    Symbol.PERCENT: lambda v: v / 100,
}


def evaluate(postfix: list[Token]) -> float:
    """Evaluate a postfix token sequence to a single float.

    The result is not passed through precise(); evaluate_expression does that.

    Raises:
        StackUnderflow: an operator found fewer operands than it needs.
        InvalidExpression: the stack did not end with exactly one value.
    """
    stack: list[float] = []

    for tok in postfix:
        if isinstance(tok, Number):
            stack.append(tok.value)
        elif tok in _BINARY:
            if len(stack) < 2:
                raise StackUnderflow(f"'{tok.value}' needs two operands")
            b = stack.pop()
            a = stack.pop()
            stack.append(_BINARY[tok](a, b))
        elif tok in _UNARY:
            if not stack:
                raise StackUnderflow(f"'{tok.value}' needs an operand")
            stack.append(_UNARY[tok](stack.pop()))
        else:
            # Parentheses never survive to_postfix
            raise InvalidExpression(f"Unexpected token {tok.value!r} in postfix sequence")

    if len(stack) != 1:
        raise InvalidExpression(f"Expression left {len(stack)} values instead of one")
    return stack[0]
