"""Caller-side glue: display formatting, unary functions and the REPL session.

This is the layer that decides presentation. Every EvalError and every
non-finite result shows as the same "Error" string.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

from safecalc.config import DEFAULT_DISPLAY_WIDTH
from safecalc.converter import to_postfix
from safecalc.engine import check_characters, evaluate_expression
from safecalc.errors import EvalError
from safecalc.evaluator import precise
from safecalc.models import format_tokens
from safecalc.tokenizer import tokenize

logger = logging.getLogger(__name__)

ERROR_DISPLAY = "Error"


class UnaryFunction(str, Enum):
    """One-key functions applied to the current value."""

    SQRT = "sqrt"
    RECIP = "recip"
    PERCENT = "percent"


def apply_unary(function: UnaryFunction, value: float) -> float:
    """Apply a one-key function, IEEE style (sqrt(-1) is NaN, 1/0 is inf)."""
    if function is UnaryFunction.SQRT:
        result = math.sqrt(value) if value >= 0 else math.nan
    elif function is UnaryFunction.RECIP:
        result = 1 / value if value != 0 else math.copysign(math.inf, value)
    else:
        result = value / 100
    return precise(result)


def format_result(value: float, width: int = DEFAULT_DISPLAY_WIDTH) -> str:
    """Format a result for the display line.

    Integral values drop the '.0' and are padded from their shortest
    digits (1.2345678901234568e20 → '123456789012345680000'), non-finite
    values become "Error", and the text is cut to width characters.
    """
    if not math.isfinite(value):
        return ERROR_DISPLAY
    if value == 0:
        text = "0"
    elif value.is_integer() and abs(value) < 1e21:
        text = format(Decimal(repr(value)).normalize(), "f")
    else:
        text = repr(value)
    return text[:width]


def try_evaluate(raw: str) -> Optional[float]:
    """evaluate_expression, logging and swallowing EvalError (returns None)."""
    try:
        return evaluate_expression(raw)
    except EvalError as e:
        logger.warning("%s: %s (%s)", e.kind.value, e, raw.strip())
        return None


def display(raw: str, width: int = DEFAULT_DISPLAY_WIDTH) -> str:
    """Evaluate raw and return the display string, "Error" on any failure."""
    value = try_evaluate(raw)
    if value is None:
        return ERROR_DISPLAY
    return format_result(value, width)


def trace(raw: str) -> None:
    """Log the token and postfix sequences for raw at DEBUG level."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    try:
        check_characters(raw)
        tokens = tokenize(raw)
        logger.debug("tokens: %s", format_tokens(tokens))
        logger.debug("postfix: %s", format_tokens(to_postfix(tokens)))
    except EvalError as e:
        logger.debug("trace stopped: %s", e)


@dataclass
class Session:
    """Interactive state: the last good result, for unary functions to act on."""

    width: int = DEFAULT_DISPLAY_WIDTH
    last_result: Optional[float] = None

    def submit(self, raw: str) -> Optional[str]:
        """Evaluate one line. Blank lines return None and change nothing."""
        if not raw.strip():
            return None
        trace(raw)
        value = try_evaluate(raw)
        if value is None:
            return ERROR_DISPLAY
        if math.isfinite(value):
            self.last_result = value
        return format_result(value, self.width)

    def apply(self, function: UnaryFunction) -> str:
        """Apply a unary function to the last result (0 when there is none)."""
        value = apply_unary(function, self.last_result or 0.0)
        if math.isfinite(value):
            self.last_result = value
        return format_result(value, self.width)
