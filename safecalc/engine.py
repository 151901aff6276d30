"""Public entry point: raw string → float.

Pipeline:
1. Reject any character outside digits, operators, parentheses, dot, space
2. tokenize → to_postfix → evaluate
3. precise() on the result

Pure and stateless; safe to call from any number of threads.
"""

from __future__ import annotations

import re

from safecalc.converter import to_postfix
from safecalc.errors import InvalidCharacter
from safecalc.evaluator import evaluate, precise
from safecalc.tokenizer import tokenize

ALLOWED_RE = re.compile(r"^[0-9+\-*/().^%\s]+$")
_DISALLOWED_RE = re.compile(r"[^0-9+\-*/().^%\s]")


def check_characters(raw: str) -> None:
    """Raise InvalidCharacter unless raw is a non-empty string of allowed characters."""
    if ALLOWED_RE.match(raw):
        return
    bad = _DISALLOWED_RE.search(raw)
    if bad is None:
        raise InvalidCharacter("Empty expression")
    raise InvalidCharacter(f"Character {bad.group()!r} is not allowed", position=bad.start())


def evaluate_expression(raw: str) -> float:
    """Evaluate an arithmetic expression without eval().

    Supports + - * / ^, unary minus, postfix % and parentheses.
    Division by zero and similar return inf/NaN rather than raising.

    Raises:
        EvalError: InvalidCharacter, MismatchedParenthesis, StackUnderflow
            or InvalidExpression.
    """
    check_characters(raw)
    return precise(evaluate(to_postfix(tokenize(raw))))
