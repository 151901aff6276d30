"""Typed failures raised by the safecalc evaluator.

Every failure carries an ErrorKind so callers can branch on the kind
without matching exception classes or message text.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure categories surfaced by evaluate_expression."""

    INVALID_CHARACTER = "invalid-character"
    MISMATCHED_PARENTHESIS = "mismatched-parenthesis"
    STACK_UNDERFLOW = "stack-underflow"
    INVALID_EXPRESSION = "invalid-expression"


class EvalError(Exception):
    """Base class for all evaluator failures."""

    kind: ErrorKind

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


class InvalidCharacter(EvalError):
    """Input contains a character the evaluator cannot scan."""

    kind = ErrorKind.INVALID_CHARACTER


class MismatchedParenthesis(EvalError):
    """Unbalanced '(' or ')'."""

    kind = ErrorKind.MISMATCHED_PARENTHESIS


class StackUnderflow(EvalError):
    """An operator ran out of operands."""

    kind = ErrorKind.STACK_UNDERFLOW


class InvalidExpression(EvalError):
    """Evaluation finished with a stack size other than one."""

    kind = ErrorKind.INVALID_EXPRESSION
