"""safecalc: safe infix calculator for arithmetic strings.

Turns a typed expression into a float without eval(): a tokenizer, a
shunting-yard converter to postfix and a stack evaluator. Supports
+ - * / ^ (right associative), unary minus, postfix % and parentheses.

Usage:
    from safecalc import evaluate_expression
    evaluate_expression("200 + 10 %")   # 200.1

    python -m safecalc eval "2 + 3 * 4"
    python -m safecalc repl
"""

from safecalc.engine import evaluate_expression
from safecalc.errors import (
    ErrorKind,
    EvalError,
    InvalidCharacter,
    InvalidExpression,
    MismatchedParenthesis,
    StackUnderflow,
)

__all__ = [
    "evaluate_expression",
    "ErrorKind",
    "EvalError",
    "InvalidCharacter",
    "InvalidExpression",
    "MismatchedParenthesis",
    "StackUnderflow",
]
