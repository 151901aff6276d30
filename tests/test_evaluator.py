"""Postfix evaluator and precision cleanup tests."""

import math

import pytest

from safecalc.errors import InvalidExpression, StackUnderflow
from safecalc.evaluator import evaluate, precise
from safecalc.models import Number, Symbol


def n(value: float) -> Number:
    return Number(float(value))


# --- Operators (4 tests) ---

def test_operand_order():
    """b is popped first, so 'a b -' is a - b."""
    assert evaluate([n(10), n(4), Symbol.MINUS]) == 6.0
    assert evaluate([n(10), n(4), Symbol.DIVIDE]) == 2.5


def test_power():
    assert evaluate([n(2), n(10), Symbol.POWER]) == 1024.0


def test_negate_and_percent():
    assert evaluate([n(7), Symbol.NEGATE]) == -7.0
    assert evaluate([n(50), Symbol.PERCENT]) == 0.5


def test_single_number():
    assert evaluate([n(3.5)]) == 3.5


# --- IEEE edge cases (6 tests) ---

def test_divide_by_zero_is_infinity():
    assert evaluate([n(5), n(0), Symbol.DIVIDE]) == math.inf


def test_negative_divide_by_zero():
    assert evaluate([n(-5), n(0), Symbol.DIVIDE]) == -math.inf


def test_zero_over_zero_is_nan():
    assert math.isnan(evaluate([n(0), n(0), Symbol.DIVIDE]))


def test_zero_to_negative_power():
    assert evaluate([n(0), n(-1), Symbol.POWER]) == math.inf


def test_negative_base_fractional_power_is_nan():
    assert math.isnan(evaluate([n(-8), n(0.5), Symbol.POWER]))


def test_power_overflow_keeps_sign():
    assert evaluate([n(10), n(400), Symbol.POWER]) == math.inf
    assert evaluate([n(-10), n(401), Symbol.POWER]) == -math.inf


# --- Arity failures (4 tests) ---

def test_binary_underflow():
    with pytest.raises(StackUnderflow):
        evaluate([n(2), Symbol.PLUS])


def test_unary_underflow():
    with pytest.raises(StackUnderflow):
        evaluate([Symbol.PERCENT])


def test_leftover_operands():
    with pytest.raises(InvalidExpression):
        evaluate([n(2), n(3)])


def test_empty_sequence():
    with pytest.raises(InvalidExpression):
        evaluate([])


def test_paren_in_postfix_rejected():
    with pytest.raises(InvalidExpression):
        evaluate([n(1), Symbol.LPAREN])


# --- Precision cleanup (6 tests) ---

def test_precise_removes_float_noise():
    assert 0.1 + 0.2 != 0.3
    assert precise(0.1 + 0.2) == 0.3


def test_precise_rounds_to_twelve_places():
    assert precise(1 / 3) == 0.333333333333


def test_precise_passes_non_finite():
    assert precise(math.inf) == math.inf
    assert precise(-math.inf) == -math.inf
    assert math.isnan(precise(math.nan))


def test_precise_leaves_huge_values():
    assert precise(1e300) == 1e300


@pytest.mark.parametrize("value", [0.3, 123.456, -7.25, 1 / 3, 2000 / 3, 1e-13, 9007.5, 1e20, -0.0])
def test_precise_is_idempotent(value):
    once = precise(value)
    assert precise(once) == once


def test_precise_rounds_exact_halves_up():
    """1.0000000000005 scales to exactly 1000000000000.5."""
    assert precise(1.0000000000005) == 1.000000000001
    assert precise(-1.0000000000005) == -1.0
