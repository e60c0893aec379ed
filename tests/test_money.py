"""Tests for money helpers"""
from decimal import Decimal

import pytest

from goblin_store.money import format_price, round_money, to_decimal, to_float


def test_to_decimal_float_keeps_precision():
    assert to_decimal(0.1) == Decimal("0.1")


def test_to_decimal_invalid_is_zero():
    assert to_decimal("abc") == Decimal("0")
    assert to_decimal(None) == Decimal("0")


def test_round_money():
    assert round_money("2.345") == Decimal("2.35")


def test_to_float():
    assert to_float(Decimal("42.00")) == 42.0


@pytest.mark.parametrize("value, expected", [
    (55, "55 Zm"),
    (Decimal("42.00"), "42 Zm"),
    (12.5, "12.50 Zm"),
    (0, "0 Zm"),
])
def test_format_price(value, expected):
    assert format_price(value, currency="Zm") == expected
