"""
Money Utilities - Safe Decimal operations for prices.

Prices arrive as JSON numbers; totals are computed with Decimal to avoid
float drift (0.1 + 0.2).
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

from goblin_store.config import CURRENCY_LABEL

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")


def to_decimal(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        # Go through str so 0.1 stays 0.1
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def round_money(value: Union[str, int, float, Decimal]) -> Decimal:
    """Round monetary value to two decimal places."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def to_float(value: Union[str, int, float, Decimal]) -> float:
    """
    Convert Decimal to float for JSON serialization.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def format_price(value: Union[str, int, float, Decimal], currency: str = CURRENCY_LABEL) -> str:
    """
    Format a price followed by the currency label.

    Whole amounts are shown without decimals ("55 Zm"), anything else with
    two ("12.50 Zm").
    """
    decimal_value = round_money(value)
    if decimal_value == decimal_value.to_integral_value():
        formatted = str(int(decimal_value))
    else:
        formatted = f"{decimal_value:.2f}"
    return f"{formatted} {currency}"
