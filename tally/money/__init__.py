"""
Money — exact decimal amounts.

    from tally import money as M

    price = M.Money.parse("19.99")
    tax = price.multiply(2).multiply_by_rate("0.08").settle(M.Rounding.HALF_UP)
"""

from __future__ import annotations

from tally.money._types import (
    MAX_SCALE,
    INTERNAL_SCALE,
    Rounding,
    Currency,
    USD,
    EUR,
    JPY,
    Money,
    scale_of,
    to_decimal,
)
from tally.money._errors import (
    MoneyError,
    InvalidAmount,
    PrecisionOverflow,
    CurrencyMismatch,
)

__all__ = (
    "MAX_SCALE",
    "INTERNAL_SCALE",
    "Rounding",
    "Currency",
    "USD",
    "EUR",
    "JPY",
    "Money",
    "scale_of",
    "to_decimal",
    "MoneyError",
    "InvalidAmount",
    "PrecisionOverflow",
    "CurrencyMismatch",
)
