"""
Money types — exact decimal amounts with explicit settlement.

Arithmetic is exact. Rounding to the currency scale happens only in
settle() and truncate(), which callers invoke at settlement points (when
a line item is finalized). Anything that cannot be represented exactly fails loudly
with PrecisionOverflow.
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from collections.abc import Callable

from tally.money._errors import (
    InvalidAmount,
    PrecisionOverflow,
    CurrencyMismatch,
)

# ═══════════════════════════════════════════════════════════════════════════════
# Precision
# ═══════════════════════════════════════════════════════════════════════════════

MAX_SCALE = 12
"""Largest number of fractional digits a parsed amount or rate may carry."""

INTERNAL_SCALE = 2 * MAX_SCALE
"""Largest scale of a computed amount: the product of two MAX_SCALE values fits."""

_EXACT = decimal.Context(
    prec=48,
    rounding=decimal.ROUND_HALF_UP,
    traps=[
        decimal.Inexact,
        decimal.Overflow,
        decimal.InvalidOperation,
        decimal.DivisionByZero,
    ],
)

_SETTLE = decimal.Context(
    prec=48,
    traps=[decimal.Overflow, decimal.InvalidOperation],
)


def scale_of(value: Decimal) -> int:
    """Fractional digits needed to write value exactly (trailing zeros ignored)."""
    if not value.is_finite():
        raise InvalidAmount(value)
    if value.is_zero():
        return 0
    _, digits, exponent = value.as_tuple()
    significant = "".join(map(str, digits)).rstrip("0")
    trailing = len(digits) - len(significant)
    return max(0, -(int(exponent) + trailing))


def to_decimal(value: object) -> Decimal:
    """
    Parse a decimal from str or Decimal (ints are accepted as whole numbers).

    Floats are refused: they cannot carry an exact decimal value.
    """
    if isinstance(value, (bool, float)):
        raise InvalidAmount(value, "use a string or Decimal, not a float")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except decimal.InvalidOperation:
            raise InvalidAmount(value) from None
    else:
        raise InvalidAmount(value, f"unsupported type {type(value).__name__}")

    if not result.is_finite():
        raise InvalidAmount(value)
    if scale_of(result) > MAX_SCALE:
        raise PrecisionOverflow(value, MAX_SCALE)
    return result


def _exact(op: Callable[[Decimal, Decimal], Decimal], a: Decimal, b: Decimal) -> Decimal:
    try:
        result = op(a, b)
    except (decimal.Inexact, decimal.Overflow):
        raise PrecisionOverflow(f"{op.__name__}({a}, {b})", INTERNAL_SCALE) from None
    if scale_of(result) > INTERNAL_SCALE:
        raise PrecisionOverflow(result, INTERNAL_SCALE)
    return result


# ═══════════════════════════════════════════════════════════════════════════════
# Rounding
# ═══════════════════════════════════════════════════════════════════════════════

class Rounding(Enum):
    """
    Settlement rounding mode.

    One engine uses exactly one mode for every settlement it performs.
    """

    HALF_UP = decimal.ROUND_HALF_UP
    HALF_EVEN = decimal.ROUND_HALF_EVEN

    @classmethod
    def from_name(cls, name: str) -> Rounding:
        """Rounding.from_name("half_up") → Rounding.HALF_UP"""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown rounding mode {name!r}") from None


# ═══════════════════════════════════════════════════════════════════════════════
# Currency
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Currency:
    """Currency code plus its minor-unit count (settlement scale)."""

    code: str
    minor_units: int = 2

    def __post_init__(self) -> None:
        if not 0 <= self.minor_units <= MAX_SCALE:
            raise ValueError(f"minor_units must be within 0..{MAX_SCALE}")

    @property
    def quantum(self) -> Decimal:
        return Decimal(1).scaleb(-self.minor_units)

    def __str__(self) -> str:
        return self.code


USD = Currency("USD", 2)
EUR = Currency("EUR", 2)
JPY = Currency("JPY", 0)


# ═══════════════════════════════════════════════════════════════════════════════
# Money
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Money:
    """
    Immutable exact amount in one currency.

    Example:
        price = Money.parse("19.99")
        line = price.multiply(2)                          # 39.98, exact
        tax = line.multiply_by_rate(Decimal("0.08"))      # 3.1984, exact
        tax.settle(Rounding.HALF_UP)                      # 3.20
    """

    amount: Decimal
    currency: Currency = USD

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal) or not self.amount.is_finite():
            raise InvalidAmount(self.amount)
        if scale_of(self.amount) > INTERNAL_SCALE:
            raise PrecisionOverflow(self.amount, INTERNAL_SCALE)

    # ── Construction ─────────────────────────────────────

    @classmethod
    def parse(cls, value: str | Decimal, currency: Currency = USD) -> Money:
        if not isinstance(value, (str, Decimal)):
            raise InvalidAmount(value, "expected a decimal string")
        return cls(to_decimal(value), currency)

    @classmethod
    def from_minor_units(cls, units: int, currency: Currency = USD) -> Money:
        if isinstance(units, bool) or not isinstance(units, int):
            raise InvalidAmount(units, "minor units must be an integer")
        return cls(_exact(_EXACT.scaleb, Decimal(units), Decimal(-currency.minor_units)), currency)

    @classmethod
    def zero(cls, currency: Currency = USD) -> Money:
        return cls(Decimal(0), currency)

    # ── Arithmetic ───────────────────────────────────────

    def add(self, other: Money) -> Money:
        self._same_currency(other)
        return Money(_exact(_EXACT.add, self.amount, other.amount), self.currency)

    def subtract(self, other: Money) -> Money:
        self._same_currency(other)
        return Money(_exact(_EXACT.subtract, self.amount, other.amount), self.currency)

    def multiply(self, quantity: int) -> Money:
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise TypeError("multiply() takes an integer quantity; use multiply_by_rate()")
        return Money(_exact(_EXACT.multiply, self.amount, Decimal(quantity)), self.currency)

    def multiply_by_rate(self, rate: Decimal | str) -> Money:
        """Exact product with a fractional rate (0.08 is 8%). Not rounded."""
        return Money(_exact(_EXACT.multiply, self.amount, to_decimal(rate)), self.currency)

    def negate(self) -> Money:
        return Money(_unsigned_zero(self.amount.copy_negate()), self.currency)

    def settle(self, rounding: Rounding = Rounding.HALF_UP) -> Money:
        """Round to the currency scale at a settlement point."""
        settled = self.amount.quantize(
            self.currency.quantum,
            rounding=rounding.value,
            context=_SETTLE,
        )
        return Money(_unsigned_zero(settled), self.currency)

    def truncate(self) -> Money:
        """Round toward zero to the currency scale; never grows the magnitude."""
        truncated = self.amount.quantize(
            self.currency.quantum,
            rounding=decimal.ROUND_DOWN,
            context=_SETTLE,
        )
        return Money(_unsigned_zero(truncated), self.currency)

    # ── Inspection ───────────────────────────────────────

    @property
    def is_settled(self) -> bool:
        return scale_of(self.amount) <= self.currency.minor_units

    def is_zero(self) -> bool:
        return self.amount.is_zero()

    def is_negative(self) -> bool:
        return self.amount < 0

    def compare_to(self, other: Money) -> int:
        self._same_currency(other)
        if self.amount < other.amount:
            return -1
        if self.amount > other.amount:
            return 1
        return 0

    def to_minor_units(self) -> int:
        if not self.is_settled:
            raise ValueError(f"{self} is not settled to {self.currency.minor_units} places")
        return int(_exact(_EXACT.scaleb, self.amount, Decimal(self.currency.minor_units)))

    def _same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatch(self.currency.code, other.currency.code)

    # ── Operators ────────────────────────────────────────

    def __add__(self, other: Money) -> Money:
        return self.add(other)

    def __sub__(self, other: Money) -> Money:
        return self.subtract(other)

    def __neg__(self) -> Money:
        return self.negate()

    def __lt__(self, other: Money) -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other: Money) -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other: Money) -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other: Money) -> bool:
        return self.compare_to(other) >= 0

    def __str__(self) -> str:
        return f"{self.amount} {self.currency.code}"


def _unsigned_zero(value: Decimal) -> Decimal:
    # Decimal keeps the sign of zero; -0.00 would leak into output.
    return value.copy_abs() if value.is_zero() else value


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

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
)
