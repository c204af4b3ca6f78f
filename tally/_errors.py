"""
Pricing errors — the error channel of every Result this package returns.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum, auto

from tally.money import (
    MoneyError,
    PrecisionOverflow,
    CurrencyMismatch,
)


class PricingErrorKind(Enum):
    """Pricing error kinds."""

    PRODUCT_NOT_FOUND = auto()
    INVALID_QUANTITY = auto()  # quantity < 1, caught before pricing
    INVALID_AMOUNT = auto()
    PRECISION_OVERFLOW = auto()
    CURRENCY_MISMATCH = auto()
    DUPLICATE_LABEL = auto()  # caller-supplied line collides with a computed one


@dataclass(frozen=True, slots=True)
class PricingError:
    """
    A failed pricing computation.

    product is set when the failure is tied to one order line.
    """

    kind: PricingErrorKind
    message: str
    product: Hashable | None = None

    @classmethod
    def from_money_error(cls, exc: MoneyError, product: Hashable | None = None) -> PricingError:
        match exc:
            case PrecisionOverflow():
                kind = PricingErrorKind.PRECISION_OVERFLOW
            case CurrencyMismatch():
                kind = PricingErrorKind.CURRENCY_MISMATCH
            case _:
                kind = PricingErrorKind.INVALID_AMOUNT
        return cls(kind, str(exc), product)

    def __str__(self) -> str:
        return f"{self.kind.name}: {self.message}"


__all__ = (
    "PricingErrorKind",
    "PricingError",
)
