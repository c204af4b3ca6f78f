"""
Money errors — raised by the value type itself.

Operations above the value layer turn these into PricingError results.
"""

from __future__ import annotations

from dataclasses import dataclass


class MoneyError(Exception):
    """Base for every value-level money failure."""


@dataclass(frozen=True, slots=True)
class InvalidAmount(MoneyError):
    value: object
    reason: str = "not a finite decimal number"

    def __str__(self) -> str:
        return f"invalid amount {self.value!r}: {self.reason}"


@dataclass(frozen=True, slots=True)
class PrecisionOverflow(MoneyError):
    value: object
    max_scale: int

    def __str__(self) -> str:
        return f"{self.value!r} needs more than {self.max_scale} fractional digits"


@dataclass(frozen=True, slots=True)
class CurrencyMismatch(MoneyError):
    left: str
    right: str

    def __str__(self) -> str:
        return f"cannot combine {self.left} with {self.right}"


__all__ = (
    "MoneyError",
    "InvalidAmount",
    "PrecisionOverflow",
    "CurrencyMismatch",
)
