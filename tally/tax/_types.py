"""
Tax types.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from tally.money import to_decimal

# ═══════════════════════════════════════════════════════════════════════════════
# Tax Context
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class TaxContext:
    """Tax class and jurisdiction, passed verbatim to the rate collaborator."""

    tax_class: str = "standard"
    jurisdiction: str = ""


# ═══════════════════════════════════════════════════════════════════════════════
# TaxRates Protocol — Host Application Implements This
# ═══════════════════════════════════════════════════════════════════════════════

class TaxRates(Protocol):
    """
    Tax-rate collaborator.

    Returns the rate as a fraction: Decimal("0.08") is 8%.
    """

    def rate_for(self, context: TaxContext) -> Decimal:
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Rate Table — In-Memory Rates
# ═══════════════════════════════════════════════════════════════════════════════

class RateTable:
    """
    In-memory TaxRates.

    Lookup falls back from (tax_class, jurisdiction) to (tax_class, "")
    and finally to the table default.

    Example:
        rates = (
            RateTable(default="0")
            .set_rate("0.08")
            .set_rate("0.1025", jurisdiction="US-WA")
            .set_rate("0", tax_class="exempt")
        )
    """

    def __init__(self, default: str | Decimal = "0") -> None:
        self._default = self._rate(default)
        self._rates: dict[tuple[str, str], Decimal] = {}

    def set_rate(
        self,
        rate: str | Decimal,
        *,
        tax_class: str = "standard",
        jurisdiction: str = "",
    ) -> RateTable:
        self._rates[(tax_class, jurisdiction)] = self._rate(rate)
        return self

    def rate_for(self, context: TaxContext) -> Decimal:
        exact = self._rates.get((context.tax_class, context.jurisdiction))
        if exact is not None:
            return exact
        return self._rates.get((context.tax_class, ""), self._default)

    @staticmethod
    def _rate(value: str | Decimal) -> Decimal:
        rate = to_decimal(value)
        if rate < 0:
            raise ValueError(f"tax rate must not be negative, got {value}")
        return rate


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "TaxContext",
    "TaxRates",
    "RateTable",
)
