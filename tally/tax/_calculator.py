"""
Tax calculator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tally.lines import LineItem, tax_line
from tally.money import InvalidAmount, Money, Rounding, to_decimal
from tally.tax._types import TaxContext, TaxRates

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TaxCalculator:
    """
    Apply the collaborator's rate to the taxable amount and settle once.

    A zero or negative taxable amount still yields a TAX line (of zero), so
    every summary carries the same set of lines.
    """

    rates: TaxRates
    rounding: Rounding = Rounding.HALF_UP

    def compute_tax(self, taxable: Money, context: TaxContext) -> LineItem:
        if taxable.is_zero() or taxable.is_negative():
            return tax_line(Money.zero(taxable.currency))

        rate = to_decimal(self.rates.rate_for(context))
        if rate < 0:
            raise InvalidAmount(rate, "tax rate must not be negative")

        amount = taxable.multiply_by_rate(rate)
        settled = amount.settle(self.rounding)
        logger.debug("tax %s @ %s = %s -> %s", taxable, rate, amount.amount, settled)
        return tax_line(settled)


__all__ = ("TaxCalculator",)
