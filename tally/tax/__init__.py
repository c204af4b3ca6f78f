"""
Tax — rate lookup and tax line computation.

    from tally import tax as TX

    calculator = TX.TaxCalculator(TX.RateTable().set_rate("0.08"))
    line = calculator.compute_tax(taxable, TX.TaxContext())
"""

from __future__ import annotations

from tally.tax._types import (
    TaxContext,
    TaxRates,
    RateTable,
)
from tally.tax._calculator import TaxCalculator

__all__ = (
    "TaxContext",
    "TaxRates",
    "RateTable",
    "TaxCalculator",
)
