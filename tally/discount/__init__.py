"""
Discount — customer-specific discount rules.

    from tally import discount as D

    engine = D.DiscountEngine((D.percent("loyalty", 10, tiers={"gold"}),))
    lines = engine.compute_discounts(subtotal, D.CustomerPricingContext("c-42", tier="gold"))
"""

from __future__ import annotations

from tally.discount._types import (
    CustomerPricingContext,
    ANONYMOUS,
    Eligibility,
    PercentageRule,
    FixedRule,
    DiscountRule,
)
from tally.discount._rules import percent, fixed
from tally.discount._engine import DiscountEngine

__all__ = (
    "CustomerPricingContext",
    "ANONYMOUS",
    "Eligibility",
    "PercentageRule",
    "FixedRule",
    "DiscountRule",
    "percent",
    "fixed",
    "DiscountEngine",
)
