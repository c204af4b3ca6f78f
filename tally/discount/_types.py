"""
Discount types — customer context and rule data.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from tally._types import CustomerRef
from tally.money import MAX_SCALE, Money, PrecisionOverflow, scale_of

# ═══════════════════════════════════════════════════════════════════════════════
# Customer Context
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class CustomerPricingContext:
    """Who is buying. customer=None is an anonymous shopper."""

    customer: CustomerRef | None = None
    tier: str | None = None

    @property
    def is_anonymous(self) -> bool:
        return self.customer is None


ANONYMOUS = CustomerPricingContext()


# ═══════════════════════════════════════════════════════════════════════════════
# Rules
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Eligibility:
    """
    When a rule applies.

    tiers: membership tiers the rule is limited to; empty means everyone,
           anonymous shoppers included.
    min_subtotal: the order subtotal must reach this amount.
    """

    tiers: frozenset[str] = frozenset()
    min_subtotal: Decimal | None = None

    def admits(self, subtotal: Money, context: CustomerPricingContext) -> bool:
        if self.tiers and context.tier not in self.tiers:
            return False
        if self.min_subtotal is not None and subtotal.amount < self.min_subtotal:
            return False
        return True


@dataclass(frozen=True, slots=True)
class PercentageRule:
    """
    rate is a fraction of the base: 0.10 takes 10% off.

    Non-stacking rules take their percentage of the original subtotal.
    Stacking rules take it of the balance left after every discount
    applied before them.
    """

    code: str
    rate: Decimal
    eligibility: Eligibility = Eligibility()
    stacking: bool = False

    def __post_init__(self) -> None:
        if scale_of(self.rate) > MAX_SCALE:
            raise PrecisionOverflow(self.rate, MAX_SCALE)


@dataclass(frozen=True, slots=True)
class FixedRule:
    """A fixed amount off, in the subtotal's currency."""

    code: str
    amount: Decimal
    eligibility: Eligibility = Eligibility()


type DiscountRule = PercentageRule | FixedRule


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "CustomerPricingContext",
    "ANONYMOUS",
    "Eligibility",
    "PercentageRule",
    "FixedRule",
    "DiscountRule",
)
