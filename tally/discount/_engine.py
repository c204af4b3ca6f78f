"""
Discount engine — applicable rules → discount line items.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from tally.discount._types import (
    CustomerPricingContext,
    DiscountRule,
    PercentageRule,
    FixedRule,
)
from tally.lines import LineItem, discount_line
from tally.money import Money, Rounding

logger = logging.getLogger(__name__)


def _stacks(rule: DiscountRule) -> bool:
    return isinstance(rule, PercentageRule) and rule.stacking


def _wanted(rule: DiscountRule, base: Money) -> Money:
    match rule:
        case PercentageRule(rate=rate):
            return base.multiply_by_rate(rate)
        case FixedRule(amount=amount):
            return Money(amount, base.currency)


@dataclass(frozen=True, slots=True)
class DiscountEngine:
    """
    Turn a subtotal and a customer into discount line items.

    Order of evaluation:
        1. non-stacking rules, declaration order, percentages of the
           original subtotal
        2. stacking rules, declaration order, percentages of the balance
           left after every discount before them

    Each discount is settled on its own and clamped so the balance
    (subtotal + discounts) never goes below zero. A clamped discount is the
    balance truncated to the currency scale. Discounts clamped to nothing
    are left out.

    Example:
        engine = DiscountEngine((
            D.percent("loyalty", 10, tiers={"gold"}),
            D.fixed("welcome", "5.00"),
            D.percent("flash", 5, stacking=True),
        ))
        lines = engine.compute_discounts(subtotal, context)
    """

    rules: tuple[DiscountRule, ...] = ()
    rounding: Rounding = Rounding.HALF_UP

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for rule in self.rules:
            if rule.code in seen:
                raise ValueError(f"duplicate discount code {rule.code!r}")
            seen.add(rule.code)

    @classmethod
    def of(cls, rules: Iterable[DiscountRule], rounding: Rounding = Rounding.HALF_UP) -> DiscountEngine:
        return cls(tuple(rules), rounding)

    def applicable(self, subtotal: Money, context: CustomerPricingContext) -> list[DiscountRule]:
        """Rules that apply, in evaluation order."""
        admitted = [r for r in self.rules if r.eligibility.admits(subtotal, context)]
        return [r for r in admitted if not _stacks(r)] + [r for r in admitted if _stacks(r)]

    def compute_discounts(
        self,
        subtotal: Money,
        context: CustomerPricingContext,
    ) -> list[LineItem]:
        lines: list[LineItem] = []
        balance = subtotal

        for rule in self.applicable(subtotal, context):
            if not balance.amount > 0:
                logger.debug("discount %s skipped: nothing left to discount", rule.code)
                continue

            base = balance if _stacks(rule) else subtotal
            wanted = _wanted(rule, base).settle(self.rounding)
            cap = balance.truncate()
            granted = wanted if wanted <= cap else cap
            if granted < wanted:
                logger.debug("discount %s clamped from %s to %s", rule.code, wanted, granted)
            if granted.is_zero():
                continue

            lines.append(discount_line(rule.code, granted.negate(), position=len(lines)))
            balance = balance.subtract(granted)

        logger.debug(
            "discounts for %s: %s",
            subtotal,
            [f"{line.label} {line.amount}" for line in lines],
        )
        return lines


__all__ = ("DiscountEngine",)
