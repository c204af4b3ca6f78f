"""
Rule constructors.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from tally.discount._types import Eligibility, PercentageRule, FixedRule
from tally.money import MAX_SCALE, PrecisionOverflow, scale_of, to_decimal


def _eligibility(
    tiers: Iterable[str],
    min_subtotal: str | Decimal | None,
) -> Eligibility:
    if isinstance(tiers, str):
        tiers = (tiers,)
    floor = None if min_subtotal is None else to_decimal(min_subtotal)
    if floor is not None and floor < 0:
        raise ValueError("min_subtotal must not be negative")
    return Eligibility(tiers=frozenset(tiers), min_subtotal=floor)


def percent(
    code: str,
    value: str | Decimal | int,
    *,
    tiers: Iterable[str] = (),
    min_subtotal: str | Decimal | None = None,
    stacking: bool = False,
) -> PercentageRule:
    """
    Percentage discount. value is in percent: percent("loyalty", 10) is 10% off.

    Example:
        D.percent("gold", "15", tiers={"gold"})
        D.percent("flash", 5, stacking=True)
    """
    if not code:
        raise ValueError("discount code must not be empty")
    rate = to_decimal(value).scaleb(-2)
    if scale_of(rate) > MAX_SCALE:
        raise PrecisionOverflow(value, MAX_SCALE - 2)
    if not 0 <= rate <= 1:
        raise ValueError(f"{code}: percentage must be within 0..100, got {value}")
    return PercentageRule(
        code=code,
        rate=rate,
        eligibility=_eligibility(tiers, min_subtotal),
        stacking=stacking,
    )


def fixed(
    code: str,
    amount: str | Decimal | int,
    *,
    tiers: Iterable[str] = (),
    min_subtotal: str | Decimal | None = None,
) -> FixedRule:
    """
    Fixed discount.

    Example:
        D.fixed("welcome", "5.00", min_subtotal="25")
    """
    if not code:
        raise ValueError("discount code must not be empty")
    off = to_decimal(amount)
    if off < 0:
        raise ValueError(f"{code}: discount amount must not be negative")
    return FixedRule(
        code=code,
        amount=off,
        eligibility=_eligibility(tiers, min_subtotal),
    )


__all__ = ("percent", "fixed")
