"""
Line items — named, signed contributions to an order total.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from tally.money import Money

# ═══════════════════════════════════════════════════════════════════════════════
# Labels & Display Order
# ═══════════════════════════════════════════════════════════════════════════════

TAX = "TAX"
SHIPPING = "SHIPPING"
DISCOUNT_PREFIX = "DISCOUNT:"

DISCOUNT_ORDER = 100
TAX_ORDER = 200
SHIPPING_ORDER = 300


# ═══════════════════════════════════════════════════════════════════════════════
# LineItem
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class LineItem:
    """
    One adjustment on an order: discount, tax or shipping.

    The amount is settled when the item is built; a correction means a new
    LineItem, never a mutated one.
    """

    label: str
    amount: Money
    display_order: int = 0

    def __post_init__(self) -> None:
        if not self.label:
            raise ValueError("line item label must not be empty")
        if not self.amount.is_settled:
            raise ValueError(
                f"{self.label}: amount {self.amount} is not settled; call settle() first"
            )

    @property
    def sort_key(self) -> tuple[int, str]:
        return (self.display_order, self.label)

    @property
    def is_discount(self) -> bool:
        return self.label.startswith(DISCOUNT_PREFIX)


def sorted_lines(items: Iterable[LineItem]) -> list[LineItem]:
    """Stable display order: display_order ascending, then label."""
    return sorted(items, key=lambda item: item.sort_key)


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════

def tax_line(amount: Money) -> LineItem:
    return LineItem(TAX, amount, TAX_ORDER)


def shipping_line(amount: Money, label: str = SHIPPING) -> LineItem:
    """
    Shipping fee quoted by the caller's shipping-rate collaborator.

    A zero amount means free shipping; an unknown fee is expressed by not
    passing a shipping line at all.
    """
    return LineItem(label, amount, SHIPPING_ORDER)


def discount_line(code: str, amount: Money, position: int = 0) -> LineItem:
    """Discount labelled DISCOUNT:<code>; position keeps computation order on display."""
    if not code:
        raise ValueError("discount code must not be empty")
    return LineItem(f"{DISCOUNT_PREFIX}{code}", amount, DISCOUNT_ORDER + position)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "TAX",
    "SHIPPING",
    "DISCOUNT_PREFIX",
    "DISCOUNT_ORDER",
    "TAX_ORDER",
    "SHIPPING_ORDER",
    "LineItem",
    "sorted_lines",
    "tax_line",
    "shipping_line",
    "discount_line",
)
