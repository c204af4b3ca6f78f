"""
Engine types — order lines in, order total summary out.
"""

from __future__ import annotations

from dataclasses import dataclass

from kungfu import Option, from_optional

from tally._types import ProductRef
from tally.catalog import Attribute
from tally.lines import LineItem, TAX, sorted_lines
from tally.money import CurrencyMismatch, Money

# ═══════════════════════════════════════════════════════════════════════════════
# Order Line Request
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class OrderLineRequest:
    """
    One order line: a product, its selected attributes and a quantity.

    quantity is validated by the engine (>= 1) before any pricing starts.
    """

    product: ProductRef
    quantity: int = 1
    attributes: frozenset[Attribute] = frozenset()

    @classmethod
    def of(cls, product: ProductRef, quantity: int = 1, **selected: str) -> OrderLineRequest:
        """
        OrderLineRequest.of("TSHIRT", 2, size="XL")
        """
        return cls(
            product=product,
            quantity=quantity,
            attributes=frozenset(Attribute(k, v) for k, v in selected.items()),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Order Total Summary
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class OrderTotalSummary:
    """
    Result of one pricing request.

    adjustments are in computation order: discounts, tax, shipping.
    total is derived from subtotal and adjustments on every access and is
    never stored.
    """

    subtotal: Money
    adjustments: tuple[LineItem, ...] = ()

    def __post_init__(self) -> None:
        labels = [item.label for item in self.adjustments]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            raise ValueError(f"duplicate adjustment labels: {duplicates}")
        for item in self.adjustments:
            if item.amount.currency != self.subtotal.currency:
                raise CurrencyMismatch(self.subtotal.currency.code, item.amount.currency.code)

    @property
    def total(self) -> Money:
        total = self.subtotal
        for item in self.adjustments:
            total = total.add(item.amount)
        return total

    @property
    def discounts(self) -> tuple[LineItem, ...]:
        return tuple(item for item in self.adjustments if item.is_discount)

    @property
    def taxable_amount(self) -> Money:
        taxable = self.subtotal
        for item in self.discounts:
            taxable = taxable.add(item.amount)
        return taxable

    @property
    def tax(self) -> Money:
        return self.line(TAX).map(lambda item: item.amount).unwrap_or(Money.zero(self.subtotal.currency))

    def line(self, label: str) -> Option[LineItem]:
        return from_optional(next((i for i in self.adjustments if i.label == label), None))

    def for_display(self) -> list[LineItem]:
        """Adjustments in stable display order."""
        return sorted_lines(self.adjustments)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "OrderLineRequest",
    "OrderTotalSummary",
)
