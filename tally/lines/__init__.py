"""
Lines — line items that make up an order total.

    from tally import lines as LN

    fee = LN.shipping_line(Money.parse("4.99"))
    ordered = LN.sorted_lines(summary.adjustments)
"""

from __future__ import annotations

from tally.lines._types import (
    TAX,
    SHIPPING,
    DISCOUNT_PREFIX,
    DISCOUNT_ORDER,
    TAX_ORDER,
    SHIPPING_ORDER,
    LineItem,
    sorted_lines,
    tax_line,
    shipping_line,
    discount_line,
)

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
