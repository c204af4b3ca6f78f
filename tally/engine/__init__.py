"""
Engine — order totals from order lines.

    from tally import engine as E

    pricing = E.engine().catalog(catalog).tax_rates(rates).build()
    result = pricing.compute_order_total([E.OrderLineRequest.of("TSHIRT", 2)])
"""

from __future__ import annotations

from tally.engine._types import (
    OrderLineRequest,
    OrderTotalSummary,
)
from tally.engine._engine import OrderTotalEngine
from tally.engine._builder import EngineBuilder, engine

__all__ = (
    "OrderLineRequest",
    "OrderTotalSummary",
    "OrderTotalEngine",
    "EngineBuilder",
    "engine",
)
