"""
Catalog — price lookups and unit price resolution.

    from tally import catalog as CT

    resolver = CT.PriceComponentResolver(CT.MemoryCatalog().add_product("MUG", "8.50"))
    unit = resolver.resolve_unit_price("MUG", CT.attributes(color="red"))
"""

from __future__ import annotations

from tally.catalog._types import (
    Attribute,
    attributes,
    Catalog,
)
from tally.catalog._memory import MemoryCatalog
from tally.catalog._resolver import PriceComponentResolver

__all__ = (
    "Attribute",
    "attributes",
    "Catalog",
    "MemoryCatalog",
    "PriceComponentResolver",
)
