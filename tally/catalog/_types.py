"""
Catalog types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from kungfu import Option

from tally._types import ProductRef
from tally.money import Money

# ═══════════════════════════════════════════════════════════════════════════════
# Attribute — One Selected Option
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True, order=True)
class Attribute:
    """A selected attribute value, e.g. Attribute("size", "XL")."""

    name: str
    value: str

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


def attributes(**selected: str) -> frozenset[Attribute]:
    """
    Build an attribute selection from keywords.

        attributes(size="XL", color="red")
    """
    return frozenset(Attribute(name, value) for name, value in selected.items())


# ═══════════════════════════════════════════════════════════════════════════════
# Catalog Protocol — Host Application Implements This
# ═══════════════════════════════════════════════════════════════════════════════

class Catalog(Protocol):
    """
    Price lookup collaborator.

    Implement this over the host application's product store.

    Example:
        class SqlCatalog:
            def __init__(self, session: Session) -> None:
                self.session = session

            def base_price(self, product: ProductRef) -> Option[Money]:
                row = self.session.get(ProductRow, product)
                return from_optional(row and Money.parse(row.price))

            def attribute_delta(
                self, product: ProductRef, attribute: Attribute
            ) -> Option[Money]:
                row = self.session.get(AttributePriceRow, (product, *attribute))
                return from_optional(row and Money.parse(row.delta))
    """

    def base_price(self, product: ProductRef) -> Option[Money]:
        """Base unit price. Nothing means the product does not exist."""
        ...

    def attribute_delta(self, product: ProductRef, attribute: Attribute) -> Option[Money]:
        """Signed price delta for an attribute value. Nothing means zero."""
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "Attribute",
    "attributes",
    "Catalog",
)
