"""
In-memory catalog.
"""

from __future__ import annotations

from decimal import Decimal

from kungfu import Option, from_optional

from tally._types import ProductRef
from tally.catalog._types import Attribute
from tally.money import Currency, Money, USD


class MemoryCatalog:
    """
    Dictionary-backed Catalog for tests, demos and small embedded setups.

    Example:
        catalog = (
            MemoryCatalog()
            .add_product("TSHIRT", "19.99")
            .add_delta("TSHIRT", "size", "XL", "2.00")
        )
    """

    def __init__(self, currency: Currency = USD) -> None:
        self._currency = currency
        self._prices: dict[ProductRef, Money] = {}
        self._deltas: dict[tuple[ProductRef, Attribute], Money] = {}

    @property
    def currency(self) -> Currency:
        return self._currency

    def add_product(self, product: ProductRef, price: str | Decimal | Money) -> MemoryCatalog:
        self._prices[product] = self._money(price)
        return self

    def add_delta(
        self,
        product: ProductRef,
        name: str,
        value: str,
        delta: str | Decimal | Money,
    ) -> MemoryCatalog:
        self._deltas[(product, Attribute(name, value))] = self._money(delta)
        return self

    def remove_product(self, product: ProductRef) -> bool:
        if product not in self._prices:
            return False
        del self._prices[product]
        for key in [k for k in self._deltas if k[0] == product]:
            del self._deltas[key]
        return True

    def base_price(self, product: ProductRef) -> Option[Money]:
        return from_optional(self._prices.get(product))

    def attribute_delta(self, product: ProductRef, attribute: Attribute) -> Option[Money]:
        return from_optional(self._deltas.get((product, attribute)))

    def _money(self, value: str | Decimal | Money) -> Money:
        if isinstance(value, Money):
            return value
        return Money.parse(value, self._currency)


__all__ = ("MemoryCatalog",)
