"""
Unit price resolution — base price plus attribute deltas.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from kungfu import Result, Ok, Error, Some

from tally._errors import PricingError, PricingErrorKind
from tally._types import ProductRef
from tally.catalog._types import Attribute, Catalog
from tally.money import Money, MoneyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PriceComponentResolver:
    """
    Resolve the exact unit price of a product for a set of attributes.

    Deltas are summed in sorted attribute order, so the result does not
    depend on how the selection was built. The unit price is not rounded:
    it is not a line item, and unit × quantity stays exact downstream.
    """

    catalog: Catalog

    def resolve_unit_price(
        self,
        product: ProductRef,
        attributes: Iterable[Attribute] = (),
    ) -> Result[Money, PricingError]:
        match self.catalog.base_price(product):
            case Some(base):
                pass
            case _:
                return Error(PricingError(
                    PricingErrorKind.PRODUCT_NOT_FOUND,
                    f"product {product!r} not found",
                    product,
                ))

        selected = sorted(set(attributes))
        try:
            unit = base
            for attribute in selected:
                delta = self.catalog.attribute_delta(product, attribute).unwrap_or(None)
                if delta is not None:
                    unit = unit.add(delta)
        except MoneyError as exc:
            return Error(PricingError.from_money_error(exc, product))

        if unit.is_negative():
            return Error(PricingError(
                PricingErrorKind.INVALID_AMOUNT,
                f"unit price of {product!r} resolves to {unit}",
                product,
            ))

        logger.debug("resolved %r %s -> %s", product, [str(a) for a in selected], unit)
        return Ok(unit)


__all__ = ("PriceComponentResolver",)
