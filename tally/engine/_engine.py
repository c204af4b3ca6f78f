"""
Order total engine — pricing, discounting, taxing, shipping, totaling.

Note: Synchronous and stateless. run() wraps the same computation into a
LazyCoroResult for async callers that compose it with combinators.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from combinators import lift as L
from kungfu import Result, Ok, Error, LazyCoroResult

from tally._errors import PricingError, PricingErrorKind
from tally.catalog import PriceComponentResolver
from tally.discount import ANONYMOUS, CustomerPricingContext, DiscountEngine
from tally.engine._types import OrderLineRequest, OrderTotalSummary
from tally.lines import LineItem
from tally.money import Currency, Money, MoneyError
from tally.tax import TaxCalculator, TaxContext

logger = logging.getLogger(__name__)


def _valid_quantity(quantity: object) -> bool:
    return isinstance(quantity, int) and not isinstance(quantity, bool) and quantity >= 1


@dataclass(frozen=True, slots=True)
class OrderTotalEngine:
    """
    Compute an OrderTotalSummary for a list of order lines.

    Steps (linear, any failure aborts with the originating error):
        0. validation   — every quantity >= 1, before any lookup
        1. pricing      — unit price × quantity, summed into the subtotal
        2. discounting  — one DiscountEngine call against the subtotal
        3. taxing       — TaxCalculator on subtotal + discounts
        4. shipping     — caller's line appended unchanged, if given
        5. totaling     — summary with a derived total

    Build with tally.engine.engine(); see OrderTotalEngine.compute_order_total.
    """

    resolver: PriceComponentResolver
    discounts: DiscountEngine
    tax: TaxCalculator
    currency: Currency
    default_tax: TaxContext = TaxContext()

    def compute_order_total(
        self,
        lines: Iterable[OrderLineRequest],
        customer: CustomerPricingContext = ANONYMOUS,
        shipping: LineItem | None = None,
        *,
        tax: TaxContext | None = None,
    ) -> Result[OrderTotalSummary, PricingError]:
        """
        Price an order.

        Example:
            result = engine.compute_order_total(
                [OrderLineRequest.of("TSHIRT", 2, size="XL")],
                CustomerPricingContext("c-42", tier="gold"),
                shipping=shipping_line(Money.parse("4.99")),
            )

            match result:
                case Ok(summary):
                    print(summary.total)
                case Error(e):
                    print(f"{e.kind.name}: {e.message}")
        """
        requests = tuple(lines)
        context = tax or self.default_tax

        result: Result[OrderTotalSummary, PricingError] = (
            self._validate(requests)
            .then(lambda _: self._subtotal(requests))
            .then(lambda subtotal: self._summarize(subtotal, customer, shipping, context))
        )

        match result:
            case Ok(summary):
                logger.debug(
                    "order total: %d lines, subtotal %s, total %s",
                    len(requests),
                    summary.subtotal,
                    summary.total,
                )
            case Error(e):
                logger.info("order total failed: %s", e)
        return result

    def run(
        self,
        lines: Iterable[OrderLineRequest],
        customer: CustomerPricingContext = ANONYMOUS,
        shipping: LineItem | None = None,
        *,
        tax: TaxContext | None = None,
    ) -> LazyCoroResult[OrderTotalSummary, PricingError]:
        """
        Lazy form of compute_order_total.

        Example:
            import combinators as C

            result = await C.timeout(engine.run(lines, customer), seconds=2.0)
        """
        requests = tuple(lines)

        async def compute() -> Result[OrderTotalSummary, PricingError]:
            return self.compute_order_total(requests, customer, shipping, tax=tax)

        return L.wrap_async(compute)

    # ── Steps ────────────────────────────────────────────

    def _validate(self, requests: Sequence[OrderLineRequest]) -> Result[None, PricingError]:
        for index, request in enumerate(requests):
            if not _valid_quantity(request.quantity):
                return Error(PricingError(
                    PricingErrorKind.INVALID_QUANTITY,
                    f"line {index}: quantity must be an integer >= 1, got {request.quantity!r}",
                    request.product,
                ))
        return Ok(None)

    def _subtotal(self, requests: Sequence[OrderLineRequest]) -> Result[Money, PricingError]:
        subtotal = Money.zero(self.currency)
        for request in requests:
            match self.resolver.resolve_unit_price(request.product, request.attributes):
                case Ok(unit):
                    try:
                        subtotal = subtotal.add(unit.multiply(request.quantity))
                    except MoneyError as exc:
                        return Error(PricingError.from_money_error(exc, request.product))
                case Error(e):
                    return Error(e)
        return Ok(subtotal)

    def _summarize(
        self,
        subtotal: Money,
        customer: CustomerPricingContext,
        shipping: LineItem | None,
        tax: TaxContext,
    ) -> Result[OrderTotalSummary, PricingError]:
        try:
            adjustments = self.discounts.compute_discounts(subtotal, customer)

            taxable = subtotal
            for discount in adjustments:
                taxable = taxable.add(discount.amount)
            adjustments.append(self.tax.compute_tax(taxable, tax))

            if shipping is not None:
                if any(item.label == shipping.label for item in adjustments):
                    return Error(PricingError(
                        PricingErrorKind.DUPLICATE_LABEL,
                        f"shipping line label {shipping.label!r} collides with a computed line",
                    ))
                adjustments.append(shipping)

            return Ok(OrderTotalSummary(subtotal, tuple(adjustments)))
        except MoneyError as exc:
            return Error(PricingError.from_money_error(exc))


__all__ = ("OrderTotalEngine",)
