"""Tests for the order total engine."""

import asyncio
from decimal import Decimal

import combinators as C
import pytest
from kungfu import Error, Nothing, Ok, Some

from tally import PricingErrorKind
from tally import discount as D
from tally import engine as E
from tally.catalog import Attribute, MemoryCatalog
from tally.config import Settings
from tally.lines import SHIPPING, TAX, LineItem, shipping_line, tax_line
from tally.money import EUR, Money, Rounding
from tally.tax import TaxContext

GOLD = D.CustomerPricingContext("c-1", tier="gold")
LOYALTY = D.percent("loyalty", 10, tiers={"gold"})


def ok(result):
    match result:
        case Ok(summary):
            return summary
        case Error(e):
            raise AssertionError(f"expected a summary, got {e}")


def failed(result):
    match result:
        case Error(e):
            return e
        case Ok(summary):
            raise AssertionError(f"expected an error, got total {summary.total}")


def assert_totals(summary):
    expected = summary.subtotal
    for item in summary.adjustments:
        expected = expected + item.amount
    assert summary.total == expected


# ═══════════════════════════════════════════════════════════════════════════════
# Computation
# ═══════════════════════════════════════════════════════════════════════════════

def test_gold_customer_tshirts(make_engine):
    pricing = make_engine(LOYALTY)

    summary = ok(pricing.compute_order_total([E.OrderLineRequest.of("TSHIRT", 2, size="XL")], GOLD))

    assert summary.subtotal == Money.parse("43.98")
    assert summary.adjustments == (
        LineItem("DISCOUNT:loyalty", Money.parse("-4.40"), 100),
        tax_line(Money.parse("3.17")),
    )
    assert summary.taxable_amount == Money.parse("39.58")
    assert summary.tax == Money.parse("3.17")
    assert summary.total == Money.parse("42.75")


def test_total_is_subtotal_plus_adjustments(make_engine):
    pricing = make_engine(LOYALTY, D.fixed("welcome", "5.00"), D.percent("flash", 5, stacking=True))
    orders = [
        [E.OrderLineRequest.of("MUG", 3)],
        [E.OrderLineRequest.of("TSHIRT", 1, size="S", color="red"), E.OrderLineRequest.of("BOOK", 2)],
        [E.OrderLineRequest.of("POSTER", 7)],
    ]

    for lines in orders:
        summary = ok(pricing.compute_order_total(lines, GOLD, shipping_line(Money.parse("4.99"))))
        assert_totals(summary)


def test_same_input_same_output(make_engine):
    pricing = make_engine(LOYALTY)
    lines = [E.OrderLineRequest.of("TSHIRT", 2, size="XL"), E.OrderLineRequest.of("MUG")]

    assert pricing.compute_order_total(lines, GOLD) == pricing.compute_order_total(lines, GOLD)


def test_doubling_quantities_doubles_the_subtotal(make_engine):
    pricing = make_engine()
    single = [E.OrderLineRequest.of("TSHIRT", 1, size="XL"), E.OrderLineRequest.of("MUG", 3)]
    double = [E.OrderLineRequest.of("TSHIRT", 2, size="XL"), E.OrderLineRequest.of("MUG", 6)]

    once = ok(pricing.compute_order_total(single))
    twice = ok(pricing.compute_order_total(double))

    assert once.subtotal == Money.parse("47.49")
    assert twice.subtotal == once.subtotal.multiply(2)


def test_unit_prices_are_not_rounded_before_quantity(catalog, make_engine):
    catalog.add_product("BOLT", "0.125")

    summary = ok(make_engine().compute_order_total([E.OrderLineRequest.of("BOLT", 8)]))

    assert summary.subtotal.amount == Decimal("1.000")
    assert summary.tax == Money.parse("0.08")
    assert summary.total == Money.parse("1.08")


def test_percentage_rule_with_many_places(make_engine):
    pricing = make_engine(D.percent("third", "33.3333333333"))

    summary = ok(pricing.compute_order_total([E.OrderLineRequest.of("TSHIRT", 2, size="XL")]))

    assert summary.line("DISCOUNT:third").map(lambda item: item.amount) == Some(Money.parse("-14.66"))
    assert summary.tax == Money.parse("2.35")
    assert summary.total == Money.parse("31.67")


def test_without_discounts(make_engine):
    pricing = make_engine()

    summary = ok(pricing.compute_order_total(
        [E.OrderLineRequest.of("POSTER")],
        shipping=shipping_line(Money.parse("5.00")),
    ))

    assert summary.discounts == ()
    assert summary.total == Money.parse("17.96")


def test_full_discount_leaves_shipping(make_engine):
    pricing = make_engine(D.percent("staff", 100))

    summary = ok(pricing.compute_order_total(
        [E.OrderLineRequest.of("MUG", 2)],
        shipping=shipping_line(Money.parse("4.99")),
    ))

    assert summary.line(TAX) == Some(tax_line(Money.zero()))
    assert summary.total == Money.parse("4.99")


def test_empty_order(make_engine):
    summary = ok(make_engine(LOYALTY).compute_order_total([], GOLD))

    assert summary.subtotal == Money.zero()
    assert summary.adjustments == (tax_line(Money.zero()),)
    assert summary.total.is_zero()


def test_tax_context_override(make_engine):
    pricing = make_engine()
    lines = [E.OrderLineRequest.of("TSHIRT", 2, size="XL")]

    assert ok(pricing.compute_order_total(lines)).tax == Money.parse("3.52")
    assert ok(pricing.compute_order_total(lines, tax=TaxContext(jurisdiction="US-WA"))).tax == Money.parse("4.51")
    assert ok(pricing.compute_order_total(lines, tax=TaxContext("exempt"))).tax == Money.zero()


def test_display_order(make_engine):
    pricing = make_engine(LOYALTY, D.fixed("welcome", "1.00"))

    summary = ok(pricing.compute_order_total(
        [E.OrderLineRequest.of("BOOK")],
        GOLD,
        shipping_line(Money.parse("4.99")),
    ))

    assert [item.label for item in summary.for_display()] == [
        "DISCOUNT:loyalty",
        "DISCOUNT:welcome",
        TAX,
        SHIPPING,
    ]


# ═══════════════════════════════════════════════════════════════════════════════
# Shipping
# ═══════════════════════════════════════════════════════════════════════════════

def test_shipping_absent(make_engine):
    summary = ok(make_engine().compute_order_total([E.OrderLineRequest.of("MUG")]))

    assert isinstance(summary.line(SHIPPING), Nothing)


def test_free_shipping_is_still_a_line(make_engine):
    summary = ok(make_engine().compute_order_total(
        [E.OrderLineRequest.of("MUG")],
        shipping=shipping_line(Money.zero()),
    ))

    assert summary.line(SHIPPING) == Some(shipping_line(Money.zero()))


def test_shipping_label_collision(make_engine):
    result = make_engine().compute_order_total(
        [E.OrderLineRequest.of("MUG")],
        shipping=shipping_line(Money.parse("4.99"), label=TAX),
    )

    assert failed(result).kind is PricingErrorKind.DUPLICATE_LABEL


def test_shipping_in_another_currency(make_engine):
    result = make_engine().compute_order_total(
        [E.OrderLineRequest.of("MUG")],
        shipping=shipping_line(Money.parse("4.99", EUR)),
    )

    assert failed(result).kind is PricingErrorKind.CURRENCY_MISMATCH


# ═══════════════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════════════

class CountingCatalog(MemoryCatalog):
    def __init__(self) -> None:
        super().__init__()
        self.lookups = 0

    def base_price(self, product):
        self.lookups += 1
        return super().base_price(product)


def test_unknown_product(make_engine):
    error = failed(make_engine().compute_order_total([E.OrderLineRequest.of("MUG"), E.OrderLineRequest.of("HAT")]))

    assert error.kind is PricingErrorKind.PRODUCT_NOT_FOUND
    assert error.product == "HAT"


@pytest.mark.parametrize("quantity", [0, -1, True, 1.5])
def test_invalid_quantity_is_caught_before_pricing(rates, settings, quantity):
    catalog = CountingCatalog().add_product("MUG", "8.50")
    pricing = E.engine().catalog(catalog).tax_rates(rates).settings(settings).build()

    error = failed(pricing.compute_order_total([
        E.OrderLineRequest.of("HAT"),
        E.OrderLineRequest.of("MUG", quantity),
    ]))

    assert error.kind is PricingErrorKind.INVALID_QUANTITY
    assert catalog.lookups == 0


def test_summary_refuses_duplicate_labels():
    with pytest.raises(ValueError):
        E.OrderTotalSummary(Money.zero(), (tax_line(Money.zero()), tax_line(Money.zero())))


def test_order_line_attributes():
    request = E.OrderLineRequest.of("TSHIRT", 2, size="XL")

    assert request.attributes == frozenset({Attribute("size", "XL")})


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════

def test_builder_requires_collaborators(catalog, rates):
    with pytest.raises(ValueError, match="catalog"):
        E.engine().tax_rates(rates).build()
    with pytest.raises(ValueError, match="tax_rates"):
        E.engine().catalog(catalog).build()


def test_builder_is_immutable(catalog, rates, settings):
    base = E.engine().catalog(catalog).tax_rates(rates).settings(settings)

    plain = base.build()
    discounted = base.discounts(LOYALTY).build()

    assert plain.discounts.rules == ()
    assert discounted.discounts.rules == (LOYALTY,)


def test_rounding_from_settings(catalog, rates):
    pricing = (
        E.engine()
        .catalog(catalog)
        .tax_rates(rates)
        .settings(Settings(_env_file=None, rounding="half_even", tax_class="reduced"))
        .build()
    )

    summary = ok(pricing.compute_order_total([E.OrderLineRequest.of("BOOK")]))

    assert pricing.tax.rounding is Rounding.HALF_EVEN
    assert summary.tax == Money.parse("0.62")


def test_explicit_rounding_wins_over_settings(make_engine):
    pricing = make_engine(builder=E.engine().rounding(Rounding.HALF_EVEN))

    assert pricing.discounts.rounding is Rounding.HALF_EVEN


# ═══════════════════════════════════════════════════════════════════════════════
# Async
# ═══════════════════════════════════════════════════════════════════════════════

def test_run_matches_compute(make_engine):
    pricing = make_engine(LOYALTY)
    lines = [E.OrderLineRequest.of("TSHIRT", 2, size="XL")]

    async def main():
        return await C.timeout(pricing.run(lines, GOLD), seconds=1.0)

    assert asyncio.run(main()) == pricing.compute_order_total(lines, GOLD)


def test_run_is_lazy(make_engine):
    pricing = make_engine()

    lazy = pricing.run([E.OrderLineRequest.of("MUG", 0)])

    async def main():
        return await lazy

    assert failed(asyncio.run(main())).kind is PricingErrorKind.INVALID_QUANTITY
