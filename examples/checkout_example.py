"""
Checkout — order totals with discounts, tax and shipping.

Key concepts:
- Catalog + RateTable = collaborators (global, inject via DI)
- engine() = declarative builder, one rounding mode for everything
- compute_order_total() is synchronous; run() is its lazy async form

Level 5: tally.engine
Level 3: combinators.timeout
Level 2: kungfu.Result
"""

import combinators as C
from kungfu import Ok, Error

from tally import discount as D
from tally import engine as E
from tally.config import Settings
from tally.lines import shipping_line
from tally.money import Money
from tally.tax import TaxContext
from examples._infra import banner, run, demo_catalog, demo_rates, FakeShippingRates


shipping = FakeShippingRates()


# ═══════════════════════════════════════════════════════════════════════════════
# 1. ENGINE — collaborators + rules, built once
# ═══════════════════════════════════════════════════════════════════════════════

pricing = (
    E.engine()
    .catalog(demo_catalog())
    .tax_rates(demo_rates())
    .settings(Settings(_env_file=None))
    .discounts(
        D.percent("loyalty", 10, tiers={"gold"}),
        D.fixed("welcome", "5.00", min_subtotal="50"),
        D.percent("flash", 5, stacking=True),
    )
    .build()
)

gold = D.CustomerPricingContext("c-42", tier="gold")
cart = [
    E.OrderLineRequest.of("TSHIRT", 2, size="XL"),
    E.OrderLineRequest.of("MUG", 1),
]


def show(summary: E.OrderTotalSummary) -> None:
    print(f"   {'SUBTOTAL':<20} {summary.subtotal}")
    for item in summary.for_display():
        print(f"   {item.label:<20} {item.amount}")
    print(f"   {'TOTAL':<20} {summary.total}")


async def main() -> None:
    banner("Checkout: Order Totals")

    print("\n1. Gold customer, no shipping yet:")
    match pricing.compute_order_total(cart, gold):
        case Ok(summary):
            show(summary)
        case Error(e):
            print(f"   error: {e}")

    print("\n2. Anonymous shopper, domestic shipping, Washington tax:")
    match await shipping.quote("domestic"):
        case Ok(fee):
            result = await C.timeout(
                pricing.run(cart, shipping=shipping_line(fee), tax=TaxContext(jurisdiction="US-WA")),
                seconds=1.0,
            )
            match result:
                case Ok(summary):
                    show(summary)
                case Error(e):
                    print(f"   error: {e}")
        case Error(e):
            print(f"   error: {e}")

    print("\n3. Unknown shipping zone, order priced without a shipping line:")
    match await shipping.quote("moon"):
        case Ok(fee):
            print(f"   unexpected quote {fee}")
        case Error(e):
            print(f"   shipping: {e}")
            match pricing.compute_order_total(cart, gold):
                case Ok(summary):
                    show(summary)
                case Error(e):
                    print(f"   error: {e}")

    print("\n4. Invalid quantity:")
    match pricing.compute_order_total([E.OrderLineRequest.of("MUG", 0)]):
        case Ok(summary):
            print(f"   unexpected total {summary.total}")
        case Error(e):
            print(f"   {e}")

    print("\n5. Free pickup:")
    match pricing.compute_order_total(cart, gold, shipping_line(Money.zero())):
        case Ok(summary):
            show(summary)
        case Error(e):
            print(f"   error: {e}")

    print("\nDone!")


if __name__ == "__main__":
    run(main)
