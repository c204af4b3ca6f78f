"""Shared infrastructure for examples."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from decimal import Decimal

from kungfu import Result, Ok, Error

from tally.catalog import MemoryCatalog
from tally.money import Money
from tally.tax import RateTable


# Errors
@dataclass(frozen=True, slots=True)
class NoShippingQuote(Exception):
    zone: str

    def __str__(self) -> str:
        return f"no shipping quote for zone {self.zone!r}"


# Fake shipping-rate service
@dataclass(slots=True)
class FakeShippingRates:
    fees: dict[str, Decimal] = field(default_factory=lambda: {
        "domestic": Decimal("4.99"),
        "pickup": Decimal("0"),
    })

    async def quote(self, zone: str) -> Result[Money, NoShippingQuote]:
        await asyncio.sleep(0.01)
        fee = self.fees.get(zone)
        return Ok(Money(fee)) if fee is not None else Error(NoShippingQuote(zone))


# Fixtures
def demo_catalog() -> MemoryCatalog:
    return (
        MemoryCatalog()
        .add_product("TSHIRT", "19.99")
        .add_delta("TSHIRT", "size", "XL", "2.00")
        .add_delta("TSHIRT", "color", "red", "0.50")
        .add_product("MUG", "8.50")
    )


def demo_rates() -> RateTable:
    return (
        RateTable(default="0")
        .set_rate("0.08")
        .set_rate("0.1025", jurisdiction="US-WA")
    )


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    asyncio.run(main())
