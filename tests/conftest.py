"""Pytest fixtures: an in-memory catalog, a rate table and an engine factory."""

from collections.abc import Callable

import pytest

from tally import engine as E
from tally.catalog import MemoryCatalog
from tally.config import Settings
from tally.discount import DiscountRule
from tally.tax import RateTable


@pytest.fixture
def catalog() -> MemoryCatalog:
    return (
        MemoryCatalog()
        .add_product("TSHIRT", "19.99")
        .add_delta("TSHIRT", "size", "XL", "2.00")
        .add_delta("TSHIRT", "size", "S", "-1.00")
        .add_delta("TSHIRT", "color", "red", "0.50")
        .add_product("MUG", "8.50")
        .add_product("POSTER", "12.00")
        .add_product("BOOK", "12.50")
    )


@pytest.fixture
def rates() -> RateTable:
    return (
        RateTable(default="0")
        .set_rate("0.08")
        .set_rate("0.1025", jurisdiction="US-WA")
        .set_rate("0.05", tax_class="reduced")
        .set_rate("0", tax_class="exempt")
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def make_engine(
    catalog: MemoryCatalog,
    rates: RateTable,
    settings: Settings,
) -> Callable[..., E.OrderTotalEngine]:
    def build(*rules: DiscountRule, builder: E.EngineBuilder | None = None) -> E.OrderTotalEngine:
        base = builder if builder is not None else E.engine()
        return (
            base
            .catalog(catalog)
            .tax_rates(rates)
            .settings(settings)
            .discounts(*rules)
            .build()
        )

    return build
