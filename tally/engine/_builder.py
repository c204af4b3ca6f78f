"""
Engine builder — fluent API over the pricing components.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from tally.catalog import Catalog, PriceComponentResolver
from tally.config import Settings, get_settings
from tally.discount import DiscountEngine, DiscountRule
from tally.engine._engine import OrderTotalEngine
from tally.money import Currency, Rounding
from tally.tax import TaxCalculator, TaxContext, TaxRates


@dataclass(slots=True, frozen=True)
class EngineBuilder:
    """
    Fluent engine builder.

    Anything not set explicitly comes from Settings. The rounding mode is
    chosen once here and handed to the discount engine and the tax
    calculator, so one engine never mixes modes.
    """

    _catalog: Catalog | None = None
    _rates: TaxRates | None = None
    _rules: tuple[DiscountRule, ...] = ()
    _rounding: Rounding | None = None
    _currency: Currency | None = None
    _default_tax: TaxContext | None = None
    _settings: Settings | None = None

    def catalog(self, c: Catalog) -> EngineBuilder:
        """Set the price lookup collaborator."""
        return replace(self, _catalog=c)

    def tax_rates(self, r: TaxRates) -> EngineBuilder:
        """Set the tax-rate collaborator."""
        return replace(self, _rates=r)

    def discounts(self, *rules: DiscountRule) -> EngineBuilder:
        """Append discount rules (declaration order matters)."""
        return replace(self, _rules=(*self._rules, *rules))

    def rounding(self, mode: Rounding) -> EngineBuilder:
        return replace(self, _rounding=mode)

    def currency(self, c: Currency) -> EngineBuilder:
        return replace(self, _currency=c)

    def default_tax(self, context: TaxContext) -> EngineBuilder:
        """Tax context used when compute_order_total() is not given one."""
        return replace(self, _default_tax=context)

    def settings(self, s: Settings) -> EngineBuilder:
        return replace(self, _settings=s)

    def build(self) -> OrderTotalEngine:
        """Build the engine."""
        if self._catalog is None:
            raise ValueError("catalog() is required")
        if self._rates is None:
            raise ValueError("tax_rates() is required")

        s = self._settings if self._settings is not None else get_settings()
        rounding = self._rounding or Rounding.from_name(s.rounding)
        currency = self._currency or Currency(s.currency, s.minor_units)
        default_tax = self._default_tax or TaxContext(s.tax_class, s.jurisdiction)

        return OrderTotalEngine(
            resolver=PriceComponentResolver(self._catalog),
            discounts=DiscountEngine(self._rules, rounding),
            tax=TaxCalculator(self._rates, rounding),
            currency=currency,
            default_tax=default_tax,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# engine() — Entry Point
# ═══════════════════════════════════════════════════════════════════════════════

def engine() -> EngineBuilder:
    """
    Start building an engine.

    Example:
        pricing = (
            engine()
            .catalog(MemoryCatalog().add_product("TSHIRT", "19.99"))
            .tax_rates(RateTable().set_rate("0.08"))
            .discounts(D.percent("loyalty", 10, tiers={"gold"}))
            .build()
        )

        result = pricing.compute_order_total(lines, customer)
    """
    return EngineBuilder()


__all__ = (
    "EngineBuilder",
    "engine",
)
