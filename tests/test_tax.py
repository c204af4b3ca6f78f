"""Tests for tax rate lookup and the tax calculator."""

from decimal import Decimal

import pytest

from tally.lines import TAX
from tally.money import InvalidAmount, Money, Rounding
from tally.tax import RateTable, TaxCalculator, TaxContext


class RecordingRates:
    def __init__(self, rate: str) -> None:
        self.rate = Decimal(rate)
        self.calls: list[TaxContext] = []

    def rate_for(self, context: TaxContext) -> Decimal:
        self.calls.append(context)
        return self.rate


def test_tax_is_settled_once(rates):
    line = TaxCalculator(rates).compute_tax(Money.parse("39.58"), TaxContext())

    assert line.label == TAX
    assert line.amount == Money.parse("3.17")


def test_zero_taxable_skips_the_rate_lookup():
    recorder = RecordingRates("0.08")

    line = TaxCalculator(recorder).compute_tax(Money.zero(), TaxContext())

    assert line.label == TAX
    assert line.amount.is_zero()
    assert recorder.calls == []


def test_context_is_passed_verbatim():
    recorder = RecordingRates("0.08")
    context = TaxContext("books", "DE-BY")

    TaxCalculator(recorder).compute_tax(Money.parse("10.00"), context)

    assert recorder.calls == [context]


def test_negative_rate_from_collaborator():
    with pytest.raises(InvalidAmount):
        TaxCalculator(RecordingRates("-0.01")).compute_tax(Money.parse("10.00"), TaxContext())


def test_rounding_mode_is_honoured():
    rates = RecordingRates("0.05")
    taxable = Money.parse("12.50")

    assert TaxCalculator(rates, Rounding.HALF_UP).compute_tax(taxable, TaxContext()).amount == Money.parse("0.63")
    assert TaxCalculator(rates, Rounding.HALF_EVEN).compute_tax(taxable, TaxContext()).amount == Money.parse("0.62")


# ═══════════════════════════════════════════════════════════════════════════════
# Rate Table
# ═══════════════════════════════════════════════════════════════════════════════

def test_rate_table_lookup_falls_back(rates):
    assert rates.rate_for(TaxContext()) == Decimal("0.08")
    assert rates.rate_for(TaxContext(jurisdiction="US-WA")) == Decimal("0.1025")
    assert rates.rate_for(TaxContext(jurisdiction="US-OR")) == Decimal("0.08")
    assert rates.rate_for(TaxContext("reduced", "US-WA")) == Decimal("0.05")
    assert rates.rate_for(TaxContext("exempt")) == Decimal("0")
    assert rates.rate_for(TaxContext("luxury")) == Decimal("0")


def test_rate_table_refuses_negative_rates():
    with pytest.raises(ValueError):
        RateTable().set_rate("-0.05")
    with pytest.raises(ValueError):
        RateTable(default="-1")
