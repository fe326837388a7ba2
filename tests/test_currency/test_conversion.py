"""Tests for fixed-rate conversion in django_gateway_currency.currency.conversion."""

from decimal import Decimal

import pytest

from django_gateway_currency.currency.conversion import convert, from_meta, to_meta

RATE = Decimal("0.37")


@pytest.mark.unit
class TestConvert:
    def test_sample_rate(self):
        assert convert(Decimal("100.00"), RATE) == Decimal("37.00")

    def test_rounds_to_cents(self):
        assert convert(Decimal("10.01"), RATE) == Decimal("3.70")
        assert convert(Decimal("1.35"), RATE) == Decimal("0.50")

    def test_rounds_half_up(self):
        # 0.125 sits exactly on the half cent.
        assert convert(Decimal("0.25"), Decimal("0.5")) == Decimal("0.13")

    def test_zero(self):
        assert convert(Decimal("0"), RATE) == Decimal("0.00")

    @pytest.mark.parametrize("amount", ["0.01", "19.99", "250", "1234.56", "99999.99"])
    def test_matches_rounded_product(self, amount):
        value = Decimal(amount)
        assert convert(value, RATE) == round(value * RATE, 2)

    def test_monotonic(self):
        amounts = [Decimal(cents) / 100 for cents in range(0, 5000, 7)]
        converted = [convert(amount, RATE) for amount in amounts]
        assert converted == sorted(converted)

    def test_result_has_two_places(self):
        assert convert(Decimal("3"), Decimal("2")).as_tuple().exponent == -2


@pytest.mark.unit
class TestMetaStrings:
    def test_to_meta(self):
        assert to_meta(Decimal("100")) == "100.00"
        assert to_meta(Decimal("1234.5")) == "1234.50"

    def test_from_meta(self):
        assert from_meta("37.00") == Decimal("37.00")

    def test_from_meta_tolerates_grouping(self):
        assert from_meta("1,234.56") == Decimal("1234.56")

    @pytest.mark.parametrize("value", ["", None, "abc", "NaN", "inf"])
    def test_from_meta_degrades_to_zero(self, value):
        assert from_meta(value) == Decimal("0.00")
