"""Tests for the governorate shipping table."""

from decimal import Decimal

import pytest

from storefront import shipping as S


class TestShippingFee:
    def test_known_governorates(self):
        assert S.shipping_fee("Dakahlia", 100) == Decimal(70)
        assert S.shipping_fee("Cairo", 100) == Decimal(85)
        assert S.shipping_fee("Luxor", 100) == Decimal(100)

    @pytest.mark.parametrize("region", ["Atlantis", "cairo", "", None])
    def test_unknown_region_gets_default(self, region):
        """Lookup is exact. Anything unmatched falls back to 85."""
        assert S.shipping_fee(region, 100) == S.DEFAULT_FEE == Decimal(85)

    def test_free_above_threshold(self):
        assert S.shipping_fee("Luxor", 2001) == Decimal(0)
        assert S.shipping_fee("Luxor", Decimal("2000.01")) == Decimal(0)

    def test_threshold_itself_is_charged(self):
        assert S.shipping_fee("Luxor", 2000) == Decimal(100)

    def test_every_rate_in_range(self):
        for region, fee in S.GOVERNORATE_RATES.items():
            assert Decimal(70) <= fee <= Decimal(100), region

    def test_every_checkout_governorate_prices(self):
        for region in S.GOVERNORATES:
            assert S.shipping_fee(region, 100) > 0


class TestShippingTable:
    def test_overrides_return_new_table(self):
        table = S.ShippingTable().with_default_fee(90).with_free_shipping_threshold(1500)

        assert table.fee("Atlantis", 100) == Decimal(90)
        assert table.fee("Cairo", 1501) == Decimal(0)
        assert S.DEFAULT_TABLE.fee("Atlantis", 100) == Decimal(85)

    def test_with_rate(self):
        table = S.ShippingTable().with_rate("Shubra El Kheima", 80)
        assert table.rate_for("Shubra El Kheima") == Decimal(80)
        assert S.DEFAULT_TABLE.rate_for("Shubra El Kheima") == Decimal(85)

    def test_with_rates_replaces_table(self):
        table = S.ShippingTable().with_rates({"Cairo": 50})
        assert table.regions == ("Cairo",)
        assert table.fee("Dakahlia", 100) == table.default_fee
