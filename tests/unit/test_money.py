"""Tests for unit price resolution and money display."""

from decimal import Decimal

import pytest

from storefront import money as M
from storefront._types import to_money

from tests.helpers import line, gift


class TestResolveUnitPrice:
    def test_discounted_price_wins(self):
        assert M.resolve_unit_price(line("oud", 750, original=900)) == Decimal(750)

    def test_falls_back_to_original(self):
        assert M.resolve_unit_price(line("oud", None, original=900)) == Decimal(900)

    def test_no_price_is_zero(self):
        """A line with neither price must still price, at zero."""
        assert M.resolve_unit_price(line("oud", None)) == Decimal(0)

    def test_negative_price_is_clamped(self):
        assert M.resolve_unit_price(line("oud", -5)) == Decimal(0)

    def test_gift_package_uses_package_price(self):
        item = M.gift_line_item("box", 1200, (), package_original_price=1500)
        assert M.resolve_unit_price(item) == Decimal(1200)

    def test_catalog_snapshot(self):
        size = M.product_size("100ml", "100", 1400, 1100)
        item = M.line_item_for("amber", size, 2, name="Amber")
        assert item.unit_discounted_price == Decimal(1100)
        assert item.quantity == 2
        assert M.resolve_unit_price(item) == Decimal(1100)


class TestLineItem:
    def test_discount_above_original_rejected(self):
        with pytest.raises(ValueError):
            M.LineItem(
                "oud", "50ml", unit_original_price=Decimal(100), unit_discounted_price=Decimal(500)
            )

    def test_catalog_size_with_inverted_prices_rejected(self):
        with pytest.raises(ValueError):
            M.line_item_for("oud", M.product_size("50ml", "50", 100, 500))

    def test_equal_prices_allowed(self):
        assert M.resolve_unit_price(line("oud", 900, original=900)) == Decimal(900)


class TestDisplayPair:
    def test_strikethrough_when_saving(self):
        pair = M.resolve_display_pair(line("oud", 750, original=900))
        assert pair.original == Decimal(900)
        assert pair.effective == Decimal(750)
        assert pair.has_saving

    def test_no_strikethrough_without_saving(self):
        pair = M.resolve_display_pair(line("oud", 900, original=900))
        assert pair.original is None
        assert not pair.has_saving

    def test_gift_original_is_display_only(self):
        item = gift("box", 1200, ("50ml", ("oud",)))
        pair = M.resolve_display_pair(item)
        assert pair.original is None
        assert pair.effective == Decimal(1200)


class TestDisplay:
    def test_rounds_half_up_to_cents(self):
        assert M.display(Decimal("10.005")) == Decimal("10.01")
        assert M.display(Decimal("10.004")) == Decimal("10.00")

    def test_format_money(self):
        assert M.format_money(Decimal("470")) == "470.00 EGP"

    def test_float_goes_through_str(self):
        assert to_money(0.1) == Decimal("0.1")
