"""Tests for gift package configuration."""

from decimal import Decimal

from storefront import gift as G
from storefront import money as M

from tests.helpers import ok, err


def package(price: int | None = 1200) -> G.GiftPackage:
    return G.GiftPackage.of(
        "box",
        "Discovery Box",
        (
            G.PackageSize("50ml", "50", (G.ProductOption("oud"), G.ProductOption("amber"))),
            G.PackageSize("100ml", "100", (G.ProductOption("musk"), G.ProductOption("rose"))),
        ),
        package_price=price,
        package_original_price=1500,
    )


class TestSelection:
    def test_defaults_pick_first_option(self):
        selection = G.Selection.defaults(package())
        assert selection.chosen("50ml") == ("oud",)
        assert selection.chosen("100ml") == ("musk",)

    def test_toggle_adds_and_removes(self):
        selection = G.Selection().toggle("50ml", "oud").toggle("50ml", "amber")
        assert selection.chosen("50ml") == ("oud", "amber")
        assert selection.toggle("50ml", "oud").chosen("50ml") == ("amber",)
        assert selection.total_selected == 2

    def test_keep_one_refuses_last_removal(self):
        selection = G.Selection().toggle("50ml", "oud")
        assert selection.toggle("50ml", "oud", keep_one=True).chosen("50ml") == ("oud",)
        assert selection.toggle("50ml", "oud").chosen("50ml") == ()


class TestValidate:
    def test_missing_size_then_complete(self):
        selection = G.Selection().toggle("50ml", "oud")

        e = err(G.validate_selection(package(), selection))
        assert e.kind is G.GiftPackageErrorKind.MISSING_SIZES
        assert e.missing_sizes == ("100ml",)
        assert e.message == "Choose a product for: 100ml"

        resolved = ok(G.validate_selection(package(), selection.toggle("100ml", "rose")))
        assert [s.product_ids for s in resolved] == [("oud",), ("rose",)]

    def test_unoffered_product_does_not_count(self):
        selection = G.Selection().toggle("50ml", "oud").toggle("100ml", "oud")
        assert err(G.validate_selection(package(), selection)).missing_sizes == ("100ml",)


class TestConfigure:
    def test_line_carries_package_price(self):
        selection = G.Selection.defaults(package()).toggle("100ml", "rose")

        item = ok(G.configure(package(), selection, quantity=0))

        assert isinstance(item, M.GiftPackageLineItem)
        assert item.quantity == 1
        assert M.resolve_unit_price(item) == Decimal(1200)
        assert item.package_original_price == Decimal(1500)
        assert item.size == "Gift Package"
        assert item.volume == "2 sizes"

    def test_no_price(self):
        e = err(G.configure(package(price=None), G.Selection.defaults(package())))
        assert e.kind is G.GiftPackageErrorKind.NO_PRICE
