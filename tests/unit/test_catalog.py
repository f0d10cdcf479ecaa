"""Tests for catalog repricing and catalog-backed checkout."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront import catalog as P
from storefront import discount as D
from storefront import gift as G
from storefront import money as M
from storefront._types import Error, StoreError
from storefront.api import create_app
from storefront.checkout import CheckoutService, PlaceOrderRequest, QuoteRequest

from tests.helpers import NOW, line, gift, address, ok, err


OUD = P.Product(
    "oud",
    "Oud Noir",
    (M.product_size("50ml", "50", 900, 750), M.product_size("100ml", "100", 1500)),
    category="oriental",
)
BOX = G.GiftPackage.of(
    "box",
    "Discovery Box",
    (G.PackageSize("50ml", "50", (G.ProductOption("oud"), G.ProductOption("amber"))),),
    package_price=1200,
    package_original_price=1500,
)


class DownCatalog:
    async def product(self, product_id):
        return Error(StoreError("catalog unavailable"))

    async def gift_package(self, product_id):
        return Error(StoreError("catalog unavailable"))


@pytest.fixture
def catalog() -> P.MemoryCatalog:
    return P.MemoryCatalog([OUD], [BOX])


@pytest.fixture
def priced(discounts, orders, catalog) -> CheckoutService:
    """Checkout service that reprices every line from the catalog."""
    return CheckoutService(discounts, orders, clock=lambda: NOW, catalog=catalog)


def order_request(items, code: str | None = None) -> PlaceOrderRequest:
    return PlaceOrderRequest(
        user_id="u1",
        items=tuple(items),
        shipping_address=address("Dakahlia"),
        discount_code=code,
    )


class TestReprice:
    @pytest.mark.asyncio
    async def test_line_prices_come_from_catalog(self, catalog):
        (item,) = ok(await P.reprice(catalog, [line("oud", "0.01", 2, original="1")]))

        assert item == M.LineItem(
            product_id="oud",
            size="50ml",
            volume="50",
            quantity=2,
            unit_original_price=Decimal(900),
            unit_discounted_price=Decimal(750),
            name="Oud Noir",
            category="oriental",
        )

    @pytest.mark.asyncio
    async def test_size_without_discount_drops_client_discount(self, catalog):
        (item,) = ok(await P.reprice(catalog, [line("oud", 1, size="100ml", original=1500)]))

        assert item.unit_discounted_price is None
        assert M.resolve_unit_price(item) == Decimal(1500)

    @pytest.mark.asyncio
    async def test_unknown_product(self, catalog):
        e = err(await P.reprice(catalog, [line("oud", 750), line("ghost", 10)]))

        assert e.kind is P.CatalogErrorKind.UNKNOWN_PRODUCT
        assert e.product_id == "ghost"

    @pytest.mark.asyncio
    async def test_unknown_size(self, catalog):
        e = err(await P.reprice(catalog, [line("oud", 750, size="30ml")]))

        assert e.kind is P.CatalogErrorKind.UNKNOWN_SIZE
        assert e.size == "30ml"

    @pytest.mark.asyncio
    async def test_inverted_catalog_prices(self):
        bad = P.Product("oud", "Oud Noir", (M.product_size("50ml", "50", 100, 500),))

        e = err(await P.reprice(P.MemoryCatalog([bad]), [line("oud", 50)]))

        assert e.kind is P.CatalogErrorKind.INVALID_PRICE

    @pytest.mark.asyncio
    async def test_gift_package_price_comes_from_catalog(self, catalog):
        (item,) = ok(await P.reprice(catalog, [gift("box", 1, ("50ml", ("oud",)))]))

        assert isinstance(item, M.GiftPackageLineItem)
        assert item.package_price == Decimal(1200)
        assert item.package_original_price == Decimal(1500)
        assert item.name == "Discovery Box"
        assert item.size_selections[0].product_ids == ("oud",)

    @pytest.mark.asyncio
    async def test_gift_selection_must_be_offered(self, catalog):
        e = err(await P.reprice(catalog, [gift("box", 1200, ("50ml", ("musk",)))]))

        assert e.kind is P.CatalogErrorKind.INVALID_PACKAGE

    @pytest.mark.asyncio
    async def test_product_is_not_a_gift_package(self, catalog):
        e = err(await P.reprice(catalog, [gift("oud", 1200, ("50ml", ("oud",)))]))

        assert e.kind is P.CatalogErrorKind.UNKNOWN_PRODUCT

    @pytest.mark.asyncio
    async def test_catalog_failure_is_a_store_error(self):
        e = err(await P.reprice(DownCatalog(), [line("oud", 750)]))

        assert isinstance(e, StoreError)


class TestCheckoutWithCatalog:
    @pytest.mark.asyncio
    async def test_tampered_unit_price_is_ignored(self, priced, orders):
        """A client cannot lower the price by editing the line it sends."""
        order = ok(await priced.place_order(order_request([line("oud", "0.01", 2)])))

        assert order.totals.subtotal == Decimal(1500)
        assert order.items[0].unit_discounted_price == Decimal(750)
        assert ok(await orders.get(order.id)).totals.subtotal == Decimal(1500)

    @pytest.mark.asyncio
    async def test_tampered_gift_price_is_ignored(self, priced):
        order = ok(await priced.place_order(order_request([gift("box", 1, ("50ml", ("amber",)))])))

        assert order.totals.subtotal == Decimal(1200)

    @pytest.mark.asyncio
    async def test_quote_uses_catalog_prices(self, priced):
        quote = ok(await priced.quote(QuoteRequest((line("oud", 1),), "Dakahlia")))

        assert quote.subtotal == Decimal(750)
        assert quote.total == Decimal(820)

    @pytest.mark.asyncio
    async def test_unknown_item_rejects_order(self, priced, orders):
        e = err(await priced.place_order(order_request([line("oud", 750, size="30ml")])))

        assert e.code == "UNKNOWN_ITEM"
        assert ok(await orders.list_for_user("u1")) == []

    @pytest.mark.asyncio
    async def test_unknown_item_does_not_consume_code(self, priced, discounts):
        ok(await discounts.create(D.DiscountCode("ONCE", D.DiscountType.FIXED, value=Decimal(50), max_uses=1)))

        err(await priced.place_order(order_request([line("ghost", 100)], "ONCE")))

        assert ok(await discounts.get("ONCE")).current_uses == 0

    @pytest.mark.asyncio
    async def test_discount_applies_to_catalog_subtotal(self, priced, discounts):
        ok(await discounts.create(D.DiscountCode("SAVE20", D.DiscountType.PERCENTAGE, value=Decimal(20))))

        order = ok(await priced.place_order(order_request([line("oud", "0.01")], "SAVE20")))

        assert order.totals.discount_amount == Decimal(150)

    @pytest.mark.asyncio
    async def test_catalog_outage_is_storage_error(self, discounts, orders):
        service = CheckoutService(discounts, orders, clock=lambda: NOW, catalog=DownCatalog())

        e = err(await service.place_order(order_request([line("oud", 750)])))

        assert e.code == "STORAGE_ERROR"

    @pytest.mark.asyncio
    async def test_inverted_catalog_price_is_pricing_error(self, discounts, orders):
        bad = P.MemoryCatalog([P.Product("oud", "Oud Noir", (M.product_size("50ml", "50", 100, 500),))])
        service = CheckoutService(discounts, orders, clock=lambda: NOW, catalog=bad)

        e = err(await service.place_order(order_request([line("oud", 50)])))

        assert e.code == "PRICING_ERROR"


class TestRoutes:
    @pytest.fixture
    def client(self, priced):
        with TestClient(create_app(priced)) as client:
            yield client

    def test_order_total_from_catalog(self, client):
        resp = client.post(
            "/orders",
            json={
                "items": [{"product_id": "oud", "size": "50ml", "quantity": 1, "unit_discounted_price": "1"}],
                "shipping_address": {
                    "name": "Mona Adel",
                    "address": "12 Tahrir St",
                    "city": "Mansoura",
                    "governorate": "Dakahlia",
                },
            },
        )

        assert resp.status_code == 201
        assert resp.json()["total"] == "820.00"

    def test_unknown_size_is_bad_request(self, client):
        resp = client.post(
            "/cart/quote",
            json={"items": [{"product_id": "oud", "size": "30ml", "unit_discounted_price": 750}]},
        )

        assert resp.status_code == 400
        assert resp.json()["detail"]["code"] == "UNKNOWN_ITEM"
