"""Tests for the FastAPI routes."""

from datetime import timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront import discount as D
from storefront.api import create_app

from tests.helpers import NOW


LINE = {"product_id": "oud", "size": "50ml", "quantity": 1, "unit_discounted_price": 500}
GIFT = {
    "kind": "gift_package",
    "product_id": "box",
    "package_price": "1200",
    "size_selections": [{"size": "50ml", "volume": "50", "product_ids": ["oud"]}],
}
ADDRESS = {"name": "Mona Adel", "address": "12 Tahrir St", "city": "Mansoura", "governorate": "Dakahlia"}


@pytest.fixture
def discounts():
    return D.MemoryDiscountStore(
        [
            D.DiscountCode("SAVE20", D.DiscountType.PERCENTAGE, value=Decimal(20), max_uses=1),
            D.DiscountCode(
                "OLD", D.DiscountType.FIXED, value=Decimal(50), expires_at=NOW - timedelta(days=1)
            ),
        ]
    )


@pytest.fixture
def client(service):
    with TestClient(create_app(service)) as client:
        yield client


class TestQuoteRoutes:
    def test_quote(self, client):
        resp = client.post(
            "/cart/quote",
            json={"items": [LINE], "region": "Dakahlia", "discount_code": "save20"},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["subtotal"] == "500.00"
        assert body["discount_amount"] == "100.00"
        assert body["shipping_fee"] == "70.00"
        assert body["total"] == "470.00"
        assert body["currency"] == "EGP"
        assert body["discount"]["applied"] is True

    def test_quote_mixed_items(self, client):
        resp = client.post("/cart/quote", json={"items": [LINE, GIFT], "region": "Luxor"})

        body = resp.json()
        assert body["subtotal"] == "1700.00"
        assert body["item_count"] == 2
        assert body["discount"] is None

    def test_quote_reports_bad_code(self, client):
        resp = client.post("/cart/quote", json={"items": [LINE], "discount_code": "ghost"})

        body = resp.json()
        assert resp.status_code == 200
        assert body["discount"]["applied"] is False
        assert body["discount"]["reason"] == "notFound"
        assert body["total"] == "585.00"

    def test_discount_above_original_is_rejected(self, client):
        bad = {**LINE, "unit_original_price": 100, "unit_discounted_price": 500}
        resp = client.post("/cart/quote", json={"items": [bad]})
        assert resp.status_code == 422

    def test_validate_expired_code(self, client):
        resp = client.post("/discount-codes/validate", json={"code": "old", "items": [LINE]})

        assert resp.status_code == 400
        assert resp.json()["detail"] == {
            "code": "DISCOUNT_REJECTED",
            "error": "Discount code has expired",
            "reason": "expired",
        }

    def test_validate_code(self, client):
        resp = client.post("/discount-codes/validate", json={"code": "save20", "items": [LINE]})

        assert resp.status_code == 200
        assert resp.json() == {
            "valid": True,
            "code": "SAVE20",
            "type": "percentage",
            "discount_amount": "100.00",
        }


class TestOrderRoutes:
    def test_place_order_uses_server_total(self, client):
        resp = client.post(
            "/orders",
            json={
                "user_id": "u1",
                "items": [LINE],
                "shipping_address": ADDRESS,
                "discount_code": "SAVE20",
                "total": 1,
            },
        )

        assert resp.status_code == 201
        order = resp.json()
        assert order["total"] == "470.00"
        assert order["status"] == "pending"
        assert client.get(f"/orders/{order['id']}").json()["id"] == order["id"]
        assert [o["id"] for o in client.get("/users/u1/orders").json()] == [order["id"]]

    def test_second_order_finds_code_used_up(self, client):
        body = {"items": [LINE], "shipping_address": ADDRESS, "discount_code": "SAVE20"}
        assert client.post("/orders", json=body).status_code == 201

        resp = client.post("/orders", json=body)

        assert resp.status_code == 400
        assert resp.json()["detail"]["reason"] == "exhausted"

    def test_empty_cart(self, client):
        resp = client.post("/orders", json={"items": [], "shipping_address": ADDRESS})
        assert resp.status_code == 400
        assert resp.json()["detail"]["code"] == "EMPTY_CART"

    def test_status_changes(self, client):
        order = client.post("/orders", json={"items": [LINE], "shipping_address": ADDRESS}).json()

        ok_resp = client.put(f"/orders/{order['id']}/status", json={"status": "processing"})
        bad_resp = client.put(f"/orders/{order['id']}/status", json={"status": "pending"})

        assert ok_resp.json()["status"] == "processing"
        assert bad_resp.status_code == 409

    def test_missing_order(self, client):
        assert client.get("/orders/nope").status_code == 404


class TestDiscountCodeRoutes:
    def test_create_toggle_delete(self, client):
        resp = client.post(
            "/discount-codes",
            json={"code": "bogo", "type": "buyXgetX", "buy_x": 2, "get_x": 1},
        )
        assert resp.status_code == 201
        assert resp.json()["code"] == "BOGO"

        toggled = client.patch("/discount-codes/bogo", json={"is_active": False})
        assert toggled.json()["is_active"] is False

        assert client.delete("/discount-codes/bogo").status_code == 204
        assert client.delete("/discount-codes/bogo").status_code == 404

    def test_recreating_code_is_a_conflict(self, client):
        body = {"items": [LINE], "shipping_address": ADDRESS, "discount_code": "SAVE20"}
        assert client.post("/orders", json=body).status_code == 201

        resp = client.post(
            "/discount-codes",
            json={"code": "save20", "type": "percentage", "value": 20, "max_uses": 1},
        )

        assert resp.status_code == 409
        assert resp.json()["detail"]["code"] == "CONFLICT"
        assert client.post("/orders", json=body).json()["detail"]["reason"] == "exhausted"

    def test_invalid_code_record(self, client):
        resp = client.post("/discount-codes", json={"code": "bogo", "type": "buyXgetX"})

        assert resp.status_code == 422
        assert resp.json()["detail"]["code"] == "INVALID_CODE"

    def test_list_codes(self, client):
        codes = {c["code"] for c in client.get("/discount-codes").json()}
        assert codes == {"SAVE20", "OLD"}
