"""Tests for the application factory."""

from fastapi.testclient import TestClient

from storefront.config import PricingPolicy
from storefront.main import build_app


def test_build_app_on_sqlite(tmp_path):
    policy = PricingPolicy().with_database_url(f"sqlite+aiosqlite:///{tmp_path}/shop.db")

    with TestClient(build_app(policy)) as client:
        created = client.post(
            "/discount-codes",
            json={"code": "save10", "type": "percentage", "value": 10},
        )
        quote = client.post(
            "/cart/quote",
            json={
                "items": [{"product_id": "oud", "size": "50ml", "unit_discounted_price": "250"}],
                "region": "Cairo",
                "discount_code": "SAVE10",
            },
        )

    assert created.status_code == 201
    assert quote.json()["total"] == "310.00"
