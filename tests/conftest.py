"""Pytest configuration for tests."""

import pytest

from storefront import discount as D
from storefront import order as O
from storefront.checkout import CheckoutService

from tests.helpers import NOW


@pytest.fixture
def discounts() -> D.MemoryDiscountStore:
    return D.MemoryDiscountStore()


@pytest.fixture
def orders() -> O.MemoryOrderStore:
    return O.MemoryOrderStore()


@pytest.fixture
def service(discounts: D.MemoryDiscountStore, orders: O.MemoryOrderStore) -> CheckoutService:
    """Checkout service on memory stores with a frozen clock."""
    return CheckoutService(discounts, orders, clock=lambda: NOW)
