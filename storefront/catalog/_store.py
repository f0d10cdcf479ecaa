"""
Catalog — typed read-only lookup protocol.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from storefront._types import Result, Ok, StoreError
from storefront.gift import GiftPackage
from storefront.catalog._types import Product


class Catalog(Protocol):
    """
    Current prices as the shop sells them.

    Note: Read-only. Checkout snapshots from it and never writes back.
    """

    async def product(self, product_id: str) -> Result[Product | None, StoreError]:
        """Get a product. Returns Ok(None) if not found."""
        ...

    async def gift_package(self, product_id: str) -> Result[GiftPackage | None, StoreError]:
        """Get a gift package. Returns Ok(None) if not found."""
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Memory Catalog — For Testing
# ═══════════════════════════════════════════════════════════════════════════════


class MemoryCatalog:
    """In-memory catalog."""

    def __init__(
        self,
        products: Iterable[Product] = (),
        packages: Iterable[GiftPackage] = (),
    ) -> None:
        self._products = {p.product_id: p for p in products}
        self._packages = {p.product_id: p for p in packages}

    async def product(self, product_id: str) -> Result[Product | None, StoreError]:
        return Ok(self._products.get(product_id))

    async def gift_package(self, product_id: str) -> Result[GiftPackage | None, StoreError]:
        return Ok(self._packages.get(product_id))


__all__ = ("Catalog", "MemoryCatalog")
