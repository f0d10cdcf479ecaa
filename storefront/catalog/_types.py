"""
Catalog types — the authoritative product records checkout prices from.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from storefront.money import ProductSize


@dataclass(frozen=True, slots=True)
class Product:
    """A catalog product and its purchasable sizes."""

    product_id: str
    name: str
    sizes: tuple[ProductSize, ...]
    category: str = ""

    def size(self, label: str) -> ProductSize | None:
        for size in self.sizes:
            if size.size == label:
                return size
        return None


class CatalogErrorKind(Enum):
    UNKNOWN_PRODUCT = auto()  # No product or gift package with this id
    UNKNOWN_SIZE = auto()  # Product exists, size label does not
    INVALID_PACKAGE = auto()  # Gift package selection or price rejected
    INVALID_PRICE = auto()  # Catalog size priced above its original price


@dataclass(frozen=True, slots=True)
class CatalogError:
    """A cart line the catalog cannot price."""

    kind: CatalogErrorKind
    product_id: str
    message: str
    size: str = ""


__all__ = ("Product", "CatalogErrorKind", "CatalogError")
