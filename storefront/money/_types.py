"""
Line item types — what a cart or an order is made of.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront._types import Money, MoneyLike, optional_money, to_money


# ═══════════════════════════════════════════════════════════════════════════════
# Catalog Boundary
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ProductSize:
    """One entry of a catalog product's sizes[]. Read-only for the core."""

    size: str
    volume: str
    original_price: Money | None = None
    discounted_price: Money | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Line Items
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class LineItem:
    """
    One purchasable size of a product.

    Note: quantity is kept as given. Aggregation treats anything below 1 as 1,
    so a malformed client cart still prices.

    Raises ValueError when the discounted price is above the original price.
    """

    product_id: str
    size: str
    volume: str = ""
    quantity: int = 1
    unit_original_price: Money | None = None
    unit_discounted_price: Money | None = None
    name: str = ""
    category: str = ""

    def __post_init__(self) -> None:
        original, discounted = self.unit_original_price, self.unit_discounted_price
        if original is not None and discounted is not None and discounted > original:
            raise ValueError(
                f"{self.product_id} {self.size}: discounted price {discounted} "
                f"exceeds original price {original}"
            )


@dataclass(frozen=True, slots=True)
class SizeSelection:
    """Products chosen for one size of a gift package, in selection order."""

    size: str
    volume: str
    product_ids: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class GiftPackageLineItem:
    """
    A configured gift package.

    Priced from package_price only. package_original_price is shown as the
    struck-through price and is never charged.
    """

    product_id: str
    package_price: Money
    quantity: int = 1
    package_original_price: Money | None = None
    size_selections: tuple[SizeSelection, ...] = field(default_factory=tuple)
    name: str = ""
    category: str = "packages"

    @property
    def size(self) -> str:
        return "Gift Package"

    @property
    def volume(self) -> str:
        return f"{len(self.size_selections)} sizes"


type PricedItem = LineItem | GiftPackageLineItem


# ═══════════════════════════════════════════════════════════════════════════════
# Display
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class DisplayPair:
    """Struck-through original (absent when there is no saving) + charged price."""

    original: Money | None
    effective: Money

    @property
    def has_saving(self) -> bool:
        return self.original is not None


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def line_item_for(
    product_id: str,
    size: ProductSize,
    quantity: int = 1,
    *,
    name: str = "",
    category: str = "",
) -> LineItem:
    """Snapshot a catalog size into a cart line. Later catalog edits don't touch it."""
    return LineItem(
        product_id=product_id,
        size=size.size,
        volume=size.volume,
        quantity=quantity,
        unit_original_price=size.original_price,
        unit_discounted_price=size.discounted_price,
        name=name,
        category=category,
    )


def product_size(
    size: str,
    volume: str,
    original_price: MoneyLike | None = None,
    discounted_price: MoneyLike | None = None,
) -> ProductSize:
    return ProductSize(
        size=size,
        volume=volume,
        original_price=optional_money(original_price),
        discounted_price=optional_money(discounted_price),
    )


def gift_line_item(
    product_id: str,
    package_price: MoneyLike,
    selections: tuple[SizeSelection, ...],
    quantity: int = 1,
    *,
    package_original_price: MoneyLike | None = None,
    name: str = "",
) -> GiftPackageLineItem:
    return GiftPackageLineItem(
        product_id=product_id,
        package_price=to_money(package_price),
        quantity=quantity,
        package_original_price=optional_money(package_original_price),
        size_selections=selections,
        name=name,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "ProductSize",
    "LineItem",
    "SizeSelection",
    "GiftPackageLineItem",
    "PricedItem",
    "DisplayPair",
    "line_item_for",
    "product_size",
    "gift_line_item",
)
