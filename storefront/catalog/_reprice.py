"""
Repricing — replace client-supplied prices with catalog snapshots.
"""

from __future__ import annotations

from collections.abc import Iterable

from storefront._types import Result, Ok, Error, StoreError
from storefront import gift as G
from storefront.money import LineItem, GiftPackageLineItem, PricedItem, line_item_for
from storefront.catalog._types import CatalogError, CatalogErrorKind
from storefront.catalog._store import Catalog


async def _line(catalog: Catalog, item: LineItem) -> Result[PricedItem, CatalogError | StoreError]:
    match await catalog.product(item.product_id):
        case Ok(None):
            return Error(
                CatalogError(
                    CatalogErrorKind.UNKNOWN_PRODUCT,
                    item.product_id,
                    f"Unknown product: {item.product_id}",
                )
            )
        case Ok(product):
            size = product.size(item.size)
            if size is None:
                return Error(
                    CatalogError(
                        CatalogErrorKind.UNKNOWN_SIZE,
                        item.product_id,
                        f"{product.name or item.product_id} has no size {item.size}",
                        size=item.size,
                    )
                )
            try:
                return Ok(
                    line_item_for(
                        product.product_id,
                        size,
                        item.quantity,
                        name=product.name,
                        category=product.category,
                    )
                )
            except ValueError as e:
                return Error(
                    CatalogError(
                        CatalogErrorKind.INVALID_PRICE, item.product_id, str(e), size=item.size
                    )
                )
        case Error(e):
            return Error(e)


async def _package(
    catalog: Catalog, item: GiftPackageLineItem
) -> Result[PricedItem, CatalogError | StoreError]:
    match await catalog.gift_package(item.product_id):
        case Ok(None):
            return Error(
                CatalogError(
                    CatalogErrorKind.UNKNOWN_PRODUCT,
                    item.product_id,
                    f"Unknown gift package: {item.product_id}",
                )
            )
        case Ok(package):
            selection = G.Selection(tuple((s.size, s.product_ids) for s in item.size_selections))
            match G.configure(package, selection, item.quantity):
                case Ok(line):
                    return Ok(line)
                case Error(e):
                    return Error(
                        CatalogError(CatalogErrorKind.INVALID_PACKAGE, item.product_id, e.message)
                    )
        case Error(e):
            return Error(e)


async def reprice(
    catalog: Catalog,
    items: Iterable[PricedItem],
) -> Result[tuple[PricedItem, ...], CatalogError | StoreError]:
    """
    Snapshot every line from the catalog, keeping only identity and quantity.

    LineItem: prices, volume and name come from the product's size.
    GiftPackageLineItem: package price comes from the catalog package, and the
    selection is validated against its sizes.

    The first line the catalog cannot price fails the whole cart.
    """
    priced: list[PricedItem] = []
    for item in items:
        match item:
            case GiftPackageLineItem():
                result = await _package(catalog, item)
            case LineItem():
                result = await _line(catalog, item)
        match result:
            case Ok(line):
                priced.append(line)
            case Error(e):
                return Error(e)
    return Ok(tuple(priced))


__all__ = ("reprice",)
