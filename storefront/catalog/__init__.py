"""
Catalog — authoritative prices at checkout.

    from storefront import catalog as P

    catalog = P.MemoryCatalog([P.Product("oud", "Oud Noir", (M.product_size("50ml", "50", 900, 750),))])

    match await P.reprice(catalog, items):
        case Ok(priced):
            priced       # client prices replaced by catalog snapshots
        case Error(e):
            e.message
"""

from storefront.catalog._types import Product, CatalogErrorKind, CatalogError
from storefront.catalog._store import Catalog, MemoryCatalog
from storefront.catalog._reprice import reprice

__all__ = (
    "Product",
    "CatalogErrorKind",
    "CatalogError",
    "Catalog",
    "MemoryCatalog",
    "reprice",
)
