"""
Gift — gift package configuration.

    from storefront import gift as G

    selection = G.Selection.defaults(package).toggle("100ml", "amber")

    match G.configure(package, selection, quantity=1):
        case Ok(line):
            cart = cart.add(line)
        case Error(e):
            e.missing_sizes            # ("50ml",)
"""

from storefront.gift._configure import (
    ProductOption,
    PackageSize,
    GiftPackage,
    Selection,
    GiftPackageErrorKind,
    GiftPackageError,
    validate_selection,
    configure,
)

__all__ = (
    "ProductOption",
    "PackageSize",
    "GiftPackage",
    "Selection",
    "GiftPackageErrorKind",
    "GiftPackageError",
    "validate_selection",
    "configure",
)
