"""
Shipping — governorate fee lookup.

    from storefront import shipping as S

    S.shipping_fee("Dakahlia", 100)      # Decimal("70")
    S.shipping_fee("Atlantis", 100)      # Decimal("85"), default
    S.shipping_fee("Luxor", 2001)        # Decimal("0"), free above 2000

    table = S.ShippingTable().with_default_fee(90)
    table.fee("Atlantis", 100)           # Decimal("90")
"""

from storefront.shipping._table import (
    GOVERNORATE_RATES,
    GOVERNORATES,
    DEFAULT_FEE,
    FREE_SHIPPING_THRESHOLD,
    ShippingTable,
    DEFAULT_TABLE,
    shipping_fee,
)

__all__ = (
    "GOVERNORATE_RATES",
    "GOVERNORATES",
    "DEFAULT_FEE",
    "FREE_SHIPPING_THRESHOLD",
    "ShippingTable",
    "DEFAULT_TABLE",
    "shipping_fee",
)
