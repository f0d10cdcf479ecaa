"""
storefront — server-side pricing for a small perfume shop.

    from storefront import money as M      # Line items, price resolution
    from storefront import shipping as S   # Governorate fee table
    from storefront import cart as C       # Cart state, subtotal
    from storefront import discount as D   # Codes, evaluation, redemption
    from storefront import order as O      # Totals, lifecycle, stores
    from storefront import gift as G       # Gift package configuration
    from storefront import checkout as K   # Pricing graph + CheckoutService
    from storefront import catalog as P    # Authoritative prices at checkout
"""

from storefront import money
from storefront import shipping
from storefront import cart
from storefront import discount
from storefront import order
from storefront import gift
from storefront import checkout
from storefront import catalog
from storefront._types import (
    Money,
    MoneyLike,
    StoreError,
    to_money,
    display,
    format_money,
)
from storefront.config import PricingPolicy, LogFormat
from storefront._logging import setup_logging, setup_logging_from
from storefront.db import create_database

__version__ = "0.1.0"

__all__ = (
    "money",
    "shipping",
    "cart",
    "discount",
    "order",
    "gift",
    "checkout",
    "catalog",
    "Money",
    "MoneyLike",
    "StoreError",
    "to_money",
    "display",
    "format_money",
    "PricingPolicy",
    "LogFormat",
    "setup_logging",
    "setup_logging_from",
    "create_database",
)
