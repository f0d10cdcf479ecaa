"""
Buy X get X — which units become free.

Best-effort rule, not confirmed against a live backend:
units from every line are pooled and sorted by ascending unit price;
for every complete group of buy_x units, the cheapest get_x units of the
cart are free. Each unit is counted at most once.

The other plausible reading frees per chunk instead: sort ascending, split
into chunks of buy_x, and free the cheapest get_x units of each chunk. The
two differ once prices vary. Units 100, 200, 300, 400 with buy 2 get 1 give
100 + 300 = 400 off per chunk, against 100 + 200 = 300 off here. The
cart-wide rule is the cheaper one for the shop; switch free_unit_prices()
if the backend turns out to chunk.
"""

from __future__ import annotations

from collections.abc import Iterable

from storefront._types import Money
from storefront.money import PricedItem, resolve_unit_price
from storefront.cart import effective_quantity


def unit_prices(items: Iterable[PricedItem]) -> list[Money]:
    """One entry per unit, ascending."""
    prices: list[Money] = []
    for item in items:
        prices.extend([resolve_unit_price(item)] * effective_quantity(item))
    prices.sort()
    return prices


def free_unit_count(units: int, buy_x: int, get_x: int) -> int:
    return (units // buy_x) * get_x


def free_unit_prices(items: Iterable[PricedItem], buy_x: int, get_x: int) -> list[Money]:
    """
    Prices of the units that become free.

    Example:
        # buy 2 get 1, units priced 100, 200, 300, 400
        free_unit_prices(items, 2, 1)   # [100, 200]
    """
    prices = unit_prices(items)
    return prices[: free_unit_count(len(prices), buy_x, get_x)]


__all__ = ("unit_prices", "free_unit_count", "free_unit_prices")
