"""
Shipping cost table — governorate → fee, default fallback, free-shipping override.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from storefront._types import Money, MoneyLike, to_money

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Rates
# ═══════════════════════════════════════════════════════════════════════════════

# Distance from Dakahlia, 70-100 EGP. Lookup is exact and case-sensitive.
GOVERNORATE_RATES: Mapping[str, Money] = MappingProxyType(
    {
        "Dakahlia": Decimal(70),
        "Gharbia": Decimal(75),
        "Kafr El Sheikh": Decimal(75),
        "Damietta": Decimal(75),
        "Sharqia": Decimal(80),
        "Qalyubia": Decimal(80),
        "Monufia": Decimal(80),
        "Cairo": Decimal(85),
        "Giza": Decimal(85),
        "Beheira": Decimal(85),
        "Alexandria": Decimal(90),
        "Ismailia": Decimal(90),
        "Port Said": Decimal(90),
        "Suez": Decimal(90),
        "Beni Suef": Decimal(90),
        "Faiyum": Decimal(95),
        "Minya": Decimal(95),
        "Asyut": Decimal(95),
        "Sohag": Decimal(95),
        "Qena": Decimal(95),
        "Luxor": Decimal(100),
        "Aswan": Decimal(100),
        "Red Sea": Decimal(100),
        "New Valley": Decimal(100),
        "Matrouh": Decimal(100),
        "North Sinai": Decimal(100),
        "South Sinai": Decimal(100),
    }
)

# Governorates offered at checkout. Shubra El Kheima has no rate of its own.
GOVERNORATES: tuple[str, ...] = (
    "Cairo",
    "Alexandria",
    "Giza",
    "Shubra El Kheima",
    "Port Said",
    "Suez",
    "Luxor",
    "Aswan",
    "Asyut",
    "Beheira",
    "Beni Suef",
    "Dakahlia",
    "Damietta",
    "Faiyum",
    "Gharbia",
    "Ismailia",
    "Kafr El Sheikh",
    "Matrouh",
    "Minya",
    "Monufia",
    "New Valley",
    "North Sinai",
    "Qalyubia",
    "Qena",
    "Red Sea",
    "Sharqia",
    "Sohag",
    "South Sinai",
)

DEFAULT_FEE = Decimal(85)
FREE_SHIPPING_THRESHOLD = Decimal(2000)


# ═══════════════════════════════════════════════════════════════════════════════
# Table
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ShippingTable:
    """
    The one authoritative region → fee table.

    Example:
        table = (
            ShippingTable()
            .with_default_fee(90)
            .with_free_shipping_threshold(1500)
            .with_rate("Shubra El Kheima", 85)
        )

    Note: Immutable — each method returns a new table.
    Note: Never fails to price. Unknown, misspelled or empty regions get the default.
    """

    rates: Mapping[str, Money] = field(default_factory=lambda: GOVERNORATE_RATES)
    default_fee: Money = DEFAULT_FEE
    free_shipping_threshold: Money = FREE_SHIPPING_THRESHOLD

    def with_rate(self, region: str, fee: MoneyLike) -> ShippingTable:
        rates = dict(self.rates)
        rates[region] = to_money(fee)
        return replace(self, rates=MappingProxyType(rates))

    def with_rates(self, rates: Mapping[str, MoneyLike]) -> ShippingTable:
        frozen = {region: to_money(fee) for region, fee in rates.items()}
        return replace(self, rates=MappingProxyType(frozen))

    def with_default_fee(self, fee: MoneyLike) -> ShippingTable:
        return replace(self, default_fee=to_money(fee))

    def with_free_shipping_threshold(self, threshold: MoneyLike) -> ShippingTable:
        return replace(self, free_shipping_threshold=to_money(threshold))

    @property
    def regions(self) -> tuple[str, ...]:
        return tuple(self.rates)

    def rate_for(self, region: str | None) -> Money:
        """Table fee for region, ignoring the free-shipping override."""
        if region and region in self.rates:
            return self.rates[region]
        logger.debug("No shipping rate for region %r, using default %s", region, self.default_fee)
        return self.default_fee

    def fee(self, region: str | None, subtotal: MoneyLike) -> Money:
        """
        Shipping fee for an order.

        Strictly above the threshold ships free; exactly at it does not.
        """
        if to_money(subtotal) > self.free_shipping_threshold:
            return Decimal(0)
        return self.rate_for(region)


DEFAULT_TABLE = ShippingTable()


def shipping_fee(
    region: str | None,
    subtotal: MoneyLike,
    table: ShippingTable = DEFAULT_TABLE,
) -> Money:
    return table.fee(region, subtotal)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "GOVERNORATE_RATES",
    "GOVERNORATES",
    "DEFAULT_FEE",
    "FREE_SHIPPING_THRESHOLD",
    "ShippingTable",
    "DEFAULT_TABLE",
    "shipping_fee",
)
