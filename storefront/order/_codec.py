"""
Order snapshot codec — plain dicts for JSON columns.

Money is written as a decimal string so nothing passes through float.
"""

from __future__ import annotations

from typing import Any

from storefront._types import Money, optional_money, to_money
from storefront.money import LineItem, GiftPackageLineItem, SizeSelection, PricedItem
from storefront.order._types import ShippingAddress


def _money_out(amount: Money | None) -> str | None:
    return None if amount is None else str(amount)


def item_to_dict(item: PricedItem) -> dict[str, Any]:
    match item:
        case GiftPackageLineItem():
            return {
                "kind": "gift_package",
                "product_id": item.product_id,
                "name": item.name,
                "category": item.category,
                "quantity": item.quantity,
                "package_price": _money_out(item.package_price),
                "package_original_price": _money_out(item.package_original_price),
                "size_selections": [
                    {"size": s.size, "volume": s.volume, "product_ids": list(s.product_ids)}
                    for s in item.size_selections
                ],
            }
        case LineItem():
            return {
                "kind": "line",
                "product_id": item.product_id,
                "name": item.name,
                "category": item.category,
                "size": item.size,
                "volume": item.volume,
                "quantity": item.quantity,
                "unit_original_price": _money_out(item.unit_original_price),
                "unit_discounted_price": _money_out(item.unit_discounted_price),
            }


def item_from_dict(data: dict[str, Any]) -> PricedItem:
    if data.get("kind") == "gift_package":
        return GiftPackageLineItem(
            product_id=data["product_id"],
            package_price=to_money(data["package_price"]),
            quantity=data.get("quantity", 1),
            package_original_price=optional_money(data.get("package_original_price")),
            size_selections=tuple(
                SizeSelection(
                    size=s["size"],
                    volume=s.get("volume", ""),
                    product_ids=tuple(s["product_ids"]),
                )
                for s in data.get("size_selections", ())
            ),
            name=data.get("name", ""),
            category=data.get("category", "packages"),
        )
    return LineItem(
        product_id=data["product_id"],
        size=data["size"],
        volume=data.get("volume", ""),
        quantity=data.get("quantity", 1),
        unit_original_price=optional_money(data.get("unit_original_price")),
        unit_discounted_price=optional_money(data.get("unit_discounted_price")),
        name=data.get("name", ""),
        category=data.get("category", ""),
    )


def address_to_dict(address: ShippingAddress) -> dict[str, str]:
    return {
        "name": address.name,
        "address": address.address,
        "city": address.city,
        "governorate": address.governorate,
        "phone": address.phone,
        "secondary_phone": address.secondary_phone,
        "email": address.email,
        "postal_code": address.postal_code,
    }


def address_from_dict(data: dict[str, str]) -> ShippingAddress:
    return ShippingAddress(**data)


__all__ = ("item_to_dict", "item_from_dict", "address_to_dict", "address_from_dict")
