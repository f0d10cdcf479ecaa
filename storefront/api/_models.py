"""
HTTP models — pydantic in/out shapes with to_domain() / from_domain().

Money goes out as display strings ("470.00"). It comes in as numbers or strings.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Discriminator, Field, Tag, model_validator

from storefront._types import Ok, Error, display
from storefront import discount as D
from storefront import order as O
from storefront.checkout import QuoteRequest, PlaceOrderRequest, Quote
from storefront.money import LineItem, GiftPackageLineItem, SizeSelection, PricedItem


def _money(amount: Decimal) -> str:
    return str(display(amount))


def _optional_money(amount: Decimal | None) -> str | None:
    return None if amount is None else _money(amount)


# ═══════════════════════════════════════════════════════════════════════════════
# Cart Items
# ═══════════════════════════════════════════════════════════════════════════════


class LineItemIn(BaseModel):
    kind: Literal["line"] = "line"
    product_id: str
    size: str
    volume: str = ""
    quantity: int = 1
    unit_original_price: Decimal | None = None
    unit_discounted_price: Decimal | None = None
    name: str = ""
    category: str = ""

    @model_validator(mode="after")
    def check_discount_not_above_original(self) -> "LineItemIn":
        original, discounted = self.unit_original_price, self.unit_discounted_price
        if original is not None and discounted is not None and discounted > original:
            raise ValueError("unit_discounted_price must not exceed unit_original_price")
        return self

    def to_domain(self) -> LineItem:
        return LineItem(
            product_id=self.product_id,
            size=self.size,
            volume=self.volume,
            quantity=self.quantity,
            unit_original_price=self.unit_original_price,
            unit_discounted_price=self.unit_discounted_price,
            name=self.name,
            category=self.category,
        )


class SizeSelectionIn(BaseModel):
    size: str
    volume: str = ""
    product_ids: list[str]


class GiftPackageIn(BaseModel):
    kind: Literal["gift_package"]
    product_id: str
    package_price: Decimal
    quantity: int = 1
    package_original_price: Decimal | None = None
    size_selections: list[SizeSelectionIn] = Field(default_factory=list)
    name: str = ""

    def to_domain(self) -> GiftPackageLineItem:
        return GiftPackageLineItem(
            product_id=self.product_id,
            package_price=self.package_price,
            quantity=self.quantity,
            package_original_price=self.package_original_price,
            size_selections=tuple(
                SizeSelection(s.size, s.volume, tuple(s.product_ids))
                for s in self.size_selections
            ),
            name=self.name,
        )


def _item_kind(value: object) -> str:
    """Lines may omit kind."""
    if isinstance(value, dict):
        return str(value.get("kind", "line"))
    return str(getattr(value, "kind", "line"))


CartItemIn = Annotated[
    Union[
        Annotated[LineItemIn, Tag("line")],
        Annotated[GiftPackageIn, Tag("gift_package")],
    ],
    Discriminator(_item_kind),
]


def items_to_domain(items: list[LineItemIn | GiftPackageIn]) -> tuple[PricedItem, ...]:
    return tuple(item.to_domain() for item in items)


# ═══════════════════════════════════════════════════════════════════════════════
# Quote
# ═══════════════════════════════════════════════════════════════════════════════


class QuoteIn(BaseModel):
    items: list[CartItemIn]
    region: str | None = None
    discount_code: str | None = None

    def to_domain(self) -> QuoteRequest:
        return QuoteRequest(items_to_domain(self.items), self.region, self.discount_code)


class DiscountOut(BaseModel):
    code: str
    applied: bool
    amount: str | None = None
    reason: str | None = None
    message: str | None = None

    @classmethod
    def from_domain(cls, result: D.DiscountResult) -> "DiscountOut":
        match result:
            case Ok(applied):
                return cls(code=applied.code, applied=True, amount=_money(applied.amount))
            case Error(rejected):
                return cls(
                    code=rejected.code,
                    applied=False,
                    reason=rejected.reason.value,
                    message=rejected.message,
                )


class QuoteOut(BaseModel):
    subtotal: str
    discount_amount: str
    shipping_fee: str
    total: str
    item_count: int
    currency: str = "EGP"
    discount: DiscountOut | None = None

    @classmethod
    def from_domain(cls, quote: Quote) -> "QuoteOut":
        return cls(
            subtotal=_money(quote.subtotal),
            discount_amount=_money(quote.discount_amount),
            shipping_fee=_money(quote.shipping_fee),
            total=_money(quote.total),
            item_count=quote.item_count,
            discount=None if quote.discount is None else DiscountOut.from_domain(quote.discount),
        )


class ValidateCodeIn(BaseModel):
    code: str
    items: list[CartItemIn]
    region: str | None = None

    def to_domain(self) -> QuoteRequest:
        return QuoteRequest(items_to_domain(self.items), self.region, self.code)


class ValidateCodeOut(BaseModel):
    valid: bool
    code: str
    type: str
    discount_amount: str

    @classmethod
    def from_domain(cls, applied: D.DiscountApplied) -> "ValidateCodeOut":
        return cls(
            valid=True,
            code=applied.code,
            type=applied.type.value,
            discount_amount=_money(applied.amount),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Orders
# ═══════════════════════════════════════════════════════════════════════════════


class ShippingAddressModel(BaseModel):
    name: str
    address: str
    city: str
    governorate: str
    phone: str = ""
    secondary_phone: str = ""
    email: str = ""
    postal_code: str = ""

    def to_domain(self) -> O.ShippingAddress:
        return O.ShippingAddress(**self.model_dump())

    @classmethod
    def from_domain(cls, address: O.ShippingAddress) -> "ShippingAddressModel":
        return cls(
            name=address.name,
            address=address.address,
            city=address.city,
            governorate=address.governorate,
            phone=address.phone,
            secondary_phone=address.secondary_phone,
            email=address.email,
            postal_code=address.postal_code,
        )


class PlaceOrderIn(BaseModel):
    user_id: str = "guest"
    items: list[CartItemIn]
    shipping_address: ShippingAddressModel
    discount_code: str | None = None
    payment_method: str = "cod"
    total: Decimal | None = None

    def to_domain(self) -> PlaceOrderRequest:
        return PlaceOrderRequest(
            user_id=self.user_id,
            items=items_to_domain(self.items),
            shipping_address=self.shipping_address.to_domain(),
            discount_code=self.discount_code,
            payment_method=self.payment_method,
            client_total=self.total,
        )


class OrderOut(BaseModel):
    id: str
    user_id: str
    status: str
    items: list[dict[str, object]]
    subtotal: str
    discount_amount: str
    shipping_fee: str
    total: str
    discount_code: str | None
    payment_method: str
    shipping_address: ShippingAddressModel
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, order: O.Order) -> "OrderOut":
        return cls(
            id=order.id,
            user_id=order.user_id,
            status=order.status.value,
            items=[O.item_to_dict(item) for item in order.items],
            subtotal=_money(order.totals.subtotal),
            discount_amount=_money(order.totals.discount_amount),
            shipping_fee=_money(order.totals.shipping_fee),
            total=_money(order.totals.total),
            discount_code=order.discount_code,
            payment_method=order.payment_method,
            shipping_address=ShippingAddressModel.from_domain(order.shipping_address),
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderStatusIn(BaseModel):
    status: O.OrderStatus


# ═══════════════════════════════════════════════════════════════════════════════
# Discount Codes
# ═══════════════════════════════════════════════════════════════════════════════


class DiscountCodeIn(BaseModel):
    code: str
    type: D.DiscountType
    value: Decimal = Decimal(0)
    buy_x: int | None = None
    get_x: int | None = None
    min_order_amount: Decimal | None = None
    max_uses: int | None = None
    is_active: bool = True
    expires_at: datetime | None = None

    def to_domain(self) -> D.DiscountCode:
        """Raises ValueError for an invalid record."""
        return D.DiscountCode(
            code=self.code,
            type=self.type,
            value=self.value,
            buy_x=self.buy_x,
            get_x=self.get_x,
            min_order_amount=self.min_order_amount,
            max_uses=self.max_uses,
            is_active=self.is_active,
            expires_at=self.expires_at,
        )


class DiscountCodeOut(BaseModel):
    code: str
    type: str
    value: str
    buy_x: int | None
    get_x: int | None
    min_order_amount: str | None
    max_uses: int | None
    current_uses: int
    is_active: bool
    expires_at: datetime | None
    created_at: datetime

    @classmethod
    def from_domain(cls, code: D.DiscountCode) -> "DiscountCodeOut":
        return cls(
            code=code.code,
            type=code.type.value,
            value=str(code.value),
            buy_x=code.buy_x,
            get_x=code.get_x,
            min_order_amount=_optional_money(code.min_order_amount),
            max_uses=code.max_uses,
            current_uses=code.current_uses,
            is_active=code.is_active,
            expires_at=code.expires_at,
            created_at=code.created_at,
        )


class DiscountToggleIn(BaseModel):
    is_active: bool


__all__ = (
    "LineItemIn",
    "GiftPackageIn",
    "SizeSelectionIn",
    "CartItemIn",
    "QuoteIn",
    "QuoteOut",
    "DiscountOut",
    "ValidateCodeIn",
    "ValidateCodeOut",
    "ShippingAddressModel",
    "PlaceOrderIn",
    "OrderOut",
    "OrderStatusIn",
    "DiscountCodeIn",
    "DiscountCodeOut",
    "DiscountToggleIn",
)
