"""
Pricing graph — one node per pricing step.

    QuoteInput
        └─ InputNode
             ├─ LinesNode ─ SubtotalNode ─┬─ ShippingNode ─┐
             │                             └─ DiscountNode ─┼─ TotalNode ─ QuoteNode
             └──────────────────────────────────────────────┘

Shipping reads the pre-discount subtotal. The total is always composed here,
from server-side inputs only.
"""

from decimal import Decimal

from storefront._graph import node
from storefront._types import Ok, ZERO
from storefront import cart as C
from storefront import discount as D
from storefront import order as O
from storefront.money import PricedItem
from storefront.checkout._types import QuoteInput, Quote


@node
class InputNode:
    """Entry point: wraps the QuoteInput."""

    def __init__(self, data: QuoteInput) -> None:
        self.data = data

    @classmethod
    def __compose__(cls, data: QuoteInput) -> "InputNode":
        return cls(data)


@node
class LinesNode:
    def __init__(self, items: tuple[PricedItem, ...], count: int) -> None:
        self.items = items
        self.count = count

    @classmethod
    def __compose__(cls, inp: InputNode) -> "LinesNode":
        items = tuple(inp.data.items)
        return cls(items, C.item_count(items))


@node
class SubtotalNode:
    def __init__(self, amount: Decimal) -> None:
        self.amount = amount

    @classmethod
    def __compose__(cls, lines: LinesNode) -> "SubtotalNode":
        return cls(C.subtotal(lines.items))


@node
class ShippingNode:
    def __init__(self, fee: Decimal) -> None:
        self.fee = fee

    @classmethod
    def __compose__(cls, inp: InputNode, subtotal: SubtotalNode) -> "ShippingNode":
        return cls(inp.data.table.fee(inp.data.region, subtotal.amount))


@node
class DiscountNode:
    """
    None when no code was entered. A code the store doesn't know is notFound.
    """

    def __init__(self, result: D.DiscountResult | None) -> None:
        self.result = result

    @property
    def amount(self) -> Decimal:
        match self.result:
            case Ok(applied):
                return applied.amount
            case _:
                return ZERO

    @classmethod
    def __compose__(
        cls, inp: InputNode, lines: LinesNode, subtotal: SubtotalNode
    ) -> "DiscountNode":
        text = (inp.data.code_text or "").strip()
        if not text:
            return cls(None)
        if inp.data.code is None:
            return cls(D.not_found(D.canonical_code(text)))
        return cls(D.evaluate(inp.data.code, subtotal.amount, inp.data.now, lines.items))


@node
class TotalNode:
    def __init__(self, amount: Decimal) -> None:
        self.amount = amount

    @classmethod
    def __compose__(
        cls, subtotal: SubtotalNode, discount: DiscountNode, shipping: ShippingNode
    ) -> "TotalNode":
        return cls(O.compose(subtotal.amount, discount.amount, shipping.fee))


@node
class QuoteNode:
    def __init__(self, data: Quote) -> None:
        self.data = data

    @classmethod
    def __compose__(
        cls,
        inp: InputNode,
        lines: LinesNode,
        subtotal: SubtotalNode,
        discount: DiscountNode,
        shipping: ShippingNode,
        total: TotalNode,
    ) -> "QuoteNode":
        return cls(
            Quote(
                items=lines.items,
                region=inp.data.region,
                subtotal=subtotal.amount,
                discount=discount.result,
                discount_amount=discount.amount,
                shipping_fee=shipping.fee,
                total=total.amount,
                item_count=lines.count,
            )
        )


__all__ = (
    "InputNode",
    "LinesNode",
    "SubtotalNode",
    "ShippingNode",
    "DiscountNode",
    "TotalNode",
    "QuoteNode",
)
