"""
Gift package configuration — per-size product selection and validation.

A package has one fixed price. What the buyer picks per size never changes it;
picking something for every size is what makes it purchasable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from storefront._types import Money, MoneyLike, Result, Ok, Error, optional_money
from storefront.money import GiftPackageLineItem, SizeSelection


# ═══════════════════════════════════════════════════════════════════════════════
# Catalog Shape
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ProductOption:
    product_id: str
    name: str = ""


@dataclass(frozen=True, slots=True)
class PackageSize:
    size: str
    volume: str
    options: tuple[ProductOption, ...] = ()

    def offers(self, product_id: str) -> bool:
        return any(o.product_id == product_id for o in self.options)


@dataclass(frozen=True, slots=True)
class GiftPackage:
    """A catalog gift package. package_price is required to sell it."""

    product_id: str
    name: str
    sizes: tuple[PackageSize, ...]
    package_price: Money | None = None
    package_original_price: Money | None = None

    @classmethod
    def of(
        cls,
        product_id: str,
        name: str,
        sizes: tuple[PackageSize, ...],
        package_price: MoneyLike | None = None,
        package_original_price: MoneyLike | None = None,
    ) -> GiftPackage:
        return cls(
            product_id=product_id,
            name=name,
            sizes=sizes,
            package_price=optional_money(package_price),
            package_original_price=optional_money(package_original_price),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Selection
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Selection:
    """
    Chosen product ids per size label, in the order they were picked.

    Example:
        sel = Selection.defaults(package)     # first option of every size
        sel = sel.toggle("50ml", "oud")       # add, or remove if present

    Note: Immutable — toggle() returns a new Selection.
    """

    chosen_by_size: tuple[tuple[str, tuple[str, ...]], ...] = field(default_factory=tuple)

    @classmethod
    def defaults(cls, package: GiftPackage) -> Selection:
        return cls(
            tuple(
                (size.size, (size.options[0].product_id,))
                for size in package.sizes
                if size.options
            )
        )

    def chosen(self, size: str) -> tuple[str, ...]:
        for label, product_ids in self.chosen_by_size:
            if label == size:
                return product_ids
        return ()

    def toggle(self, size: str, product_id: str, *, keep_one: bool = False) -> Selection:
        """
        Select product_id for size, or deselect it if already selected.

        keep_one: refuse to deselect the last product of a size.
        """
        current = self.chosen(size)
        if product_id in current:
            remaining = tuple(p for p in current if p != product_id)
            if keep_one and not remaining:
                return self
            updated = remaining
        else:
            updated = current + (product_id,)
        return self._with(size, updated)

    def _with(self, size: str, product_ids: tuple[str, ...]) -> Selection:
        entries: list[tuple[str, tuple[str, ...]]] = []
        found = False
        for label, ids in self.chosen_by_size:
            if label != size:
                entries.append((label, ids))
                continue
            found = True
            if product_ids:
                entries.append((size, product_ids))
        if not found and product_ids:
            entries.append((size, product_ids))
        return Selection(tuple(entries))

    @property
    def total_selected(self) -> int:
        return sum(len(ids) for _, ids in self.chosen_by_size)


# ═══════════════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════════════


class GiftPackageErrorKind(Enum):
    MISSING_SIZES = auto()  # Some size has nothing chosen
    NO_PRICE = auto()  # Package has no package_price


@dataclass(frozen=True, slots=True)
class GiftPackageError:
    """
    Package cannot go into a cart.

    Note: Hard stop. There is no partial price for an incomplete package.
    """

    kind: GiftPackageErrorKind
    message: str
    missing_sizes: tuple[str, ...] = ()


# ═══════════════════════════════════════════════════════════════════════════════
# Validate + Configure
# ═══════════════════════════════════════════════════════════════════════════════


def validate_selection(
    package: GiftPackage,
    selection: Selection,
) -> Result[tuple[SizeSelection, ...], GiftPackageError]:
    """
    Every size of the package needs at least one offered product chosen.

    Ids not offered for a size are ignored, so they cannot satisfy it.
    """
    resolved: list[SizeSelection] = []
    missing: list[str] = []
    for size in package.sizes:
        offered = tuple(p for p in selection.chosen(size.size) if size.offers(p))
        if offered:
            resolved.append(SizeSelection(size=size.size, volume=size.volume, product_ids=offered))
        else:
            missing.append(size.size)

    if missing:
        return Error(
            GiftPackageError(
                kind=GiftPackageErrorKind.MISSING_SIZES,
                message=f"Choose a product for: {', '.join(missing)}",
                missing_sizes=tuple(missing),
            )
        )
    return Ok(tuple(resolved))


def configure(
    package: GiftPackage,
    selection: Selection,
    quantity: int = 1,
) -> Result[GiftPackageLineItem, GiftPackageError]:
    """Validated selection → cart line carrying the frozen package price."""
    if package.package_price is None:
        return Error(
            GiftPackageError(
                kind=GiftPackageErrorKind.NO_PRICE,
                message=f"Gift package {package.product_id} has no price",
            )
        )

    match validate_selection(package, selection):
        case Ok(selections):
            return Ok(
                GiftPackageLineItem(
                    product_id=package.product_id,
                    package_price=package.package_price,
                    quantity=max(1, quantity),
                    package_original_price=package.package_original_price,
                    size_selections=selections,
                    name=package.name,
                )
            )
        case Error(e):
            return Error(e)


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
