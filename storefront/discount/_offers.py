"""
Promotional offers — banner entries that may point at a discount code.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from storefront._types import as_utc, utcnow
from storefront.discount._types import canonical_code


@dataclass(frozen=True, slots=True)
class Offer:
    title: str
    description: str
    discount_code: str | None = None
    is_active: bool = True
    priority: int = 0
    expires_at: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        if self.discount_code is not None:
            object.__setattr__(self, "discount_code", canonical_code(self.discount_code))

    def is_live(self, now: datetime) -> bool:
        if not self.is_active:
            return False
        return self.expires_at is None or as_utc(now) < as_utc(self.expires_at)


def active_offers(offers: Iterable[Offer], now: datetime) -> list[Offer]:
    """Live offers, highest priority first, then newest."""
    live = [o for o in offers if o.is_live(now)]
    return sorted(live, key=lambda o: (-o.priority, -as_utc(o.created_at).timestamp()))


__all__ = ("Offer", "active_offers")
