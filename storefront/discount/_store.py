"""
Discount code store — typed storage protocol.

All methods return Result for explicit error handling.
redeem() is the only place current_uses changes.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Callable, Iterable
from typing import Protocol

from storefront._types import Result, Ok, Error, StoreError
from storefront.discount._types import (
    DiscountCode,
    DiscountApplied,
    DiscountRejected,
    DiscountResult,
    RejectionReason,
    canonical_code,
)
from storefront.discount._evaluate import not_found, reject

logger = logging.getLogger(__name__)


type Evaluator = Callable[[DiscountCode], DiscountResult]
"""Pure evaluation of a freshly loaded record. Called inside the redemption boundary."""

type Redemption = Result[DiscountApplied, DiscountRejected | StoreError]


# ═══════════════════════════════════════════════════════════════════════════════
# Store Protocol
# ═══════════════════════════════════════════════════════════════════════════════


class DiscountStore(Protocol):
    """
    Discount code store protocol.

    Note: Lookups canonicalize the code, so "save10" finds "SAVE10".
    """

    async def get(self, code: str) -> Result[DiscountCode | None, StoreError]:
        """Get a code. Returns Ok(None) if not found."""
        ...

    async def list_all(self) -> Result[list[DiscountCode], StoreError]:
        """All codes, newest first."""
        ...

    async def create(self, code: DiscountCode) -> Result[DiscountCode | None, StoreError]:
        """
        Insert a new code. Returns Ok(None) if the code already exists.

        Never overwrites: a stored record keeps its current_uses and created_at.
        """
        ...

    async def set_active(
        self, code: str, is_active: bool
    ) -> Result[DiscountCode | None, StoreError]:
        """Toggle a code. Returns Ok(None) if not found."""
        ...

    async def delete(self, code: str) -> Result[bool, StoreError]:
        """Delete a code. Returns Ok(True) if it existed."""
        ...

    async def redeem(self, code: str, evaluate: Evaluator) -> Redemption:
        """
        Atomically load, evaluate and consume one use.

        Must be serialized per code: the record is re-read, evaluate() runs on
        it, and current_uses is incremented by exactly one only when the
        evaluation applies and current_uses < max_uses still holds.
        Never decrements.
        """
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Memory Store — For Testing
# ═══════════════════════════════════════════════════════════════════════════════


class MemoryDiscountStore:
    """
    In-memory discount code store.

    Note: Single process only. The asyncio.Lock is the redemption boundary.
    """

    def __init__(self, codes: Iterable[DiscountCode] = ()) -> None:
        self._codes: dict[str, DiscountCode] = {c.code: c for c in codes}
        self._lock = asyncio.Lock()

    async def get(self, code: str) -> Result[DiscountCode | None, StoreError]:
        async with self._lock:
            return Ok(self._codes.get(canonical_code(code)))

    async def list_all(self) -> Result[list[DiscountCode], StoreError]:
        async with self._lock:
            return Ok(sorted(self._codes.values(), key=lambda c: c.created_at, reverse=True))

    async def create(self, code: DiscountCode) -> Result[DiscountCode | None, StoreError]:
        async with self._lock:
            if code.code in self._codes:
                return Ok(None)
            self._codes[code.code] = code
            return Ok(code)

    async def set_active(
        self, code: str, is_active: bool
    ) -> Result[DiscountCode | None, StoreError]:
        async with self._lock:
            key = canonical_code(code)
            if (existing := self._codes.get(key)) is None:
                return Ok(None)
            updated = dataclasses.replace(existing, is_active=is_active)
            self._codes[key] = updated
            return Ok(updated)

    async def delete(self, code: str) -> Result[bool, StoreError]:
        async with self._lock:
            return Ok(self._codes.pop(canonical_code(code), None) is not None)

    async def redeem(self, code: str, evaluate: Evaluator) -> Redemption:
        key = canonical_code(code)
        async with self._lock:
            record = self._codes.get(key)
            if record is None:
                return not_found(key)

            match evaluate(record):
                case Ok(applied):
                    if record.max_uses is not None and record.current_uses >= record.max_uses:
                        # cap holds even for evaluators that skip it
                        return reject(
                            key, RejectionReason.EXHAUSTED, "Discount code usage limit reached"
                        )
                    self._codes[key] = dataclasses.replace(
                        record, current_uses=record.current_uses + 1
                    )
                    logger.info(
                        "Redeemed %s (%d/%s)",
                        key,
                        record.current_uses + 1,
                        record.max_uses if record.max_uses is not None else "∞",
                    )
                    return Ok(applied)
                case Error(rejected):
                    return Error(rejected)


__all__ = (
    "DiscountStore",
    "MemoryDiscountStore",
    "Evaluator",
    "Redemption",
)
