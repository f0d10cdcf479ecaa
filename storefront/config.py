"""
Pricing policy — configuration for the checkout service.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from storefront._types import CURRENCY, MoneyLike
from storefront.shipping import ShippingTable, DEFAULT_TABLE


class LogFormat(Enum):
    TEXT = "text"
    JSON = "json"


ENV_PREFIX = "STOREFRONT_"


class EnvSettings(BaseModel):
    """Raw STOREFRONT_* values, validated. Field names are the unprefixed variable names, lowercased."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    free_shipping_threshold: Decimal | None = Field(default=None, ge=0)
    default_shipping_fee: Decimal | None = Field(default=None, ge=0)
    database_url: str | None = None
    log_level: str | None = None
    log_format: LogFormat | None = None
    log_file: str | None = None

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str | None) -> str | None:
        if v is not None and v.upper() not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {v}")
        return v

    @field_validator("log_format", mode="before")
    @classmethod
    def lowercase_format(cls, v: object) -> object:
        return v.lower() if isinstance(v, str) else v

    @classmethod
    def from_environ(cls, env: Mapping[str, str]) -> EnvSettings:
        values = {
            name: value.strip()
            for name in cls.model_fields
            if (value := env.get(ENV_PREFIX + name.upper())) and value.strip()
        }
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ValueError(f"Invalid {ENV_PREFIX}* configuration: {e}") from e


@dataclass(frozen=True, slots=True)
class PricingPolicy:
    """
    Checkout configuration.

    Fluent builder pattern — chain methods to configure.

    Example:
        policy = (
            PricingPolicy()
            .with_free_shipping_threshold(1500)
            .with_default_shipping_fee(90)
            .with_database_url("sqlite+aiosqlite:///shop.db")
        )

    Note: Immutable — each method returns new PricingPolicy.
    """

    shipping: ShippingTable = field(default=DEFAULT_TABLE)
    currency: str = CURRENCY
    database_url: str = "sqlite+aiosqlite:///:memory:"
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.TEXT
    log_file: str | None = None

    def with_shipping_table(self, table: ShippingTable) -> PricingPolicy:
        return replace(self, shipping=table)

    def with_free_shipping_threshold(self, threshold: MoneyLike) -> PricingPolicy:
        return replace(self, shipping=self.shipping.with_free_shipping_threshold(threshold))

    def with_default_shipping_fee(self, fee: MoneyLike) -> PricingPolicy:
        return replace(self, shipping=self.shipping.with_default_fee(fee))

    def with_database_url(self, url: str) -> PricingPolicy:
        return replace(self, database_url=url)

    def with_logging(
        self,
        level: str | None = None,
        fmt: LogFormat | None = None,
        file: str | None = None,
    ) -> PricingPolicy:
        return replace(
            self,
            log_level=(level or self.log_level).upper(),
            log_format=fmt or self.log_format,
            log_file=file if file is not None else self.log_file,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PricingPolicy:
        """
        Read STOREFRONT_* variables. Unset ones keep their defaults.

            STOREFRONT_FREE_SHIPPING_THRESHOLD   2000
            STOREFRONT_DEFAULT_SHIPPING_FEE      85
            STOREFRONT_DATABASE_URL              sqlite+aiosqlite:///:memory:
            STOREFRONT_LOG_LEVEL                 INFO
            STOREFRONT_LOG_FORMAT                text | json
            STOREFRONT_LOG_FILE                  (stderr)

        Raises ValueError on a malformed value.
        """
        settings = EnvSettings.from_environ(os.environ if environ is None else environ)
        policy = cls()

        if settings.free_shipping_threshold is not None:
            policy = policy.with_free_shipping_threshold(settings.free_shipping_threshold)
        if settings.default_shipping_fee is not None:
            policy = policy.with_default_shipping_fee(settings.default_shipping_fee)
        if settings.database_url is not None:
            policy = policy.with_database_url(settings.database_url)

        return policy.with_logging(
            level=settings.log_level,
            fmt=settings.log_format,
            file=settings.log_file,
        )


__all__ = ("LogFormat", "EnvSettings", "PricingPolicy", "ENV_PREFIX")
