"""
Application factory — policy from the environment, SQLAlchemy stores, FastAPI.

Run: uvicorn storefront.main:build_app --factory
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import fastapi
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from storefront.api import create_app
from storefront.catalog import Catalog
from storefront.checkout import CheckoutService
from storefront.config import PricingPolicy
from storefront.db import create_tables
from storefront.discount import SQLAlchemyDiscountStore
from storefront.order import SQLAlchemyOrderStore
from storefront._logging import setup_logging_from


def build_app(
    policy: PricingPolicy | None = None,
    catalog: Catalog | None = None,
) -> fastapi.FastAPI:
    """
    Wire the whole service.

    Note: Tables are created on startup. The engine is disposed on shutdown.
    Without a catalog, line prices from requests are used as sent.
    """
    policy = policy or PricingPolicy.from_env()
    logger = setup_logging_from(policy)

    engine = create_async_engine(policy.database_url, echo=False)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    service = CheckoutService(
        SQLAlchemyDiscountStore(session_factory),
        SQLAlchemyOrderStore(session_factory),
        policy,
        catalog=catalog,
    )

    @asynccontextmanager
    async def lifespan(_app: fastapi.FastAPI) -> AsyncIterator[None]:
        await create_tables(engine)
        logger.info("storefront ready (%s)", engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            await engine.dispose()

    return create_app(service, lifespan=lifespan)


__all__ = ("build_app",)
