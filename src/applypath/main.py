from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine

from src.applypath.core.config import get_settings
from src.applypath.core.db import create_all, dispose_engine
from src.applypath.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(engine: AsyncEngine | None = None) -> AsyncGenerator[None]:
    """Core lifespan - startup and shutdown for whatever layer hosts it."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}", app_env=settings.app_env)

    if settings.app_env != "production":
        # Local and test databases are bootstrapped from model metadata
        await create_all(engine)

    try:
        yield
    finally:
        logger.info("Closing connections...")
        if engine is None:
            await dispose_engine()
        logger.info("Shutdown complete")
