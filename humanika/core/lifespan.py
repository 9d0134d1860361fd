"""Application lifespan: startup and shutdown.

Only wiring of infrastructure (logging, DB engine dispose); no business logic.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from humanika.core.config import get_settings
from humanika.infrastructure.persistence.database import dispose_engine
from humanika.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup; dispose the SQL engine on shutdown."""
    settings = get_settings()
    setup_logging()
    logger.info(
        "%s %s starting (reviewer roles: %s)",
        settings.app_name,
        settings.app_version,
        ", ".join(sorted(settings.reviewer_roles)),
    )

    yield

    await dispose_engine()
    logger.info("Database engine disposed")
