"""FastAPI application factory."""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import settings
from .routes import get_download_store, get_session_store, router

logger = logging.getLogger(__name__)

SWEEP_INTERVAL_SECONDS = 60


async def _sweep_expired(interval: float):
    """Evict expired downloads and idle sessions until cancelled."""
    downloads = get_download_store()
    sessions = get_session_store()
    while True:
        await asyncio.sleep(interval)
        await downloads.cleanup_expired_async()
        await sessions.cleanup_expired_async()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    # Startup
    sweeper = asyncio.create_task(_sweep_expired(SWEEP_INTERVAL_SECONDS))
    logger.info("Expiry sweeper started")
    yield
    # Shutdown
    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper
    get_download_store().clear()
    get_session_store().clear()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="QuoteSmith",
        description="Risk detection and row remediation for procurement quote spreadsheets",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API routes
    app.include_router(router, prefix="/api")

    return app
