"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from swapgate import __version__
from swapgate.config import get_settings
from swapgate.trading.factory import get_provider, reset_provider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    The trading provider is built once at startup; an unknown provider name
    aborts startup with ProviderConfigError.
    """
    provider = get_provider()
    app.state.trading_provider = provider
    logger.info(f"Trading provider ready: {provider.name}")
    yield
    await provider.close()
    app.state.trading_provider = None
    reset_provider()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Swapgate API",
        description="Non-custodial swap gateway for the OKX DEX aggregator on Solana",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes
    from swapgate.api.routes import health
    from swapgate.web.controllers import trading_router

    app.include_router(health.router, tags=["Health"])
    app.include_router(trading_router)

    return app
