"""Health check endpoints."""

from fastapi import APIRouter, Request

from swapgate import __version__
from swapgate.config import get_settings
from swapgate.trading.signer import iso_timestamp

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Basic health check endpoint."""
    provider = getattr(request.app.state, "trading_provider", None)
    return {
        "status": "ok",
        "timestamp": iso_timestamp(),
        "services": {"trading": provider is not None},
    }


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Detailed health check with configuration info."""
    settings = get_settings()
    provider = getattr(request.app.state, "trading_provider", None)
    return {
        "status": "ok",
        "service": "swapgate",
        "version": __version__,
        "provider": provider.name if provider is not None else None,
        "mock_fallback_likely": bool(settings.missing_okx_credentials),
        "config": settings.get_safe_dict(),
    }
