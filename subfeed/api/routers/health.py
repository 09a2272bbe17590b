"""
Health check router for observability.
"""
from fastapi import APIRouter

from subfeed.api.dependencies import get_feed_assembler, get_session_manager
from subfeed.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health Check")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/health/ready", summary="Readiness Check")
async def readiness_check() -> dict:
    """
    Readiness check for Kubernetes.
    Returns session state and catalog configuration.
    """
    settings = get_settings()
    session = get_session_manager()
    feed_state = get_feed_assembler().state

    return {
        "status": "ready",
        "session": {
            "state": session.state.value,
            "sign_in_available": session.snapshot().sign_in_available,
        },
        "catalog": {
            "backend": settings.CATALOG_BACKEND,
            "credentials_configured": settings.credentials_configured(),
        },
        "feed": {
            "generation": feed_state.generation,
            "items": len(feed_state.videos),
        },
    }
