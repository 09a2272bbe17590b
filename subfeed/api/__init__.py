"""API package - FastAPI routes and dependencies."""
from .dependencies import get_feed_assembler, get_search_pipeline, get_session_manager
from .routers import feed_router, health_router, player_router, search_router, session_router

__all__ = [
    "feed_router",
    "get_feed_assembler",
    "get_search_pipeline",
    "get_session_manager",
    "health_router",
    "player_router",
    "search_router",
    "session_router",
]
