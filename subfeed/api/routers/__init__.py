"""API routers package."""
from .feed import router as feed_router
from .health import router as health_router
from .player import router as player_router
from .search import router as search_router
from .session import router as session_router

__all__ = [
    "feed_router",
    "health_router",
    "player_router",
    "search_router",
    "session_router",
]
