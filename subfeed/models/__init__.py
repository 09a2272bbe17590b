"""Models package - domain entities and interfaces."""
from .interfaces import (
    CatalogGateway,
    IdentityProvider,
    SessionListener,
    SignedInListener,
)
from .schemas import (
    Credentials,
    ErrorResponse,
    FeedResponse,
    FeedState,
    PlayerEmbed,
    PlayerResponse,
    SearchResponse,
    SearchState,
    SessionSnapshot,
    SessionState,
    SignInRequest,
    VideoItem,
    VideoSummary,
)

__all__ = [
    # Interfaces
    "CatalogGateway",
    "IdentityProvider",
    "SessionListener",
    "SignedInListener",
    # Schemas
    "Credentials",
    "ErrorResponse",
    "FeedResponse",
    "FeedState",
    "PlayerEmbed",
    "PlayerResponse",
    "SearchResponse",
    "SearchState",
    "SessionSnapshot",
    "SessionState",
    "SignInRequest",
    "VideoItem",
    "VideoSummary",
]
