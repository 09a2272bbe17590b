"""
Collaborator interfaces (abstractions).
Using Protocol for structural subtyping (duck typing with type hints).
These define the contracts that the identity provider and catalog
implementations must follow.
"""
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, runtime_checkable

from subfeed.models.schemas import Credentials, SessionState

SignedInListener = Callable[[bool], Awaitable[None]]
SessionListener = Callable[[SessionState, SessionState], Awaitable[None]]


@runtime_checkable
class IdentityProvider(Protocol):
    """
    Interface for the OAuth2 identity service.
    Production: browser OAuth flow handing its token to the server.
    Testing: in-memory implementation.
    """

    async def initialize(self, credentials: Credentials) -> None:
        """
        Validate configuration and restore any persisted session.

        Raises:
            IdentityProviderError: If the configuration is rejected
        """
        ...

    async def sign_in(self, credential: Optional[str] = None) -> None:
        """
        Complete the interactive flow.

        Raises:
            IdentityProviderError: On cancellation or provider failure
        """
        ...

    async def sign_out(self) -> None:
        """Revoke the local session."""
        ...

    def is_signed_in(self) -> bool:
        """Current signed-in flag."""
        ...

    def access_token(self) -> Optional[str]:
        """Bearer token for catalog calls, if signed in."""
        ...

    def add_listener(self, listener: SignedInListener) -> None:
        """Register a callback awaited on every signed-in change."""
        ...


@runtime_checkable
class CatalogGateway(Protocol):
    """
    Interface for the remote video catalog.
    Stateless; no call is retried. Failures raise CatalogError subclasses.
    """

    async def list_my_subscriptions(self) -> List[str]:
        """
        Channel ids the signed-in user subscribes to.

        Returns:
            Channel ids in catalog order (may be empty)
        """
        ...

    async def list_recent_video_ids(self, channel_id: str, limit: int) -> List[str]:
        """
        Most recent uploads of one channel, newest first.

        Args:
            channel_id: Channel identifier
            limit: Maximum ids to return

        Returns:
            Video ids only (playlists and channels excluded)
        """
        ...

    async def search_video_ids(
        self,
        query: str,
        limit: int,
        order: str = "relevance",
    ) -> List[str]:
        """Video ids matching a free-text query."""
        ...

    async def fetch_video_details(self, ids: List[str]) -> List[Dict[str, Any]]:
        """
        Raw video records for at most 50 ids.

        Raises:
            ValueError: If more than 50 ids are given
        """
        ...
