"""
Token identity provider.
Server-side half of the browser OAuth flow: the client completes the
interactive consent screen and hands the resulting access token over.
"""
import logging
from typing import List, Optional

from subfeed.core.exceptions import IdentityProviderError
from subfeed.models.interfaces import SignedInListener
from subfeed.models.schemas import Credentials

logger = logging.getLogger(__name__)

CLIENT_ID_SUFFIX = ".apps.googleusercontent.com"
READONLY_SCOPE_MARKER = "readonly"


class TokenIdentityProvider:
    """
    Identity provider holding a single OAuth access token.

    Usage:
        provider = TokenIdentityProvider()
        await provider.initialize(credentials)
        await provider.sign_in(access_token)
    """

    def __init__(self, restored_token: Optional[str] = None) -> None:
        """
        Args:
            restored_token: Token from a persisted browser session; when set,
                initialize() resolves straight to signed-in
        """
        self._restored_token = restored_token
        self._token: Optional[str] = None
        self._credentials: Optional[Credentials] = None
        self._listeners: List[SignedInListener] = []

    async def initialize(self, credentials: Credentials) -> None:
        """Validate client configuration and restore a persisted session."""
        if not credentials.client_id.endswith(CLIENT_ID_SUFFIX):
            raise IdentityProviderError(
                f"invalid OAuth client id (expected *{CLIENT_ID_SUFFIX})"
            )
        if len(credentials.api_key.strip()) < 20:
            raise IdentityProviderError("invalid API key")
        if READONLY_SCOPE_MARKER not in credentials.scope:
            raise IdentityProviderError(f"scope is not read-only: {credentials.scope}")

        self._credentials = credentials
        self._token = self._restored_token
        logger.info(f"Identity provider ready, restored_session={self._token is not None}")

    async def sign_in(self, credential: Optional[str] = None) -> None:
        """Accept the token produced by the interactive flow."""
        if self._credentials is None:
            raise IdentityProviderError("provider not initialized")
        if not credential or not credential.strip():
            raise IdentityProviderError("sign-in was cancelled")

        was_signed_in = self.is_signed_in()
        self._token = credential.strip()
        if not was_signed_in:
            await self._notify(True)

    async def sign_out(self) -> None:
        """Drop the token."""
        if self._credentials is None:
            raise IdentityProviderError("provider not initialized")
        was_signed_in = self.is_signed_in()
        self._token = None
        if was_signed_in:
            await self._notify(False)

    def is_signed_in(self) -> bool:
        return self._token is not None

    def access_token(self) -> Optional[str]:
        return self._token

    def add_listener(self, listener: SignedInListener) -> None:
        self._listeners.append(listener)

    async def _notify(self, signed_in: bool) -> None:
        for listener in list(self._listeners):
            await listener(signed_in)
