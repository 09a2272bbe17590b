"""
Session manager - owns the authenticated-identity lifecycle.
Single writer of SessionState; every transition is broadcast to subscribers.
"""
import logging
from typing import List, Optional

from subfeed.config.settings import is_placeholder
from subfeed.core.exceptions import (
    AuthActionError,
    AuthInitError,
    ConfigurationError,
    IdentityProviderError,
)
from subfeed.models.interfaces import IdentityProvider, SessionListener
from subfeed.models.schemas import Credentials, SessionSnapshot, SessionState

logger = logging.getLogger(__name__)

READY_STATES = (SessionState.SIGNED_IN, SessionState.SIGNED_OUT)


class SessionManager:
    """
    State machine over an identity provider.

    Uninitialized -> Initializing -> SignedIn | SignedOut (<->)
                                  -> InitError (until initialize() is retried)

    Usage:
        manager = SessionManager(provider)
        manager.subscribe(assembler.on_session_change)
        await manager.initialize(credentials)
    """

    def __init__(self, provider: IdentityProvider) -> None:
        self._provider = provider
        self._state = SessionState.UNINITIALIZED
        self._error: Optional[str] = None
        self._subscribers: List[SessionListener] = []
        self._provider_listener_registered = False

    @property
    def state(self) -> SessionState:
        """Current session state."""
        return self._state

    @property
    def error(self) -> Optional[str]:
        """Last human-readable session error, if any."""
        return self._error

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            state=self._state,
            sign_in_available=self._state in READY_STATES,
            error=self._error,
        )

    def access_token(self) -> Optional[str]:
        """Bearer token while signed in."""
        if self._state != SessionState.SIGNED_IN:
            return None
        return self._provider.access_token()

    def subscribe(self, listener: SessionListener) -> None:
        if listener not in self._subscribers:
            self._subscribers.append(listener)

    def unsubscribe(self, listener: SessionListener) -> None:
        if listener in self._subscribers:
            self._subscribers.remove(listener)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def initialize(self, credentials: Credentials) -> None:
        """
        Initialize the identity provider.

        No-op once initializing or initialized; after InitError this is the
        manual retry path. Failures land in InitError, never raise.
        """
        if self._state not in (SessionState.UNINITIALIZED, SessionState.INIT_ERROR):
            logger.debug(f"initialize() ignored in state={self._state.value}")
            return

        self._error = None
        await self._transition(SessionState.INITIALIZING)

        missing = [
            name
            for name, value in (("client_id", credentials.client_id), ("api_key", credentials.api_key))
            if is_placeholder(value)
        ]
        if missing:
            self._error = ConfigurationError(missing).message
            logger.warning(f"Sign-in disabled, credentials not configured: missing={missing}")
            await self._transition(SessionState.INIT_ERROR)
            return

        try:
            await self._provider.initialize(credentials)
        except IdentityProviderError as e:
            await self._fail_init(str(e))
            return
        except Exception as e:
            logger.exception("Identity provider initialization crashed")
            await self._fail_init(f"unexpected error: {e}")
            return

        if not self._provider_listener_registered:
            self._provider.add_listener(self._on_provider_change)
            self._provider_listener_registered = True

        await self._transition(
            SessionState.SIGNED_IN if self._provider.is_signed_in() else SessionState.SIGNED_OUT
        )

    async def sign_in(self, credential: Optional[str] = None) -> None:
        """
        Run the provider's interactive sign-in.

        No-op until initialization completes.

        Raises:
            AuthActionError: On cancellation or provider failure (state unchanged)
        """
        if self._state not in READY_STATES:
            logger.info(f"sign_in() ignored in state={self._state.value}")
            return
        if self._state == SessionState.SIGNED_IN:
            return

        try:
            await self._provider.sign_in(credential)
        except IdentityProviderError as e:
            self._error = AuthActionError("sign in", str(e)).message
            logger.info(f"Sign-in failed: {e}")
            raise AuthActionError("sign in", str(e)) from e

        self._error = None
        await self._sync_from_provider()

    async def sign_out(self) -> None:
        """
        Sign out through the provider.

        Raises:
            AuthActionError: If the provider fails (state unchanged)
        """
        if self._state != SessionState.SIGNED_IN:
            return

        try:
            await self._provider.sign_out()
        except IdentityProviderError as e:
            self._error = AuthActionError("sign out", str(e)).message
            logger.warning(f"Sign-out failed: {e}")
            raise AuthActionError("sign out", str(e)) from e

        self._error = None
        await self._sync_from_provider()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _fail_init(self, reason: str) -> None:
        self._error = AuthInitError(reason).message
        logger.error(f"Identity provider initialization failed: {reason}")
        await self._transition(SessionState.INIT_ERROR)

    async def _on_provider_change(self, signed_in: bool) -> None:
        if self._state not in READY_STATES:
            logger.debug(f"Provider change ignored in state={self._state.value}")
            return
        await self._transition(SessionState.SIGNED_IN if signed_in else SessionState.SIGNED_OUT)

    async def _sync_from_provider(self) -> None:
        await self._on_provider_change(self._provider.is_signed_in())

    async def _transition(self, new_state: SessionState) -> None:
        previous = self._state
        if previous == new_state:
            return
        self._state = new_state
        logger.info(
            f"Session {previous.value} -> {new_state.value}",
            extra={"session_state": new_state.value},
        )

        for listener in list(self._subscribers):
            try:
                await listener(previous, new_state)
            except Exception:
                logger.exception(f"Session listener failed on {previous.value} -> {new_state.value}")
