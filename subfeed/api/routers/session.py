"""
Session API router.
Exposes the identity lifecycle: status, initialize (retry), sign-in, sign-out.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends

from subfeed.api.dependencies import get_credentials, get_session_manager
from subfeed.models.schemas import Credentials, SessionSnapshot, SignInRequest
from subfeed.services.session import SessionManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/session", tags=["session"])


@router.get("", response_model=SessionSnapshot, summary="Session Status")
async def get_session(
    session: SessionManager = Depends(get_session_manager),
) -> SessionSnapshot:
    """Current session state and whether sign-in is offered."""
    return session.snapshot()


@router.post("/initialize", response_model=SessionSnapshot, summary="Initialize Sign-In")
async def initialize_session(
    session: SessionManager = Depends(get_session_manager),
    credentials: Credentials = Depends(get_credentials),
) -> SessionSnapshot:
    """
    Initialize the identity provider.

    Runs at startup; call again only to retry after an init error.
    """
    await session.initialize(credentials)
    return session.snapshot()


@router.post(
    "/sign-in",
    response_model=SessionSnapshot,
    summary="Sign In",
    responses={401: {"description": "Sign-in cancelled or rejected"}},
)
async def sign_in(
    request: Optional[SignInRequest] = None,
    session: SessionManager = Depends(get_session_manager),
) -> SessionSnapshot:
    """
    Complete sign-in with the token from the browser OAuth flow.

    The subscription feed is assembled as part of the transition.
    """
    await session.sign_in(request.access_token if request else None)
    return session.snapshot()


@router.post("/sign-out", response_model=SessionSnapshot, summary="Sign Out")
async def sign_out(
    session: SessionManager = Depends(get_session_manager),
) -> SessionSnapshot:
    """Sign out; feed, search results and playback are cleared."""
    await session.sign_out()
    return session.snapshot()
