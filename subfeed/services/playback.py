"""
Playback controller - tracks the active embedded player selection.
"""
import logging
import re
from typing import Optional

from subfeed.core.exceptions import ValidationError
from subfeed.models.schemas import PlayerEmbed, SessionState

logger = logging.getLogger(__name__)

EMBED_BASE_URL = "https://www.youtube.com/embed"
# Suppress related videos, branding and annotations
EMBED_PARAMS = "modestbranding=1&rel=0&iv_load_policy=3"

_VIDEO_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{1,64}")


def embed_url(video_id: str) -> str:
    return f"{EMBED_BASE_URL}/{video_id}?{EMBED_PARAMS}"


class PlaybackController:
    """Holds at most one active video."""

    def __init__(self) -> None:
        self._active: Optional[PlayerEmbed] = None

    @property
    def active(self) -> Optional[PlayerEmbed]:
        return self._active

    def select(self, video_id: str) -> PlayerEmbed:
        """Make `video_id` the active video."""
        if not _VIDEO_ID_PATTERN.fullmatch(video_id or ""):
            raise ValidationError("Invalid video id", details={"video_id": video_id})
        self._active = PlayerEmbed(video_id=video_id, embed_url=embed_url(video_id))
        return self._active

    def clear(self) -> None:
        self._active = None

    async def on_session_change(self, previous: SessionState, current: SessionState) -> None:
        if previous == SessionState.SIGNED_IN and current != SessionState.SIGNED_IN:
            logger.debug("Clearing playback on sign-out")
            self.clear()
