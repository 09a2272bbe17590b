"""
Domain models using Pydantic.
All data structures for the feed client.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Domain Models (Internal)
# =============================================================================


class SessionState(str, Enum):
    """Authenticated-identity lifecycle."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    SIGNED_OUT = "signed_out"
    SIGNED_IN = "signed_in"
    INIT_ERROR = "init_error"


class Credentials(BaseModel):
    """Identity provider configuration."""

    model_config = ConfigDict(frozen=True)

    client_id: str = Field(..., description="OAuth client identifier")
    api_key: str = Field(..., description="Catalog API key")
    scope: str = Field(..., description="Read-only catalog scope")


class VideoSummary(BaseModel):
    """
    Normalized catalog video record.
    Carries no engagement metrics by construction.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Video identifier")
    title: str = Field(default="", description="Video title")
    channel_title: str = Field(default="", description="Uploading channel name")
    published_at: datetime = Field(..., description="Publication time (UTC)")
    thumbnail_url: Optional[str] = Field(default=None, description="Thumbnail URL")
    duration_encoding: Optional[str] = Field(
        default=None,
        description="ISO-8601 duration, e.g. PT4M13S",
    )

    @field_validator("published_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_catalog(cls, record: Dict[str, Any]) -> "VideoSummary":
        """Normalize a video-details record from the catalog API."""
        snippet = record.get("snippet") or {}
        thumbnails = snippet.get("thumbnails") or {}
        thumbnail = thumbnails.get("medium") or thumbnails.get("default") or {}
        return cls(
            id=record.get("id"),
            title=snippet.get("title") or "",
            channel_title=snippet.get("channelTitle") or "",
            published_at=snippet.get("publishedAt"),
            thumbnail_url=thumbnail.get("url"),
            duration_encoding=(record.get("contentDetails") or {}).get("duration"),
        )


class FeedState(BaseModel):
    """
    Snapshot of the personalized feed.
    Replaced wholesale on every committed assembly run.
    """

    model_config = ConfigDict(frozen=True)

    videos: Tuple[VideoSummary, ...] = ()
    generation: int = 0
    updated_at: Optional[datetime] = None
    error: Optional[str] = None


class SearchState(BaseModel):
    """Snapshot of the latest search results."""

    model_config = ConfigDict(frozen=True)

    query: str = ""
    videos: Tuple[VideoSummary, ...] = ()
    generation: int = 0
    updated_at: Optional[datetime] = None
    error: Optional[str] = None


class SessionSnapshot(BaseModel):
    """Read-only view of the session for observers."""

    state: SessionState
    sign_in_available: bool = False
    error: Optional[str] = None


class PlayerEmbed(BaseModel):
    """Embedded player configuration for one video."""

    video_id: str
    embed_url: str


# =============================================================================
# API Models (External)
# =============================================================================


class SignInRequest(BaseModel):
    """Access token produced by the browser OAuth flow."""

    access_token: Optional[str] = Field(
        default=None,
        description="OAuth access token; absent means the flow was cancelled",
    )


class VideoItem(BaseModel):
    """Single video in feed or search responses."""

    id: str
    title: str
    channel_title: str
    published_at: datetime
    thumbnail_url: Optional[str] = None
    duration: Optional[str] = None

    @classmethod
    def from_summary(cls, video: VideoSummary) -> "VideoItem":
        return cls(
            id=video.id,
            title=video.title,
            channel_title=video.channel_title,
            published_at=video.published_at,
            thumbnail_url=video.thumbnail_url,
            duration=video.duration_encoding,
        )


class FeedResponse(BaseModel):
    """Feed endpoint response."""

    items: List[VideoItem] = Field(..., description="Newest-first videos")
    generation: int = Field(..., description="Assembly run that produced the feed")
    updated_at: Optional[datetime] = None
    error: Optional[str] = Field(
        default=None,
        description="Message from the last failed run; items are from the last good run",
    )

    @classmethod
    def from_state(cls, state: FeedState) -> "FeedResponse":
        return cls(
            items=[VideoItem.from_summary(v) for v in state.videos],
            generation=state.generation,
            updated_at=state.updated_at,
            error=state.error,
        )


class SearchResponse(BaseModel):
    """Search endpoint response."""

    query: str
    items: List[VideoItem]
    updated_at: Optional[datetime] = None
    error: Optional[str] = None

    @classmethod
    def from_state(cls, state: SearchState) -> "SearchResponse":
        return cls(
            query=state.query,
            items=[VideoItem.from_summary(v) for v in state.videos],
            updated_at=state.updated_at,
            error=state.error,
        )


class PlayerResponse(BaseModel):
    """Active playback selection."""

    active: Optional[PlayerEmbed] = None


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: Dict[str, Any] = Field(..., description="Error details")
