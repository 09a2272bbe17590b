"""
Shared video pipeline steps: batching, classification, normalization, ordering.
"""
import logging
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from pydantic import ValidationError as PydanticValidationError

from subfeed.core.duration import is_short_form
from subfeed.core.exceptions import CatalogResponseError
from subfeed.models.schemas import VideoSummary

logger = logging.getLogger(__name__)


def chunked(ids: Sequence[str], size: int) -> List[List[str]]:
    """Split ids into consecutive batches of at most `size`."""
    if size < 1:
        raise ValueError("batch size must be positive")
    return [list(ids[i:i + size]) for i in range(0, len(ids), size)]


def summarize(records: Iterable[Dict[str, Any]]) -> Tuple[List[VideoSummary], int]:
    """
    Classify and normalize raw video records.

    Records without an id and repeated ids are skipped; short-form videos
    are dropped.

    Returns:
        Tuple of (kept videos in input order, short-form count)

    Raises:
        CatalogResponseError: If a record cannot be normalized
    """
    kept: List[VideoSummary] = []
    seen = set()
    filtered = 0

    for record in records:
        video_id = record.get("id")
        if not isinstance(video_id, str) or not video_id:
            logger.warning("Skipping video record without id")
            continue
        if video_id in seen:
            continue
        seen.add(video_id)

        snippet = record.get("snippet") or {}
        duration = (record.get("contentDetails") or {}).get("duration")
        if is_short_form(snippet.get("title"), duration):
            filtered += 1
            continue

        try:
            kept.append(VideoSummary.from_catalog(record))
        except PydanticValidationError as e:
            raise CatalogResponseError("videos", f"record {video_id}: {e.errors()[0]['msg']}") from e

    return kept, filtered


def newest_first(videos: Iterable[VideoSummary]) -> List[VideoSummary]:
    """Stable sort by publish time, newest first; ties keep discovery order."""
    return sorted(videos, key=lambda v: v.published_at, reverse=True)


def in_discovery_order(videos: Iterable[VideoSummary], ids: Sequence[str]) -> List[VideoSummary]:
    """Reorder videos to follow `ids`; the details endpoint may return them in any order."""
    position = {video_id: index for index, video_id in enumerate(ids)}
    return sorted(videos, key=lambda v: position.get(v.id, len(position)))
