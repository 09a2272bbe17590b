"""
HTTP catalog gateway.
Thin async adapter over the YouTube Data API v3 REST endpoints.
No retries: every failure is surfaced as a typed CatalogError.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

import httpx

from subfeed.core.exceptions import (
    CatalogAuthorizationError,
    CatalogQuotaError,
    CatalogResponseError,
    CatalogUnavailableError,
)

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 50
MAX_DETAILS_BATCH = 50
VIDEO_KIND = "youtube#video"

QUOTA_REASONS = frozenset({
    "quotaExceeded",
    "rateLimitExceeded",
    "userRateLimitExceeded",
    "dailyLimitExceeded",
})


class HttpCatalogGateway:
    """
    Catalog gateway backed by httpx.

    Usage:
        gateway = HttpCatalogGateway(api_key, token_supplier=session.access_token)
        channel_ids = await gateway.list_my_subscriptions()
    """

    def __init__(
        self,
        api_key: str,
        token_supplier: Optional[Callable[[], Optional[str]]] = None,
        base_url: str = "https://www.googleapis.com/youtube/v3",
        timeout_sec: float = 10.0,
        subscription_page_size: int = MAX_PAGE_SIZE,
        subscription_max_pages: int = 1,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self._token_supplier = token_supplier or (lambda: None)
        self._page_size = max(1, min(subscription_page_size, MAX_PAGE_SIZE))
        self._max_pages = max(1, subscription_max_pages)
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout_sec)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def list_my_subscriptions(self) -> List[str]:
        """Subscribed channel ids; follows page tokens up to max_pages."""
        channel_ids: List[str] = []
        page_token: Optional[str] = None

        for _ in range(self._max_pages):
            params: Dict[str, Any] = {
                "part": "snippet,contentDetails",
                "mine": "true",
                "maxResults": self._page_size,
                "order": "relevance",
            }
            if page_token:
                params["pageToken"] = page_token

            payload = await self._get("subscriptions", params)
            for item in payload.get("items") or []:
                channel_id = ((item.get("snippet") or {}).get("resourceId") or {}).get("channelId")
                if channel_id:
                    channel_ids.append(channel_id)

            page_token = payload.get("nextPageToken")
            if not page_token:
                break
        else:
            # More pages exist; cursor-following stops at max_pages
            logger.info(
                f"Subscription listing truncated at {self._max_pages} page(s), "
                f"channels={len(channel_ids)}"
            )

        return channel_ids

    async def list_recent_video_ids(self, channel_id: str, limit: int) -> List[str]:
        """Newest uploads of a channel, videos only."""
        payload = await self._get("search", {
            "part": "snippet",
            "channelId": channel_id,
            "maxResults": limit,
            "order": "date",
            "type": "video",
            "safeSearch": "none",
        })
        return _video_ids(payload)[:limit]

    async def search_video_ids(
        self,
        query: str,
        limit: int,
        order: str = "relevance",
    ) -> List[str]:
        """Free-text video search."""
        payload = await self._get("search", {
            "part": "snippet",
            "q": query,
            "maxResults": limit,
            "order": order,
            "type": "video",
            "safeSearch": "none",
        })
        return _video_ids(payload)[:limit]

    async def fetch_video_details(self, ids: List[str]) -> List[Dict[str, Any]]:
        """Raw video records for one batch of at most 50 ids."""
        if len(ids) > MAX_DETAILS_BATCH:
            raise ValueError(
                f"fetch_video_details accepts at most {MAX_DETAILS_BATCH} ids, got {len(ids)}"
            )
        if not ids:
            return []

        payload = await self._get("videos", {
            "part": "snippet,contentDetails",
            "id": ",".join(ids),
        })
        return list(payload.get("items") or [])

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    async def _get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        headers = {"Accept": "application/json"}
        token = self._token_supplier()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._client.get(
                endpoint,
                params={**params, "key": self._api_key},
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.warning(f"Catalog transport error: endpoint={endpoint}, error={e!r}")
            raise CatalogUnavailableError(endpoint, type(e).__name__) from e

        if response.status_code >= 400:
            raise _status_error(endpoint, response)

        try:
            payload = response.json()
        except ValueError as e:
            raise CatalogResponseError(endpoint, "body is not JSON") from e
        if not isinstance(payload, dict):
            raise CatalogResponseError(endpoint, "body is not a JSON object")

        logger.debug(f"Catalog call ok: endpoint={endpoint}, items={len(payload.get('items') or [])}")
        return payload


def _video_ids(payload: Dict[str, Any]) -> List[str]:
    ids = []
    for item in payload.get("items") or []:
        item_id = item.get("id") or {}
        if item_id.get("kind", VIDEO_KIND) != VIDEO_KIND:
            continue
        video_id = item_id.get("videoId")
        if video_id:
            ids.append(video_id)
    return ids


def _error_reason(response: httpx.Response) -> str:
    fallback = response.reason_phrase or str(response.status_code)
    try:
        error = response.json().get("error") or {}
    except (ValueError, AttributeError):
        return fallback
    # OAuth token failures: {"error": "invalid_token", "error_description": ...}
    if isinstance(error, str):
        return error
    if not isinstance(error, dict):
        return fallback
    for detail in error.get("errors") or []:
        if isinstance(detail, dict) and detail.get("reason"):
            return detail["reason"]
    return error.get("status") or error.get("message") or str(response.status_code)


def _status_error(endpoint: str, response: httpx.Response) -> Exception:
    reason = _error_reason(response)
    status = response.status_code
    logger.warning(f"Catalog error: endpoint={endpoint}, status={status}, reason={reason}")

    if status == 429 or reason in QUOTA_REASONS:
        return CatalogQuotaError(endpoint, reason)
    if status in (401, 403):
        return CatalogAuthorizationError(endpoint, reason)
    return CatalogUnavailableError(endpoint, f"HTTP {status}: {reason}")
