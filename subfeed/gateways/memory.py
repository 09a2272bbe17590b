"""
In-memory catalog gateway.
Used for the demo backend and for testing.
Production uses HttpCatalogGateway against the remote API.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

from subfeed.gateways.catalog import MAX_DETAILS_BATCH


def video_record(
    video_id: str,
    title: str,
    published_at: datetime,
    duration: Optional[str] = "PT10M",
    channel_title: str = "Channel",
    thumbnail_url: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a video-details record shaped like the catalog API's."""
    snippet: Dict[str, Any] = {
        "title": title,
        "channelTitle": channel_title,
        "publishedAt": published_at.strftime("%Y-%m-%dT%H:%M:%SZ"),
        "thumbnails": {},
    }
    if thumbnail_url:
        snippet["thumbnails"]["medium"] = {"url": thumbnail_url}
    record: Dict[str, Any] = {"kind": "youtube#video", "id": video_id, "snippet": snippet}
    if duration is not None:
        record["contentDetails"] = {"duration": duration}
    return record


class InMemoryCatalogGateway:
    """
    In-memory implementation of CatalogGateway.
    Simulates the remote catalog; failures can be injected per operation.
    """

    def __init__(
        self,
        subscriptions: Optional[List[str]] = None,
        uploads: Optional[Dict[str, List[str]]] = None,
        videos: Optional[Dict[str, Dict[str, Any]]] = None,
        search_results: Optional[Dict[str, List[str]]] = None,
    ) -> None:
        self.subscriptions: List[str] = list(subscriptions or [])
        self.uploads: Dict[str, List[str]] = dict(uploads or {})
        self.videos: Dict[str, Dict[str, Any]] = dict(videos or {})
        self.search_results: Dict[str, List[str]] = dict(search_results or {})
        self.failures: Dict[str, Exception] = {}
        self.calls: List[Tuple[str, Any]] = []

    @classmethod
    def with_mock_data(cls) -> "InMemoryCatalogGateway":
        """Gateway preloaded with a small demo catalog."""
        gateway = cls()
        gateway._initialize_mock_data()
        return gateway

    def _initialize_mock_data(self) -> None:
        """Load mock channels and videos for the demo backend."""
        now = datetime.now(timezone.utc)
        hour = timedelta(hours=1)

        cooking = [
            video_record("ck1", "Knife Skills in Ten Minutes", now - 3 * hour, "PT10M2S", "Slow Kitchen"),
            video_record("ck2", "Fermentation Basics", now - 30 * hour, "PT24M", "Slow Kitchen"),
            video_record("ck3", "One Pan Pasta #shorts", now - 1 * hour, "PT58S", "Slow Kitchen"),
        ]
        science = [
            video_record("sc1", "Why the Sky Is Blue", now - 5 * hour, "PT14M40S", "Bench Physics"),
            video_record("sc2", "Lab Tour", now - 2 * hour, "PT45S", "Bench Physics"),
            video_record("sc3", "Superconductors Explained", now - 50 * hour, "PT1H2M", "Bench Physics"),
        ]
        for record in cooking + science:
            self.videos[record["id"]] = record

        self.subscriptions = ["UC_cooking", "UC_science"]
        self.uploads = {
            "UC_cooking": ["ck3", "ck1", "ck2"],
            "UC_science": ["sc2", "sc1", "sc3"],
        }
        self.search_results = {"physics": ["sc1", "sc2", "sc3"]}

    def fail(self, operation: str, error: Exception) -> None:
        """Make every call to `operation` raise `error`."""
        self.failures[operation] = error

    def _check(self, operation: str) -> None:
        error = self.failures.get(operation)
        if error is not None:
            raise error

    async def list_my_subscriptions(self) -> List[str]:
        self.calls.append(("subscriptions", None))
        self._check("subscriptions")
        return self.subscriptions[:50]

    async def list_recent_video_ids(self, channel_id: str, limit: int) -> List[str]:
        self.calls.append(("recent", channel_id))
        self._check("recent")
        ids = self.uploads.get(channel_id, [])
        # Newest first, like order=date
        ordered = sorted(
            (i for i in ids if i in self.videos),
            key=lambda i: self.videos[i]["snippet"]["publishedAt"],
            reverse=True,
        )
        return ordered[:limit]

    async def search_video_ids(
        self,
        query: str,
        limit: int,
        order: str = "relevance",
    ) -> List[str]:
        self.calls.append(("search", query))
        self._check("search")
        return self.search_results.get(query.strip().lower(), [])[:limit]

    async def fetch_video_details(self, ids: List[str]) -> List[Dict[str, Any]]:
        if len(ids) > MAX_DETAILS_BATCH:
            raise ValueError(
                f"fetch_video_details accepts at most {MAX_DETAILS_BATCH} ids, got {len(ids)}"
            )
        self.calls.append(("details", list(ids)))
        self._check("details")
        return [self.videos[i] for i in ids if i in self.videos]
