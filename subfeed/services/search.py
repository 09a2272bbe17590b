"""
Search pipeline - ad-hoc video search without short-form clips.
"""
import logging
import time
from datetime import datetime, timezone
from typing import List

from subfeed.core.exceptions import CatalogError, SearchError
from subfeed.core.telemetry import get_tracer, record_run
from subfeed.models.interfaces import CatalogGateway
from subfeed.models.schemas import SearchState, SessionState, VideoSummary
from subfeed.services.videos import in_discovery_order, newest_first, summarize

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

PIPELINE = "search"


class SearchPipeline:
    """
    Single-page search: query -> ids -> one detail batch -> filter -> sort.
    Results replace the previous ones atomically; superseded runs are discarded.
    """

    def __init__(self, gateway: CatalogGateway, result_limit: int = 25) -> None:
        self._gateway = gateway
        # One detail batch covers the whole page
        self._result_limit = max(1, min(result_limit, 50))
        self._generation = 0
        self._state = SearchState()

    @property
    def state(self) -> SearchState:
        return self._state

    def clear(self) -> None:
        """Drop results and invalidate in-flight searches."""
        self._generation += 1
        self._state = SearchState(generation=self._generation)

    async def on_session_change(self, previous: SessionState, current: SessionState) -> None:
        if previous == SessionState.SIGNED_IN and current != SessionState.SIGNED_IN:
            self.clear()

    async def search(self, query_text: str) -> List[VideoSummary]:
        """
        Run a search and commit its results.

        Blank queries are ignored and return the current results.

        Raises:
            SearchError: If a catalog call fails; previous results are kept
        """
        query = (query_text or "").strip()
        if not query:
            record_run(PIPELINE, "skipped")
            return list(self._state.videos)

        self._generation += 1
        generation = self._generation
        log_extra = {"pipeline": PIPELINE, "run_id": generation}
        start_time = time.time()

        with tracer.start_as_current_span("search.run") as span:
            span.set_attribute("search.generation", generation)
            error = None
            try:
                ids = await self._gateway.search_video_ids(query, self._result_limit)
                records = await self._gateway.fetch_video_details(ids[:self._result_limit])
                kept, filtered = summarize(records)
                videos = newest_first(in_discovery_order(kept, ids))
            except CatalogError as e:
                error, cause = SearchError(query, e.message, e.error_code), e
            except Exception as e:
                logger.exception("Search crashed", extra=log_extra)
                error, cause = SearchError(query, str(e) or type(e).__name__, "INTERNAL"), e

            if generation != self._generation:
                logger.info("Search superseded, result discarded", extra=log_extra)
                record_run(PIPELINE, "superseded")
                return list(self._state.videos)

            if error is not None:
                self._state = self._state.model_copy(update={"error": error.message})
                record_run(PIPELINE, "failed")
                logger.error(f"Search failed: {error.details['reason']}", extra=log_extra)
                raise error from cause

            self._state = SearchState(
                query=query,
                videos=tuple(videos),
                generation=generation,
                updated_at=datetime.now(timezone.utc),
            )
            span.set_attribute("search.items", len(videos))

        elapsed = time.time() - start_time
        record_run(PIPELINE, "completed", elapsed, filtered)
        logger.info(
            f"Search served: items={len(videos)}, short_form_filtered={filtered}, "
            f"elapsed_ms={elapsed * 1000:.2f}",
            extra=log_extra,
        )
        return videos
