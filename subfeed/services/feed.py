"""
Feed assembler - main business logic orchestrator.
Rebuilds the subscription feed from the catalog on every sign-in:
subscriptions -> recent uploads per channel -> dedup -> batched details
-> short-form filter -> newest-first sort -> atomic replace.
"""
import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import List, Sequence, Tuple

from subfeed.core.exceptions import CatalogError, FeedAssemblyError, SessionRequiredError
from subfeed.core.telemetry import get_tracer, record_run
from subfeed.models.interfaces import CatalogGateway
from subfeed.models.schemas import FeedState, SessionState, VideoSummary
from subfeed.services.session import SessionManager
from subfeed.services.videos import chunked, in_discovery_order, newest_first, summarize

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

PIPELINE = "feed"


class FeedAssembler:
    """
    Subscription feed orchestrator.

    Responsibilities:
    - Fan out over subscribed channels (sequential or bounded)
    - Deduplicate and batch detail lookups
    - Drop short-form videos and sort newest first
    - Commit results only from the most recent run
    """

    def __init__(
            self,
            gateway: CatalogGateway,
            session: SessionManager,
            recent_limit: int = 10,
            batch_size: int = 50,
            concurrency: int = 1,
    ) -> None:
        """
        Initialize feed assembler with dependencies.

        Args:
            gateway: Catalog gateway for remote calls
            session: Session manager gating assembly
            recent_limit: Recent uploads requested per channel
            batch_size: Ids per detail lookup (at most 50)
            concurrency: Parallel per-channel requests (1 = sequential)
        """
        self._gateway = gateway
        self._session = session
        self._recent_limit = recent_limit
        self._batch_size = min(batch_size, 50)
        self._concurrency = max(1, concurrency)
        self._generation = 0
        self._state = FeedState()

    @property
    def state(self) -> FeedState:
        """Last committed feed snapshot."""
        return self._state

    def clear(self) -> None:
        """Reset to an empty feed and invalidate in-flight runs."""
        self._generation += 1
        self._state = FeedState(generation=self._generation)
        logger.info("Feed cleared", extra={"pipeline": PIPELINE})

    async def on_session_change(self, previous: SessionState, current: SessionState) -> None:
        """Assemble on sign-in, clear on sign-out."""
        if current == SessionState.SIGNED_IN:
            try:
                await self.assemble_feed()
            except FeedAssemblyError:
                # Already logged and recorded on the feed state
                pass
        elif previous == SessionState.SIGNED_IN:
            self.clear()

    async def assemble_feed(self) -> List[VideoSummary]:
        """
        Run one assembly and commit it.

        Returns:
            The committed feed (a newer run's feed if this one was superseded)

        Raises:
            SessionRequiredError: If not signed in
            FeedAssemblyError: If any catalog call fails; previous feed is kept
        """
        if self._session.state != SessionState.SIGNED_IN:
            raise SessionRequiredError("the subscription feed")

        self._generation += 1
        generation = self._generation
        log_extra = {"pipeline": PIPELINE, "run_id": generation}
        start_time = time.time()
        logger.info("Feed assembly started", extra=log_extra)

        with tracer.start_as_current_span("feed.assemble") as span:
            span.set_attribute("feed.generation", generation)
            error = None
            try:
                videos, filtered = await self._run()
            except CatalogError as e:
                error, cause = FeedAssemblyError(e.message, e.error_code), e
            except Exception as e:
                logger.exception("Feed assembly crashed", extra=log_extra)
                error, cause = FeedAssemblyError(str(e) or type(e).__name__, "INTERNAL"), e

            if generation != self._generation:
                logger.info("Feed assembly superseded, result discarded", extra=log_extra)
                record_run(PIPELINE, "superseded")
                return list(self._state.videos)

            if error is not None:
                self._state = self._state.model_copy(update={"error": error.message})
                record_run(PIPELINE, "failed")
                logger.error(f"Feed assembly failed: {error.details['reason']}", extra=log_extra)
                raise error from cause

            self._state = FeedState(
                videos=tuple(videos),
                generation=generation,
                updated_at=datetime.now(timezone.utc),
            )
            span.set_attribute("feed.items", len(videos))

        elapsed = time.time() - start_time
        record_run(PIPELINE, "completed", elapsed, filtered)
        logger.info(
            f"Feed assembled: items={len(videos)}, short_form_filtered={filtered}, "
            f"elapsed_ms={elapsed * 1000:.2f}",
            extra=log_extra,
        )
        return videos

    # -------------------------------------------------------------------------
    # Pipeline steps
    # -------------------------------------------------------------------------

    async def _run(self) -> Tuple[List[VideoSummary], int]:
        channel_ids = list(dict.fromkeys(await self._gateway.list_my_subscriptions()))
        if not channel_ids:
            logger.info("No subscriptions, feed is empty", extra={"pipeline": PIPELINE})
            return [], 0

        per_channel = await self._fetch_recent(channel_ids)

        # Merge in subscription order so discovery order is deterministic
        video_ids = list(dict.fromkeys(vid for ids in per_channel for vid in ids))

        records = []
        for batch in chunked(video_ids, self._batch_size):
            records.extend(await self._gateway.fetch_video_details(batch))

        kept, filtered = summarize(records)
        return newest_first(in_discovery_order(kept, video_ids)), filtered

    async def _fetch_recent(self, channel_ids: Sequence[str]) -> List[List[str]]:
        if self._concurrency == 1:
            return [
                await self._gateway.list_recent_video_ids(channel_id, self._recent_limit)
                for channel_id in channel_ids
            ]

        semaphore = asyncio.Semaphore(self._concurrency)

        async def fetch(channel_id: str) -> List[str]:
            async with semaphore:
                return await self._gateway.list_recent_video_ids(channel_id, self._recent_limit)

        tasks = [asyncio.ensure_future(fetch(channel_id)) for channel_id in channel_ids]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            raise
