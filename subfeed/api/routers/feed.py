"""
Feed API router.
Serves the last committed subscription feed and manual refreshes.
"""
import logging

from fastapi import APIRouter, Depends

from subfeed.api.dependencies import get_feed_assembler
from subfeed.models.schemas import FeedResponse
from subfeed.services.feed import FeedAssembler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/feed", tags=["feed"])


@router.get(
    "",
    response_model=FeedResponse,
    summary="Get Subscription Feed",
    description="""
    Latest uploads of the signed-in user's subscriptions, newest first.

    - Short-form clips are excluded
    - No view counts, likes or comments are returned
    - `error` carries the message of a failed refresh; items stay from the last good run
    """,
)
async def get_feed(
    assembler: FeedAssembler = Depends(get_feed_assembler),
) -> FeedResponse:
    return FeedResponse.from_state(assembler.state)


@router.post(
    "/refresh",
    response_model=FeedResponse,
    summary="Rebuild Subscription Feed",
    responses={
        401: {"description": "Not signed in"},
        502: {"description": "Catalog failure - previous feed retained"},
    },
)
async def refresh_feed(
    assembler: FeedAssembler = Depends(get_feed_assembler),
) -> FeedResponse:
    """Run a new assembly and return the committed feed."""
    await assembler.assemble_feed()
    return FeedResponse.from_state(assembler.state)
