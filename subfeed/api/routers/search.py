"""
Search API router.
"""
from fastapi import APIRouter, Depends, Query

from subfeed.api.dependencies import get_search_pipeline
from subfeed.models.schemas import SearchResponse
from subfeed.services.search import SearchPipeline

router = APIRouter(prefix="/v1/search", tags=["search"])


@router.get(
    "",
    response_model=SearchResponse,
    summary="Search Videos",
    responses={502: {"description": "Catalog failure - previous results retained"}},
)
async def search_videos(
    q: str = Query(default="", description="Free-text query; blank is ignored"),
    pipeline: SearchPipeline = Depends(get_search_pipeline),
) -> SearchResponse:
    """Search long-form videos, newest first."""
    await pipeline.search(q)
    return SearchResponse.from_state(pipeline.state)


@router.get("/results", response_model=SearchResponse, summary="Current Search Results")
async def search_results(
    pipeline: SearchPipeline = Depends(get_search_pipeline),
) -> SearchResponse:
    return SearchResponse.from_state(pipeline.state)
