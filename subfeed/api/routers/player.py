"""
Player API router.
Selects the video for the embedded player; no comment or count surface.
"""
from fastapi import APIRouter, Depends, status

from subfeed.api.dependencies import get_playback_controller
from subfeed.models.schemas import PlayerResponse
from subfeed.services.playback import PlaybackController

router = APIRouter(prefix="/v1/player", tags=["player"])


@router.get("", response_model=PlayerResponse, summary="Active Video")
async def get_player(
    controller: PlaybackController = Depends(get_playback_controller),
) -> PlayerResponse:
    return PlayerResponse(active=controller.active)


@router.put("/{video_id}", response_model=PlayerResponse, summary="Play Video")
async def play_video(
    video_id: str,
    controller: PlaybackController = Depends(get_playback_controller),
) -> PlayerResponse:
    return PlayerResponse(active=controller.select(video_id))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT, summary="Close Player")
async def close_player(
    controller: PlaybackController = Depends(get_playback_controller),
) -> None:
    controller.clear()
