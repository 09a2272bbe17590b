"""
Unit tests for the playback controller.
"""
import pytest

from subfeed.core.exceptions import ValidationError
from subfeed.models.schemas import SessionState
from subfeed.services.playback import PlaybackController


class TestPlaybackController:
    def test_select_builds_chromeless_embed(self):
        controller = PlaybackController()

        embed = controller.select("dQw4w9WgXcQ")

        assert controller.active == embed
        assert embed.embed_url.startswith("https://www.youtube.com/embed/dQw4w9WgXcQ?")
        assert "rel=0" in embed.embed_url
        assert "modestbranding=1" in embed.embed_url
        assert "iv_load_policy=3" in embed.embed_url

    @pytest.mark.parametrize("video_id", ["", "../etc", "id with space", "abc\n", "x" * 65])
    def test_rejects_invalid_ids(self, video_id):
        controller = PlaybackController()

        with pytest.raises(ValidationError):
            controller.select(video_id)
        assert controller.active is None

    def test_clear(self):
        controller = PlaybackController()
        controller.select("abc")
        controller.clear()
        assert controller.active is None

    @pytest.mark.asyncio
    async def test_cleared_on_sign_out_only(self):
        controller = PlaybackController()
        controller.select("abc")

        await controller.on_session_change(SessionState.SIGNED_OUT, SessionState.SIGNED_IN)
        assert controller.active is not None

        await controller.on_session_change(SessionState.SIGNED_IN, SessionState.SIGNED_OUT)
        assert controller.active is None
