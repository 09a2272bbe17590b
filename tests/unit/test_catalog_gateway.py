"""
Unit tests for the HTTP catalog gateway (httpx.MockTransport).
"""
import httpx
import pytest

from subfeed.core.exceptions import (
    CatalogAuthorizationError,
    CatalogQuotaError,
    CatalogResponseError,
    CatalogUnavailableError,
)
from subfeed.gateways.catalog import HttpCatalogGateway

BASE_URL = "https://catalog.test/youtube/v3"


def make_gateway(handler, token="token-abc", **kwargs):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    return HttpCatalogGateway(
        api_key="key-123",
        token_supplier=lambda: token,
        client=client,
        **kwargs,
    )


def subscription_page(channel_ids, next_token=None):
    payload = {
        "items": [
            {"snippet": {"resourceId": {"kind": "youtube#channel", "channelId": c}}}
            for c in channel_ids
        ]
    }
    if next_token:
        payload["nextPageToken"] = next_token
    return payload


def api_error(status, reason):
    return httpx.Response(
        status,
        json={"error": {"code": status, "message": reason, "errors": [{"reason": reason}]}},
    )


class TestSubscriptions:
    @pytest.mark.asyncio
    async def test_single_page_request(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=subscription_page(["UC1", "UC2"], next_token="p2"))

        gateway = make_gateway(handler)
        channel_ids = await gateway.list_my_subscriptions()
        await gateway.aclose()

        assert channel_ids == ["UC1", "UC2"]
        assert len(requests) == 1
        request = requests[0]
        assert request.url.path == "/youtube/v3/subscriptions"
        assert request.url.params["mine"] == "true"
        assert request.url.params["maxResults"] == "50"
        assert request.url.params["part"] == "snippet,contentDetails"
        assert request.url.params["key"] == "key-123"
        assert request.headers["Authorization"] == "Bearer token-abc"

    @pytest.mark.asyncio
    async def test_follows_cursor_up_to_max_pages(self):
        pages = {
            None: subscription_page(["UC1"], next_token="p2"),
            "p2": subscription_page(["UC2"], next_token="p3"),
            "p3": subscription_page(["UC3"], next_token="p4"),
        }
        seen_tokens = []

        def handler(request):
            token = request.url.params.get("pageToken")
            seen_tokens.append(token)
            return httpx.Response(200, json=pages[token])

        gateway = make_gateway(handler, subscription_max_pages=3)
        channel_ids = await gateway.list_my_subscriptions()

        assert channel_ids == ["UC1", "UC2", "UC3"]
        assert seen_tokens == [None, "p2", "p3"]

    @pytest.mark.asyncio
    async def test_page_size_capped_at_fifty(self):
        sizes = []

        def handler(request):
            sizes.append(request.url.params["maxResults"])
            return httpx.Response(200, json=subscription_page([]))

        gateway = make_gateway(handler, subscription_page_size=500)
        assert await gateway.list_my_subscriptions() == []
        assert sizes == ["50"]

    @pytest.mark.asyncio
    async def test_no_authorization_header_without_token(self):
        headers = []

        def handler(request):
            headers.append(request.headers.get("Authorization"))
            return httpx.Response(200, json=subscription_page([]))

        gateway = make_gateway(handler, token=None)
        await gateway.list_my_subscriptions()

        assert headers == [None]


class TestSearch:
    @pytest.mark.asyncio
    async def test_recent_videos_only(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"items": [
                {"id": {"kind": "youtube#video", "videoId": "v1"}},
                {"id": {"kind": "youtube#playlist", "playlistId": "pl1"}},
                {"id": {"kind": "youtube#channel", "channelId": "UC9"}},
                {"id": {"kind": "youtube#video", "videoId": "v2"}},
            ]})

        gateway = make_gateway(handler)
        ids = await gateway.list_recent_video_ids("UC1", 10)

        assert ids == ["v1", "v2"]
        params = requests[0].url.params
        assert requests[0].url.path == "/youtube/v3/search"
        assert params["channelId"] == "UC1"
        assert params["order"] == "date"
        assert params["type"] == "video"
        assert params["maxResults"] == "10"

    @pytest.mark.asyncio
    async def test_recent_videos_bounded_by_limit(self):
        def handler(request):
            return httpx.Response(200, json={"items": [
                {"id": {"kind": "youtube#video", "videoId": f"v{i}"}} for i in range(5)
            ]})

        gateway = make_gateway(handler)
        assert await gateway.list_recent_video_ids("UC1", 3) == ["v0", "v1", "v2"]

    @pytest.mark.asyncio
    async def test_free_text_search(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"items": [{"id": {"kind": "youtube#video", "videoId": "v1"}}]})

        gateway = make_gateway(handler)
        assert await gateway.search_video_ids("foo bar", 25) == ["v1"]
        params = requests[0].url.params
        assert params["q"] == "foo bar"
        assert params["maxResults"] == "25"
        assert params["type"] == "video"


class TestVideoDetails:
    @pytest.mark.asyncio
    async def test_joins_ids(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"items": [{"id": "a"}, {"id": "b"}]})

        gateway = make_gateway(handler)
        records = await gateway.fetch_video_details(["a", "b"])

        assert [r["id"] for r in records] == ["a", "b"]
        assert requests[0].url.path == "/youtube/v3/videos"
        assert requests[0].url.params["id"] == "a,b"
        assert requests[0].url.params["part"] == "snippet,contentDetails"

    @pytest.mark.asyncio
    async def test_rejects_more_than_fifty_ids(self):
        gateway = make_gateway(lambda request: httpx.Response(200, json={"items": []}))

        with pytest.raises(ValueError):
            await gateway.fetch_video_details([f"v{i}" for i in range(51)])

    @pytest.mark.asyncio
    async def test_empty_ids_skip_request(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"items": []})

        gateway = make_gateway(handler)
        assert await gateway.fetch_video_details([]) == []
        assert requests == []


class TestErrors:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response, expected",
        [
            (api_error(403, "quotaExceeded"), CatalogQuotaError),
            (api_error(403, "rateLimitExceeded"), CatalogQuotaError),
            (httpx.Response(429, text="slow down"), CatalogQuotaError),
            (api_error(401, "authError"), CatalogAuthorizationError),
            (httpx.Response(401, json={"error": "invalid_token"}), CatalogAuthorizationError),
            (httpx.Response(403, json={"error": ["unexpected"]}), CatalogAuthorizationError),
            (api_error(403, "forbidden"), CatalogAuthorizationError),
            (api_error(404, "notFound"), CatalogUnavailableError),
            (httpx.Response(503, text="unavailable"), CatalogUnavailableError),
        ],
    )
    async def test_status_mapping(self, response, expected):
        gateway = make_gateway(lambda request: response)

        with pytest.raises(expected):
            await gateway.list_my_subscriptions()

    @pytest.mark.asyncio
    async def test_oauth_error_string_is_reason(self):
        gateway = make_gateway(lambda request: httpx.Response(
            401, json={"error": "invalid_token", "error_description": "expired"},
        ))

        with pytest.raises(CatalogAuthorizationError) as exc_info:
            await gateway.list_my_subscriptions()

        assert exc_info.value.details["reason"] == "invalid_token"

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        gateway = make_gateway(handler)
        with pytest.raises(CatalogUnavailableError) as exc_info:
            await gateway.fetch_video_details(["a"])

        assert exc_info.value.details["reason"] == "ConnectError"

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        gateway = make_gateway(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(CatalogResponseError):
            await gateway.list_recent_video_ids("UC1", 10)

    @pytest.mark.asyncio
    async def test_quota_reason_in_details(self):
        gateway = make_gateway(lambda request: api_error(403, "quotaExceeded"))

        with pytest.raises(CatalogQuotaError) as exc_info:
            await gateway.search_video_ids("foo", 25)

        assert exc_info.value.details == {"endpoint": "search", "reason": "quotaExceeded"}
        assert exc_info.value.error_code == "CATALOG_QUOTA_EXCEEDED"
