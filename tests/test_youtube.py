import httpx
import pytest

from lunchbox.credentials import MemoryCredentialStore
from lunchbox.errors import CredentialStoreError
from lunchbox.youtube import YouTubeClient, watch_url


def make_client(handler, credentials) -> YouTubeClient:
    return YouTubeClient(
        credentials=credentials,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.mark.asyncio
async def test_search_video_id(credentials) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"items": [{"id": {"videoId": "abc123"}}]})

    got = await make_client(handler, credentials).search_video_id("Mini frittatas")

    assert got == "abc123"
    params = requests[0].url.params
    assert requests[0].url.path == "/youtube/v3/search"
    assert params["q"] == "Mini frittatas recipe lunch"
    assert params["part"] == "snippet"
    assert params["type"] == "video"
    assert params["maxResults"] == "1"
    assert params["key"] == "youtube-secret"


@pytest.mark.asyncio
async def test_missing_key_is_no_video() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"items": []})

    client = make_client(handler, MemoryCredentialStore({"apiKey_Gemini": "x"}))
    assert await client.search_video_id("anything") is None
    assert calls == []


@pytest.mark.parametrize(
    "response",
    (
        httpx.Response(200, json={"items": []}),
        httpx.Response(200, json={"items": [{"id": {"kind": "youtube#channel"}}]}),
        httpx.Response(200, json={}),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"items": "nope"}),
        httpx.Response(403, json={"error": "quota"}),
        httpx.Response(500, text="oops"),
    ),
)
@pytest.mark.asyncio
async def test_failures_are_no_video(credentials, response: httpx.Response) -> None:
    client = make_client(lambda _: response, credentials)
    assert await client.search_video_id("anything") is None


@pytest.mark.asyncio
async def test_transport_failure_is_no_video(credentials) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    assert await make_client(handler, credentials).search_video_id("x") is None


def test_watch_url() -> None:
    assert watch_url("abc123") == "https://www.youtube.com/watch?v=abc123"


class LockedStore(MemoryCredentialStore):
    def load(self, account: str) -> str:
        raise CredentialStoreError("keychain locked")


@pytest.mark.asyncio
async def test_unreadable_key_is_no_video() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"items": []})

    assert await make_client(handler, LockedStore()).search_video_id("x") is None
    assert calls == []
