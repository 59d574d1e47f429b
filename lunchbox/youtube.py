import logging
from typing import Protocol

import httpx
from pydantic import BaseModel, ValidationError

from lunchbox.credentials import YOUTUBE_ACCOUNT, CredentialStore
from lunchbox.errors import CredentialError, CredentialNotFound


logger = logging.getLogger(__name__)

BASE_URL = "https://www.googleapis.com/youtube/v3"


class VideoSearchProtocol(Protocol):
    async def search_video_id(self, query: str) -> str | None:
        ...


class _VideoId(BaseModel):
    videoId: str | None = None


class _SearchItem(BaseModel):
    id: _VideoId


class _SearchResponse(BaseModel):
    items: list[_SearchItem] = []


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


class YouTubeClient:
    """Look up a recipe video on YouTube.

    Every failure, including a missing API key, comes back as `None`. Videos
    are a nice extra and must never get in the way of the suggestions.
    """

    def __init__(
        self,
        *,
        credentials: CredentialStore,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = BASE_URL,
        account: str = YOUTUBE_ACCOUNT,
    ) -> None:
        self.credentials = credentials
        self.http_client = httpx.AsyncClient(timeout=20) if http_client is None else http_client
        self.base_url = base_url.rstrip("/")
        self.account = account

    async def search_video_id(self, query: str) -> str | None:
        try:
            api_key = self.credentials.load(self.account)
        except CredentialNotFound:
            logger.warning("No YouTube API key found")
            return None
        except CredentialError as exc:
            logger.warning("Could not read the YouTube API key: %s", exc)
            return None

        params = {
            "part": "snippet",
            "q": f"{query} recipe lunch",
            "type": "video",
            "maxResults": "1",
            "key": api_key,
        }
        try:
            resp = await self.http_client.get(f"{self.base_url}/search", params=params)
        except httpx.HTTPError as exc:
            logger.warning("YouTube search failed for %r: %r", query, exc)
            return None

        if not resp.is_success:
            logger.error("YouTube API error: %d", resp.status_code)
            return None

        try:
            result = _SearchResponse.model_validate_json(resp.content)
        except ValidationError as exc:
            logger.warning("Unexpected YouTube response for %r: %s", query, exc)
            return None

        if not result.items:
            return None
        return result.items[0].id.videoId

    async def close(self) -> None:
        await self.http_client.aclose()
