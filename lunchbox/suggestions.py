import asyncio
from enum import Enum
import logging
from typing import Callable, Iterable

from lunchbox.ai_client import AIClientProtocol
from lunchbox.errors import AIClientError, AppError
from lunchbox.models import DietaryPreferences, InventoryItem, LunchBoxIdea
from lunchbox.prompts import build_prompt
from lunchbox.stores import InventoryStore, PreferencesStore
from lunchbox.youtube import VideoSearchProtocol


logger = logging.getLogger(__name__)

VIDEO_TIMEOUT = 10.0

NO_VIDEO_SEARCH = "Video search is not configured. Add a YouTube API key in Settings."
NO_VIDEOS_FOUND = "No videos found. Check your YouTube API key in Settings."


class SuggestionState(Enum):
    idle = "idle"
    loading = "loading"
    ready = "ready"
    failed = "failed"


class SuggestionOrchestrator:
    """Turn the current inventory into lunch box ideas, then find videos for them.

    Holds the state a screen renders: `ideas`, `is_loading`, `is_enriching`,
    `error_state` and `status_message`. Errors are stored, never raised.

    All state is written from the event loop, so concurrent video lookups
    each update their own idea without further locking. A failed fetch keeps
    the ideas from the last successful one.
    """

    def __init__(
        self,
        *,
        client: AIClientProtocol,
        inventory_store: InventoryStore,
        preferences_store: PreferencesStore,
        video_client: VideoSearchProtocol | None = None,
        video_timeout: float | None = VIDEO_TIMEOUT,
        prompt_builder: Callable[
            [Iterable[InventoryItem], DietaryPreferences], str
        ] = build_prompt,
    ) -> None:
        self.client = client
        self.inventory_store = inventory_store
        self.preferences_store = preferences_store
        self.video_client = video_client
        self.video_timeout = video_timeout
        self.prompt_builder = prompt_builder

        self.ideas: list[LunchBoxIdea] = []
        self.is_loading = False
        self.is_enriching = False
        self.error_state: AppError | None = None
        self.status_message: str | None = None
        # Bumped for every new result set so stale lookups leave it alone.
        self._generation = 0

    @property
    def state(self) -> SuggestionState:
        if self.is_loading:
            return SuggestionState.loading
        if self.error_state is not None:
            return SuggestionState.failed
        if self._generation:
            return SuggestionState.ready
        return SuggestionState.idle

    async def fetch_suggestions(self) -> None:
        if self.is_loading:
            logger.debug("Fetch already in flight, ignoring")
            return
        self.is_loading = True
        self.error_state = None

        try:
            prompt = self.prompt_builder(
                self.inventory_store.items, self.preferences_store.preferences
            )
            ideas = await self.client.fetch_suggestions(prompt)
        except AIClientError as exc:
            logger.warning("Fetching suggestions failed: %s", exc)
            self.error_state = AppError.from_client_error(exc)
            return
        except Exception as exc:
            logger.exception("Unexpected error fetching suggestions")
            self.error_state = AppError.unknown(str(exc))
            return
        finally:
            self.is_loading = False

        self._generation += 1
        self.ideas = list(ideas)
        logger.info("Got %d suggestions", len(self.ideas))
        await self._enrich()

    async def fetch_videos_only(self) -> None:
        """Look up videos for the ideas already shown without asking the AI again."""
        if not self.ideas or self.is_enriching:
            return
        await self._enrich()

    async def _enrich(self) -> None:
        self.status_message = None
        if self.video_client is None:
            # A stale lookup from an earlier result set may still be running.
            self.is_enriching = False
            self.status_message = NO_VIDEO_SEARCH
            return

        generation = self._generation
        ideas = list(self.ideas)
        self.is_enriching = True
        try:
            coros = [
                self._enrich_one(generation, idea)
                for idea in ideas
                if idea.youtube_video_id is None
            ]
            found = await asyncio.gather(*coros)
        finally:
            if generation == self._generation:
                self.is_enriching = False

        if generation != self._generation:
            return
        if not any(found) and not any(i.youtube_video_id for i in self.ideas):
            self.status_message = NO_VIDEOS_FOUND

    async def _enrich_one(self, generation: int, idea: LunchBoxIdea) -> str | None:
        assert self.video_client is not None
        try:
            video_id = await asyncio.wait_for(
                self.video_client.search_video_id(idea.name), self.video_timeout
            )
        except TimeoutError:
            logger.warning("Video lookup timed out for %r", idea.name)
            return None
        except Exception:
            logger.warning("Video lookup failed for %r", idea.name, exc_info=True)
            return None

        # Only ever fill the field in; an empty result keeps what was there.
        if (
            video_id
            and idea.youtube_video_id is None
            and generation == self._generation
        ):
            idea.youtube_video_id = video_id
        return video_id
