"""State owned outside the suggestion pipeline.

The orchestrator only reads snapshots from `InventoryStore` and
`PreferencesStore`. Saved timestamps are stamped by `FavoritesStore` alone.
"""

import asyncio
from datetime import datetime, timezone
import json
import logging
from pathlib import Path
from typing import Any, Callable, TypeVar

from pydantic import TypeAdapter, ValidationError

from lunchbox.models import DietaryPreferences, InventoryItem, LunchBoxIdea


logger = logging.getLogger(__name__)

T = TypeVar("T")

_IDEAS = TypeAdapter(list[LunchBoxIdea])


async def to_thread(func: Callable[..., T], *args: Any) -> T:
    await asyncio.sleep(0)
    result = await asyncio.to_thread(func, *args)
    await asyncio.sleep(0)
    return result


def _write_atomic(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(text, encoding="utf-8")
    tmp.replace(path)


class InventoryStore:
    """The current session's inventory. Nothing is persisted."""

    def __init__(self, items: list[InventoryItem] | None = None) -> None:
        self._items: list[InventoryItem] = [] if items is None else list(items)

    @property
    def items(self) -> list[InventoryItem]:
        return list(self._items)

    def add(self, item: InventoryItem) -> None:
        self._items.append(item)

    def update(self, item: InventoryItem) -> None:
        """Replace the item with the same id. Unknown ids are ignored."""
        for index, existing in enumerate(self._items):
            if existing.id == item.id:
                self._items[index] = item
                return

    def remove(self, id: str) -> None:
        self._items = [i for i in self._items if i.id != id]

    def clear(self) -> None:
        self._items.clear()


class PreferencesStore:
    def __init__(
        self,
        path: Path | None = None,
        preferences: DietaryPreferences | None = None,
    ) -> None:
        self.path = path
        self.preferences = DietaryPreferences() if preferences is None else preferences

    async def load(self) -> DietaryPreferences:
        """Read persisted preferences, falling back to the defaults."""
        if self.path is None or not self.path.exists():
            return self.preferences
        text = await to_thread(self.path.read_text, "utf-8")
        try:
            self.preferences = DietaryPreferences.model_validate_json(text)
        except ValidationError as exc:
            logger.warning("Ignoring unreadable preferences in %s: %s", self.path, exc)
            self.preferences = DietaryPreferences()
        return self.preferences

    async def save(self) -> None:
        if self.path is None:
            return
        text = self.preferences.model_dump_json(by_alias=True)
        await to_thread(_write_atomic, self.path, text)

    async def reset(self) -> None:
        self.preferences = DietaryPreferences()
        await self.save()


class FavoritesStore:
    """Saved ideas in a JSON file, newest first."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._favorites: list[LunchBoxIdea] = []

    @property
    def favorites(self) -> list[LunchBoxIdea]:
        return list(self._favorites)

    async def load(self) -> list[LunchBoxIdea]:
        """Read favorites from disk.

        A file that cannot be decoded is left untouched and an empty list is
        presented instead, so nothing the user saved is lost.
        """
        if not self.path.exists():
            self._favorites = []
            return []

        data = await to_thread(self.path.read_bytes)
        try:
            self._favorites = _IDEAS.validate_json(data)
        except ValidationError as exc:
            logger.error("Could not decode favorites in %s: %s", self.path, exc)
            self._favorites = []
        self._sort()
        return self.favorites

    async def save(self, idea: LunchBoxIdea) -> LunchBoxIdea:
        """Stamp `saved_at` and persist, replacing any entry with the same id."""
        stamped = idea.model_copy(
            update={"saved_at": datetime.now(timezone.utc)}, deep=True
        )
        self._favorites = [f for f in self._favorites if f.id != stamped.id]
        self._favorites.append(stamped)
        self._sort()
        await self._write()
        return stamped

    async def delete(self, id: str) -> None:
        self._favorites = [f for f in self._favorites if f.id != id]
        await self._write()

    def _sort(self) -> None:
        oldest = datetime.min.replace(tzinfo=timezone.utc)
        self._favorites.sort(key=lambda f: _aware(f.saved_at) or oldest, reverse=True)

    async def _write(self) -> None:
        text = json.dumps([f.to_dict() for f in self._favorites], indent=2)
        await to_thread(_write_atomic, self.path, text)


def _aware(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
