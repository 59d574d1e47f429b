import json
from pathlib import Path

import pytest

from lunchbox.models import CuisineRegion, DietaryPreferences, InventoryItem
from lunchbox.stores import FavoritesStore, InventoryStore, PreferencesStore


def test_inventory_store() -> None:
    store = InventoryStore()
    eggs = InventoryItem(name="eggs", quantity="6")
    bread = InventoryItem(name="bread")
    store.add(eggs)
    store.add(bread)

    store.update(eggs.model_copy(update={"quantity": "4"}))
    store.update(InventoryItem(name="ghost"))
    assert [(i.name, i.quantity) for i in store.items] == [("eggs", "4"), ("bread", "")]

    store.remove(bread.id)
    store.remove("missing")
    assert [i.name for i in store.items] == ["eggs"]

    store.clear()
    assert store.items == []


def test_inventory_items_is_a_snapshot() -> None:
    store = InventoryStore([InventoryItem(name="eggs")])
    snapshot = store.items
    store.add(InventoryItem(name="bread"))
    assert len(snapshot) == 1


@pytest.mark.asyncio
async def test_preferences_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    store = PreferencesStore(path)
    store.preferences = DietaryPreferences(
        vegan=True, cuisine_region=CuisineRegion.korean
    )
    await store.save()

    loaded = await PreferencesStore(path).load()
    assert loaded == store.preferences


@pytest.mark.asyncio
async def test_preferences_reset_and_bad_file(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("{broken")
    store = PreferencesStore(path)
    assert await store.load() == DietaryPreferences()

    store.preferences = DietaryPreferences(nut_free=True)
    await store.reset()
    assert store.preferences == DietaryPreferences()
    assert await PreferencesStore(path).load() == DietaryPreferences()


@pytest.mark.asyncio
async def test_favorites_save_stamps_and_orders(tmp_path: Path, ideas) -> None:
    store = FavoritesStore(tmp_path / "favorites.json")
    assert await store.load() == []

    first = await store.save(ideas[0])
    second = await store.save(ideas[1])

    assert ideas[0].saved_at is None
    assert first.saved_at is not None
    assert [f.id for f in store.favorites] == [second.id, first.id]

    reloaded = await FavoritesStore(store.path).load()
    assert [f.id for f in reloaded] == [second.id, first.id]
    assert reloaded[0].name == ideas[1].name


@pytest.mark.asyncio
async def test_favorites_resave_replaces(tmp_path: Path, ideas) -> None:
    store = FavoritesStore(tmp_path / "favorites.json")
    await store.save(ideas[0])
    await store.save(ideas[1])
    await store.save(ideas[0])

    assert [f.id for f in store.favorites] == [ideas[0].id, ideas[1].id]


@pytest.mark.asyncio
async def test_favorites_delete(tmp_path: Path, ideas) -> None:
    store = FavoritesStore(tmp_path / "favorites.json")
    await store.save(ideas[0])
    await store.save(ideas[1])

    await store.delete(ideas[0].id)

    data = json.loads(store.path.read_text())
    assert [f["id"] for f in data] == [ideas[1].id]


@pytest.mark.asyncio
async def test_favorites_corrupt_file_is_kept(tmp_path: Path) -> None:
    path = tmp_path / "favorites.json"
    path.write_text("[{not json")

    store = FavoritesStore(path)
    assert await store.load() == []
    assert path.read_text() == "[{not json"
