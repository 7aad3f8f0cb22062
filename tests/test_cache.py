import asyncio

import pytest

from fakes import FakeGeneration, detail, overview
from ohmycook.bookmarks import SavedRecipes
from ohmycook.cache import HydrationFailure, RecipeCache, RecipeNotFound
from ohmycook.models import HydrationState, Lang, Recipe, RecipeDetail


def cache_with(*names: str) -> tuple[RecipeCache, FakeGeneration]:
    llm = FakeGeneration()
    cache = RecipeCache(llm)  # type: ignore[arg-type]
    cache.put([overview(n) for n in names])
    return cache, llm


def test_put_replaces_the_batch() -> None:
    cache, _ = cache_with("Bibimbap", "Japchae")
    first = cache.generation

    got = cache.put([overview("Bulgogi")])

    assert [r.name for r in got] == ["Bulgogi"]
    assert "Bibimbap" not in cache
    assert len(cache) == 1
    assert cache.generation == first + 1
    assert got[0].hydration_state is HydrationState.pending


def test_put_keeps_the_first_duplicate() -> None:
    cache, _ = cache_with()
    got = cache.put(
        [
            overview("Bibimbap", query="first"),
            overview("Bibimbap", query="second"),
        ]
    )
    assert len(got) == 1
    assert cache.get("Bibimbap").overview.image_search_query == "first"  # type: ignore[union-attr]


def test_ids_are_unique_per_batch() -> None:
    cache, _ = cache_with("Bibimbap", "Japchae")
    ids = [r.recipe_id for r in cache.recipes()]
    assert len(set(ids)) == 2
    assert cache.get_by_id(ids[1]).name == "Japchae"  # type: ignore[union-attr]
    assert cache.get_by_id("nope") is None


@pytest.mark.asyncio
async def test_unknown_name() -> None:
    cache, llm = cache_with("Bibimbap")
    with pytest.raises(RecipeNotFound):
        await cache.ensure_hydrated("Pizza", ["Onion"], Lang.en)
    assert llm.detail_calls == []


@pytest.mark.asyncio
async def test_concurrent_hydration_is_coalesced() -> None:
    cache, llm = cache_with("Bibimbap")
    llm.detail_gate = asyncio.Event()

    calls = [
        asyncio.create_task(cache.ensure_hydrated("Bibimbap", ["Onion"], Lang.en))
        for _ in range(5)
    ]
    await asyncio.sleep(0)
    assert cache.is_hydrating("Bibimbap")

    llm.detail_gate.set()
    got = await asyncio.gather(*calls)

    assert llm.detail_calls == ["Bibimbap"]
    assert all(r is got[0] for r in got)
    assert got[0].is_hydrated
    assert got[0].detail == detail("Bibimbap")
    assert not cache.is_hydrating("Bibimbap")


@pytest.mark.asyncio
async def test_hydration_is_idempotent() -> None:
    cache, llm = cache_with("Bibimbap")

    first = await cache.ensure_hydrated("Bibimbap", ["Onion"], Lang.en)
    again = await cache.ensure_hydrated("Bibimbap", ["Onion"], Lang.en)

    assert first is again
    assert llm.detail_calls == ["Bibimbap"]


@pytest.mark.asyncio
async def test_failure_leaves_entry_pending_and_retry_works() -> None:
    cache, llm = cache_with("Bibimbap")
    llm.detail_failures = 1

    with pytest.raises(HydrationFailure):
        await cache.ensure_hydrated("Bibimbap", ["Onion"], Lang.en)
    assert cache.get("Bibimbap").hydration_state is HydrationState.pending  # type: ignore[union-attr]
    assert not cache.is_hydrating("Bibimbap")

    got = await cache.ensure_hydrated("Bibimbap", ["Onion"], Lang.en)
    assert got.is_hydrated
    assert llm.detail_calls == ["Bibimbap", "Bibimbap"]


@pytest.mark.asyncio
async def test_waiters_share_a_failure() -> None:
    cache, llm = cache_with("Bibimbap")
    llm.detail_gate = asyncio.Event()
    llm.detail_failures = 1

    calls = [
        asyncio.create_task(cache.ensure_hydrated("Bibimbap", [], Lang.en))
        for _ in range(3)
    ]
    await asyncio.sleep(0)
    llm.detail_gate.set()
    got = await asyncio.gather(*calls, return_exceptions=True)

    assert all(isinstance(e, HydrationFailure) for e in got)
    assert llm.detail_calls == ["Bibimbap"]


@pytest.mark.asyncio
async def test_late_detail_does_not_touch_the_new_batch() -> None:
    cache, llm = cache_with("Bibimbap")
    llm.detail_gate = asyncio.Event()

    call = asyncio.create_task(cache.ensure_hydrated("Bibimbap", [], Lang.en))
    await asyncio.sleep(0)
    cache.put([overview("Bibimbap"), overview("Japchae")])
    llm.detail_gate.set()
    got = await call

    assert got.is_hydrated
    fresh = cache.get("Bibimbap")
    assert fresh is not got
    assert fresh.hydration_state is HydrationState.pending  # type: ignore[union-attr]
    assert not cache.is_hydrating("Bibimbap")


@pytest.mark.asyncio
async def test_listeners_hear_about_hydration() -> None:
    cache, _ = cache_with("Bibimbap")
    saved = SavedRecipes()
    saved.toggle(cache.get("Bibimbap"))  # type: ignore[arg-type]
    heard: list[tuple[str, RecipeDetail]] = []

    def broken(name: str, d: RecipeDetail) -> None:
        raise RuntimeError("listener bug")

    cache.subscribe(broken)
    cache.subscribe(saved.on_hydrated)
    cache.subscribe(lambda name, d: heard.append((name, d)))

    await cache.ensure_hydrated("Bibimbap", [], Lang.en)

    assert heard == [("Bibimbap", detail("Bibimbap"))]
    assert saved.get("Bibimbap").is_hydrated  # type: ignore[union-attr]


@pytest.mark.asyncio
async def test_round_trip() -> None:
    cache, llm = cache_with("Bibimbap", "Japchae")
    await cache.ensure_hydrated("Japchae", [], Lang.en)

    other = RecipeCache(llm)  # type: ignore[arg-type]
    other.load(cache.to_dict())

    assert other.generation == cache.generation
    assert [r.to_dict() for r in other.recipes()] == [
        r.to_dict() for r in cache.recipes()
    ]
    assert other.get("Japchae").is_hydrated  # type: ignore[union-attr]
    assert not other.get("Bibimbap").is_hydrated  # type: ignore[union-attr]


@pytest.mark.asyncio
async def test_detached_recipe_hydrates_in_place() -> None:
    cache, llm = cache_with("Japchae")
    saved = Recipe(overview("Bibimbap"))
    llm.detail_failures = 1

    with pytest.raises(HydrationFailure):
        await cache.hydrate_detached(saved, ["Rice"], Lang.en)
    assert not saved.is_hydrated
    assert not cache.is_hydrating("Bibimbap")

    got = await cache.hydrate_detached(saved, ["Rice"], Lang.en)

    assert got is saved
    assert saved.detail == detail("Bibimbap")
    assert "Bibimbap" not in cache
    assert llm.detail_calls == ["Bibimbap", "Bibimbap"]

    assert await cache.hydrate_detached(saved, ["Rice"], Lang.en) is saved
    assert len(llm.detail_calls) == 2
