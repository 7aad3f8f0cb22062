"""Recipe name -> recipe, for the overview and, once fetched, the detail.

Hydration is coalesced. The first caller for a name starts a task; anyone who
asks for the same name while it runs awaits that task instead of starting
another. A batch `generation` counter guards against results that come back
after `put` has replaced the batch.
"""

import asyncio
import functools
import hashlib
import logging
from typing import Any, Callable, Iterable

from ohmycook.generation import GenerationClient, GenerationFailure
from ohmycook.models import Lang, Recipe, RecipeDetail, RecipeOverview


logger = logging.getLogger(__name__)


type HydrationListener = Callable[[str, RecipeDetail], None]


class RecipeNotFound(Exception):
    pass


class HydrationFailure(GenerationFailure):
    pass


def recipe_id(english_name: str, generation: int) -> str:
    digest = hashlib.sha1(f"{generation}:{english_name}".encode("utf-8"))
    return digest.hexdigest()[:12]


class RecipeCache:
    def __init__(self, llm: GenerationClient) -> None:
        self.llm = llm
        self.generation = 0
        self._recipes: dict[str, Recipe] = {}
        self._inflight: dict[str, asyncio.Task[Recipe]] = {}
        self._detached: dict[str, asyncio.Task[Recipe]] = {}
        self._listeners: list[HydrationListener] = []

    def __contains__(self, name: object) -> bool:
        return name in self._recipes

    def __len__(self) -> int:
        return len(self._recipes)

    def put(self, overviews: Iterable[RecipeOverview]) -> list[Recipe]:
        """Replace the current batch. Every entry starts out pending."""
        self.generation += 1
        self._inflight = {}

        recipes: dict[str, Recipe] = {}
        for overview in overviews:
            if overview.name in recipes:
                logger.warning("Dropping duplicate recipe name %r.", overview.name)
                continue
            recipes[overview.name] = Recipe(
                overview,
                recipe_id=recipe_id(overview.english_name or overview.name, self.generation),
            )
        self._recipes = recipes
        return list(recipes.values())

    def get(self, name: str) -> Recipe | None:
        return self._recipes.get(name)

    def get_by_id(self, id: str) -> Recipe | None:
        for recipe in self._recipes.values():
            if recipe.recipe_id == id:
                return recipe
        return None

    def recipes(self) -> list[Recipe]:
        return list(self._recipes.values())

    def is_hydrating(self, name: str) -> bool:
        return name in self._inflight or name in self._detached

    def subscribe(self, listener: HydrationListener) -> None:
        self._listeners.append(listener)

    async def ensure_hydrated(
        self,
        name: str,
        ingredient_names: list[str],
        lang: Lang,
    ) -> Recipe:
        recipe = self._recipes.get(name)
        if recipe is None:
            raise RecipeNotFound(name)
        if recipe.is_hydrated:
            return recipe

        task = self._inflight.get(name)
        if task is None:
            logger.info("Hydrating %r.", name)
            task = asyncio.create_task(self._hydrate(recipe, list(ingredient_names), lang))
            self._inflight[name] = task
            task.add_done_callback(
                functools.partial(self._forget, self._inflight, name)
            )
        else:
            logger.debug("Joining in-flight hydration of %r.", name)

        # One caller giving up must not cancel the shared request.
        return await asyncio.shield(task)

    async def hydrate_detached(
        self,
        recipe: Recipe,
        ingredient_names: list[str],
        lang: Lang,
    ) -> Recipe:
        """Hydrate a recipe that is not in the current batch, e.g. a saved copy.

        Coalesced per name like `ensure_hydrated`. The detail goes into
        `recipe` itself and listeners hear about it.
        """
        if recipe.is_hydrated:
            return recipe

        task = self._detached.get(recipe.name)
        if task is None:
            logger.info("Hydrating detached %r.", recipe.name)
            task = asyncio.create_task(
                self._hydrate_detached(recipe, list(ingredient_names), lang)
            )
            self._detached[recipe.name] = task
            task.add_done_callback(
                functools.partial(self._forget, self._detached, recipe.name)
            )
        return await asyncio.shield(task)

    def _forget(
        self,
        inflight: dict[str, asyncio.Task[Recipe]],
        name: str,
        task: asyncio.Task[Recipe],
    ) -> None:
        if inflight.get(name) is task:
            del inflight[name]
        if not task.cancelled():
            task.exception()

    async def _fetch_detail(
        self,
        recipe: Recipe,
        ingredient_names: list[str],
        lang: Lang,
    ) -> RecipeDetail:
        try:
            return await self.llm.hydrate_detail(recipe.name, ingredient_names, lang)
        except GenerationFailure as e:
            logger.warning("Hydration of %r failed: %s", recipe.name, e)
            raise HydrationFailure(f"Could not load {recipe.name}: {e}") from e

    async def _hydrate_detached(
        self,
        recipe: Recipe,
        ingredient_names: list[str],
        lang: Lang,
    ) -> Recipe:
        detail = await self._fetch_detail(recipe, ingredient_names, lang)
        self._notify(recipe.name, detail)
        if not recipe.is_hydrated:
            recipe.hydrate(detail)
        return recipe

    async def _hydrate(
        self,
        recipe: Recipe,
        ingredient_names: list[str],
        lang: Lang,
    ) -> Recipe:
        generation = self.generation
        detail = await self._fetch_detail(recipe, ingredient_names, lang)

        if generation != self.generation or self._recipes.get(recipe.name) is not recipe:
            logger.info("Detail for %r arrived after its batch was replaced.", recipe.name)
            hydrated = recipe.copy()
            hydrated.hydrate(detail)
        else:
            recipe.hydrate(detail)
            hydrated = recipe

        self._notify(recipe.name, detail)
        return hydrated

    def _notify(self, name: str, detail: RecipeDetail) -> None:
        for listener in self._listeners:
            try:
                listener(name, detail)
            except Exception:
                logger.exception("Hydration listener failed for %r.", name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "generation": self.generation,
            "recipes": [r.to_dict() for r in self._recipes.values()],
        }

    def load(self, data: dict[str, Any]) -> None:
        self.generation = int(data.get("generation", 0))
        self._inflight = {}
        self._recipes = {}
        for item in data.get("recipes", []):
            recipe = Recipe.from_dict(item)
            self._recipes[recipe.name] = recipe
