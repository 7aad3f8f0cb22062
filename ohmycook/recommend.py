import logging
from typing import Iterable

from ohmycook.cache import RecipeCache
from ohmycook.generation import GenerationClient
from ohmycook.images import ImageSearch, resolve_images
from ohmycook.models import Ingredient, Lang, Recipe, RecipeFilters


logger = logging.getLogger(__name__)


class EmptyIngredientSet(Exception):
    pass


class RecommendationEngine:
    def __init__(
        self,
        *,
        llm: GenerationClient,
        images: ImageSearch,
        cache: RecipeCache,
    ) -> None:
        self.llm = llm
        self.images = images
        self.cache = cache
        self._latest = 0

    async def recommend(
        self,
        ingredients: Iterable[Ingredient],
        priority_ingredients: Iterable[str] = (),
        filters: RecipeFilters | None = None,
        lang: Lang = Lang.en,
    ) -> list[Recipe]:
        """Overview recipes for `ingredients`, with images where one was found.

        The batch replaces whatever the cache held before. If another call
        started while this one was running, this result goes back to the
        caller but is not written to the cache.
        """
        names = [i.canonical_key for i in ingredients]
        if not names:
            raise EmptyIngredientSet("Add some ingredients first.")
        filters = RecipeFilters() if filters is None else filters

        self._latest += 1
        request = self._latest

        overviews = await self.llm.generate_overviews(
            names, list(priority_ingredients), filters, lang
        )
        overviews = await resolve_images(overviews, self.images)
        logger.info(
            "Got %s recipes, %s with images.",
            len(overviews),
            sum(1 for o in overviews if o.image_url),
        )

        if request != self._latest:
            logger.info("Recommendation superseded by a newer request.")
            return [Recipe(o) for o in overviews]
        return self.cache.put(overviews)
