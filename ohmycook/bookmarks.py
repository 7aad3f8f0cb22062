"""Shopping list and saved recipes. Membership only, toggled on and off."""

import logging
from typing import Any, Iterator

from ohmycook.models import Recipe, RecipeDetail


logger = logging.getLogger(__name__)


class ShoppingList:
    def __init__(self, names: list[str] | None = None) -> None:
        self._names: dict[str, None] = dict.fromkeys([] if names is None else names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def toggle(self, name: str) -> bool:
        """Returns whether `name` is on the list afterwards."""
        if name in self._names:
            del self._names[name]
            return False
        self._names[name] = None
        return True

    def clear(self) -> None:
        self._names = {}

    def to_list(self) -> list[dict[str, str]]:
        return [{"name": n} for n in self._names]

    @classmethod
    def from_list(cls, data: list[dict[str, str]]) -> "ShoppingList":
        return cls([d["name"] for d in data])


class SavedRecipes:
    """Bookmarked recipes, keyed by name.

    A recipe is copied as it is when saved, pending or not. `on_hydrated` is
    subscribed to the recipe cache so a copy saved while pending picks up its
    detail when the hydration lands.
    """

    def __init__(self, recipes: list[Recipe] | None = None) -> None:
        self._recipes: dict[str, Recipe] = {r.name: r for r in recipes or []}

    def __contains__(self, name: object) -> bool:
        return name in self._recipes

    def __iter__(self) -> Iterator[Recipe]:
        return iter(list(self._recipes.values()))

    def __len__(self) -> int:
        return len(self._recipes)

    def get(self, name: str) -> Recipe | None:
        return self._recipes.get(name)

    def toggle(self, recipe: Recipe) -> bool:
        """Returns whether the recipe is saved afterwards."""
        if recipe.name in self._recipes:
            del self._recipes[recipe.name]
            return False
        self._recipes[recipe.name] = recipe.copy()
        return True

    def on_hydrated(self, name: str, detail: RecipeDetail) -> None:
        saved = self._recipes.get(name)
        if saved is None or saved.is_hydrated:
            return
        logger.debug("Saved copy of %r hydrated.", name)
        saved.hydrate(detail)

    def to_list(self) -> list[dict[str, Any]]:
        return [r.to_dict() for r in self._recipes.values()]

    @classmethod
    def from_list(cls, data: list[dict[str, Any]]) -> "SavedRecipes":
        return cls([Recipe.from_dict(d) for d in data])
