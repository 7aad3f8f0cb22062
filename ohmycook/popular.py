"""The popular recipes list. Read-only, and every entry is already hydrated."""

from typing import Iterable, Iterator

from ohmycook.cache import recipe_id
from ohmycook.models import Difficulty, Recipe, RecipeDetail, RecipeOverview
from ohmycook.popular_data import POPULAR_RECIPES


class PopularRecipes:
    def __init__(self, recipes: Iterable[Recipe]) -> None:
        self._recipes: dict[str, Recipe] = {r.name: r for r in recipes}

    @classmethod
    def from_table(
        cls,
        table: Iterable[
            tuple[str, str, str, str, int, Difficulty, int, int, int, tuple[str, ...], tuple[str, ...]]
        ],
    ) -> "PopularRecipes":
        recipes = []
        for (
            name,
            english_name,
            description,
            cuisine,
            cook_time,
            difficulty,
            spiciness,
            calories,
            servings,
            ingredients,
            instructions,
        ) in table:
            overview = RecipeOverview(
                name=name,
                english_name=english_name,
                description=description,
                cuisine=cuisine,
                cook_time_minutes=cook_time,
                difficulty=difficulty,
                spiciness=spiciness,
                calories=calories,
                servings=servings,
                ingredient_names=list(ingredients),
                image_search_query=english_name,
            )
            detail = RecipeDetail(
                ingredients_with_quantities=list(ingredients),
                instructions=list(instructions),
            )
            recipes.append(
                Recipe(overview, recipe_id=recipe_id(english_name, 0), detail=detail)
            )
        return cls(recipes)

    def __contains__(self, name: object) -> bool:
        return name in self._recipes

    def __iter__(self) -> Iterator[Recipe]:
        return iter(list(self._recipes.values()))

    def __len__(self) -> int:
        return len(self._recipes)

    def get(self, name: str) -> Recipe | None:
        """A copy, so callers can't edit the shared table."""
        recipe = self._recipes.get(name)
        return None if recipe is None else recipe.copy()


POPULAR = PopularRecipes.from_table(POPULAR_RECIPES)
