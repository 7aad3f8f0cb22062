from typing import Any, Iterable, Iterator

from ohmycook.catalog import CATALOG, IngredientCatalog
from ohmycook.models import DEFAULT_QUANTITY, Ingredient
from ohmycook.receipts import canonical_key


class Pantry:
    """The user's ingredients. At most one entry per canonical key."""

    def __init__(self, ingredients: Iterable[Ingredient] = ()) -> None:
        self._items: dict[str, Ingredient] = {}
        self.merge(ingredients)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[Ingredient]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def keys(self) -> list[str]:
        return list(self._items)

    def add(self, ingredient: Ingredient) -> bool:
        if ingredient.canonical_key in self._items:
            return False
        self._items[ingredient.canonical_key] = ingredient
        return True

    def add_named(
        self,
        text: str,
        quantity: str = DEFAULT_QUANTITY,
        *,
        catalog: IngredientCatalog = CATALOG,
    ) -> Ingredient | None:
        """Add free text typed by the user. Returns None if it was already held."""
        ingredient = Ingredient(canonical_key(text, catalog), quantity)
        return ingredient if self.add(ingredient) else None

    def merge(self, ingredients: Iterable[Ingredient]) -> list[Ingredient]:
        return [i for i in ingredients if self.add(i)]

    def remove(self, key: str) -> bool:
        return self._items.pop(key, None) is not None

    def set_quantity(self, key: str, quantity: str) -> None:
        self._items[key].quantity = quantity

    def to_list(self) -> list[dict[str, Any]]:
        return [i.to_dict() for i in self._items.values()]

    @classmethod
    def from_list(cls, data: list[dict[str, Any]]) -> "Pantry":
        return cls(Ingredient.from_dict(d) for d in data)
