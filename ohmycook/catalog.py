"""Bilingual ingredient lookup. Everything compares on the canonical English key."""

from typing import Iterable

from ohmycook.ingredient_data import INGREDIENTS
from ohmycook.models import Category, IngredientEntry, Lang


SEARCH_LIMIT = 20
DEFAULT_EMOJI = "🍽️"
CATEGORY_ORDER: tuple[Category, ...] = tuple(Category)


class UnresolvedIngredientName(Exception):
    pass


class IngredientCatalog:
    def __init__(self, entries: Iterable[IngredientEntry]) -> None:
        self._entries: dict[str, IngredientEntry] = {}
        self._lookup: dict[str, str] = {}
        for entry in entries:
            if entry.canonical_key in self._entries:
                raise ValueError(f"Duplicate ingredient: {entry.canonical_key}")
            self._entries[entry.canonical_key] = entry
            for name in entry.translations.values():
                self._lookup.setdefault(name.lower(), entry.canonical_key)

    @classmethod
    def from_table(
        cls,
        table: Iterable[tuple[str, str, Category, str]],
    ) -> "IngredientCatalog":
        return cls(
            IngredientEntry(canonical_key=en, en=en, ko=ko, category=cat, emoji=emoji)
            for en, ko, cat, emoji in table
        )

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries.values())

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def entry(self, key: str) -> IngredientEntry | None:
        return self._entries.get(key)

    def translate(self, key: str, lang: Lang) -> str:
        entry = self._entries.get(key)
        return key if entry is None else entry.name(lang)

    def category_of(self, key: str) -> Category:
        entry = self._entries.get(key)
        return Category.others if entry is None else entry.category

    def emoji_of(self, key: str) -> str:
        entry = self._entries.get(key)
        return DEFAULT_EMOJI if entry is None else entry.emoji

    def resolve_canonical_key(self, text: str) -> str | None:
        return self._lookup.get(text.strip().lower())

    def require_canonical_key(self, text: str) -> str:
        key = self.resolve_canonical_key(text)
        if key is None:
            raise UnresolvedIngredientName(text)
        return key

    def search(
        self,
        query: str,
        *,
        exclude: Iterable[str] = (),
        limit: int = SEARCH_LIMIT,
    ) -> list[IngredientEntry]:
        """Entries whose English or Korean name contains `query`.

        Exact matches rank first, then prefix matches, then the rest, each in
        catalog order. Keys in `exclude` (usually the user's pantry) are left
        out.
        """
        needle = query.strip().lower()
        if not needle:
            return []
        excluded = set(exclude)

        ranked: list[tuple[int, int, IngredientEntry]] = []
        for position, entry in enumerate(self._entries.values()):
            if entry.canonical_key in excluded:
                continue
            names = [n.lower() for n in entry.translations.values()]
            if needle in names:
                rank = 0
            elif any(n.startswith(needle) for n in names):
                rank = 1
            elif any(needle in n for n in names):
                rank = 2
            else:
                continue
            ranked.append((rank, position, entry))

        ranked.sort(key=lambda r: (r[0], r[1]))
        return [entry for _, _, entry in ranked[:limit]]

    def group_by_category(
        self,
        entries: Iterable[IngredientEntry],
    ) -> dict[Category, list[IngredientEntry]]:
        grouped: dict[Category, list[IngredientEntry]] = {}
        for entry in entries:
            grouped.setdefault(entry.category, []).append(entry)
        return {c: grouped[c] for c in CATEGORY_ORDER if c in grouped}


CATALOG = IngredientCatalog.from_table(INGREDIENTS)
