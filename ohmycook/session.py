"""Per-user state. One `Session` per owner, loaded from and saved to a record store.

Nothing is shared between owners: every session builds its own cache, chat
store and lists. The generation client and image search are stateless and so
are shared.
"""

import asyncio
import logging
from typing import Any, Iterable

from ohmycook.bookmarks import SavedRecipes, ShoppingList
from ohmycook.cache import RecipeCache, RecipeNotFound
from ohmycook.catalog import CATALOG, IngredientCatalog
from ohmycook.chat import ChatContextStore
from ohmycook.db import RecordStore
from ohmycook.generation import GenerationClient
from ohmycook.images import ImageSearch
from ohmycook.models import (
    GENERAL_CONTEXT,
    ChatContext,
    ChatMessage,
    Ingredient,
    Lang,
    Recipe,
    RecipeDetail,
    RecipeFilters,
    UserProfile,
)
from ohmycook.pantry import Pantry
from ohmycook.popular import POPULAR
from ohmycook.receipts import ReceiptIngestion
from ohmycook.recommend import RecommendationEngine


logger = logging.getLogger(__name__)


GUEST = "guest"


class Session:
    def __init__(
        self,
        owner: str,
        *,
        llm: GenerationClient,
        images: ImageSearch,
        catalog: IngredientCatalog = CATALOG,
    ) -> None:
        self.owner = owner
        self.llm = llm
        self.catalog = catalog
        self.pantry = Pantry()
        self.profile = UserProfile()
        self.shopping_list = ShoppingList()
        self.saved = SavedRecipes()
        self.cache = RecipeCache(llm)
        self.chats = ChatContextStore(llm)
        self.engine = RecommendationEngine(llm=llm, images=images, cache=self.cache)
        self.receipts = ReceiptIngestion(llm, catalog=catalog)
        self.cache.subscribe(self._on_hydrated)

    def __repr__(self) -> str:
        return f"<Session(owner={self.owner})>"

    def _on_hydrated(self, name: str, detail: RecipeDetail) -> None:
        self.saved.on_hydrated(name, detail)

    def find_recipe(self, name: str) -> Recipe | None:
        return self.cache.get(name) or self.saved.get(name) or POPULAR.get(name)

    async def recommend(
        self,
        *,
        priority_ingredients: Iterable[str] = (),
        filters: RecipeFilters | None = None,
        lang: Lang = Lang.en,
    ) -> list[Recipe]:
        return await self.engine.recommend(
            self.pantry, priority_ingredients, filters, lang
        )

    async def open_recipe(self, name: str, lang: Lang = Lang.en) -> Recipe:
        """The recipe with its detail, from the batch, the saved list or the popular list."""
        if name in self.cache:
            return await self.cache.ensure_hydrated(name, self.pantry.keys(), lang)
        saved = self.saved.get(name)
        if saved is not None:
            return await self.cache.hydrate_detached(saved, self.pantry.keys(), lang)
        popular = POPULAR.get(name)
        if popular is None:
            raise RecipeNotFound(name)
        return popular

    async def scan_receipt(self, image: bytes) -> list[Ingredient]:
        new = await self.receipts.ingest(image, self.pantry)
        return self.pantry.merge(new)

    def open_chat(self, key: str = GENERAL_CONTEXT, lang: Lang = Lang.en) -> ChatContext:
        recipe = None if key == GENERAL_CONTEXT else self.find_recipe(key)
        return self.chats.open(key, recipe=recipe, lang=lang)

    async def ask(
        self,
        text: str,
        *,
        key: str = GENERAL_CONTEXT,
        lang: Lang = Lang.en,
    ) -> ChatMessage:
        recipe = None if key == GENERAL_CONTEXT else self.find_recipe(key)
        return await self.chats.append_and_reply(key, text, self.profile, lang, recipe)

    async def ask_spoken(
        self,
        audio: bytes,
        *,
        key: str = GENERAL_CONTEXT,
        lang: Lang = Lang.en,
    ) -> ChatMessage:
        recipe = None if key == GENERAL_CONTEXT else self.find_recipe(key)
        return await self.chats.append_spoken_and_reply(
            key, audio, self.llm, self.profile, lang, recipe
        )

    def toggle_saved(self, name: str) -> bool:
        recipe = self.find_recipe(name)
        if recipe is None:
            raise RecipeNotFound(name)
        return self.saved.toggle(recipe)

    def to_records(self) -> dict[str, Any]:
        return {
            "ingredients": self.pantry.to_list(),
            "profile": self.profile.to_dict(),
            "recipes": self.cache.to_dict(),
            "chats": self.chats.to_dict(),
            "shopping_list": self.shopping_list.to_list(),
            "saved_recipes": self.saved.to_list(),
        }

    def load_records(self, records: dict[str, Any]) -> None:
        if (data := records.get("ingredients")) is not None:
            self.pantry = Pantry.from_list(data)
        if (data := records.get("profile")) is not None:
            self.profile = UserProfile.from_dict(data)
        if (data := records.get("recipes")) is not None:
            self.cache.load(data)
        if (data := records.get("chats")) is not None:
            self.chats.load(data)
        if (data := records.get("shopping_list")) is not None:
            self.shopping_list = ShoppingList.from_list(data)
        if (data := records.get("saved_recipes")) is not None:
            self.saved = SavedRecipes.from_list(data)


class SessionStore:
    """The arena: owner -> session, backed by a record store."""

    def __init__(
        self,
        store: RecordStore,
        *,
        llm: GenerationClient,
        images: ImageSearch,
    ) -> None:
        self.store = store
        self.llm = llm
        self.images = images
        self._sessions: dict[str, Session] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    async def get(self, owner: str = GUEST) -> Session:
        async with self._locks.setdefault(owner, asyncio.Lock()):
            session = self._sessions.get(owner)
            if session is None:
                session = Session(owner, llm=self.llm, images=self.images)
                records = {}
                for name in await self.store.names(owner):
                    records[name] = await self.store.get(owner, name)
                session.load_records(records)
                logger.info("Loaded %s records for %s.", len(records), owner)
                self._sessions[owner] = session
            return session

    async def save(self, session: Session) -> None:
        for name, value in session.to_records().items():
            await self.store.put(session.owner, name, value)

    async def clear(self, owner: str) -> None:
        for name in await self.store.names(owner):
            await self.store.delete(owner, name)
        session = self._sessions.pop(owner, None)
        if session is not None:
            session.chats.clear()
