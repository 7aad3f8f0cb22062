"""The boundary to the generation service.

One method per round trip. Nothing here retries; anything that goes wrong
comes back as a `GenerationFailure`.
"""

import json
import logging
from typing import Any, Literal

import httpx
import openai
from openai.types.chat import ChatCompletionMessageParam
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ohmycook.aopenai import (
    image_content,
    json_chat,
    openai_client_factory,
    quick_chat,
    transcribe,
)
from ohmycook.config import Config
from ohmycook.models import (
    ChatMessage,
    Difficulty,
    Lang,
    Recipe,
    RecipeDetail,
    RecipeFilters,
    RecipeOverview,
    Role,
    Substitution,
    UserProfile,
)
from ohmycook.prompts import ChefPrompt, DetailPrompt, OverviewPrompt, RECEIPT_PROMPT


logger = logging.getLogger(__name__)


class GenerationFailure(Exception):
    pass


class OverviewPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="recipeName")
    english_name: str = Field(alias="englishRecipeName")
    description: str
    cuisine: str
    cook_time: int = Field(alias="cookTime")
    difficulty: Literal["Easy", "Medium", "Hard"]
    spiciness: int
    calories: int
    servings: int
    ingredients: list[str]
    missing_ingredients: list[str] = Field(default_factory=list, alias="missingIngredients")
    image_search_query: str = Field(default="", alias="imageSearchQuery")

    @field_validator("difficulty", mode="before")
    @classmethod
    def capitalise(cls, v: Any) -> Any:
        return v.strip().capitalize() if isinstance(v, str) else v

    @field_validator("spiciness")
    @classmethod
    def clamp(cls, v: int) -> int:
        return min(5, max(1, v))

    def to_overview(self) -> RecipeOverview:
        return RecipeOverview(
            name=self.name,
            english_name=self.english_name,
            description=self.description,
            cuisine=self.cuisine,
            cook_time_minutes=self.cook_time,
            difficulty=Difficulty(self.difficulty),
            spiciness=self.spiciness,
            calories=self.calories,
            servings=self.servings,
            ingredient_names=list(self.ingredients),
            missing_ingredient_names=list(self.missing_ingredients),
            image_search_query=self.image_search_query,
        )


class OverviewsPayload(BaseModel):
    recipes: list[OverviewPayload]


class SubstitutionPayload(BaseModel):
    missing: str
    substitute: str


class DetailPayload(BaseModel):
    ingredients: list[str]
    instructions: list[str]
    substitutions: list[SubstitutionPayload] = Field(default_factory=list)

    def to_detail(self) -> RecipeDetail:
        return RecipeDetail(
            ingredients_with_quantities=list(self.ingredients),
            instructions=list(self.instructions),
            substitutions=[Substitution(s.missing, s.substitute) for s in self.substitutions],
        )


class IngredientsPayload(BaseModel):
    ingredients: list[str]


def chat_history(history: list[ChatMessage]) -> list[ChatCompletionMessageParam]:
    messages: list[ChatCompletionMessageParam] = []
    for msg in history:
        if msg.role is Role.user:
            messages.append({"role": "user", "content": msg.text})
        else:
            messages.append({"role": "assistant", "content": msg.text})
    return messages


class GenerationClient:
    def __init__(
        self,
        *,
        openai_client: openai.AsyncOpenAI | None = None,
        config: Config | None = None,
    ) -> None:
        self.config = Config() if config is None else config
        self._client = openai_client

    @property
    def client(self) -> openai.AsyncOpenAI:
        if self._client is None:
            self._client = openai_client_factory(timeout=self.config.request_timeout)
        return self._client

    async def _json(
        self,
        messages: list[ChatCompletionMessageParam],
        *,
        model: str,
        temperature: float | None = None,
    ) -> Any:
        try:
            return await json_chat(
                messages,
                openai_client=self.client,
                model=model,
                temperature=temperature,
            )
        except (openai.OpenAIError, httpx.HTTPError) as e:
            raise GenerationFailure(f"Generation service error: {e}") from e
        except json.JSONDecodeError as e:
            raise GenerationFailure(f"Malformed generation payload: {e}") from e

    async def generate_overviews(
        self,
        ingredient_names: list[str],
        priority_names: list[str],
        filters: RecipeFilters,
        lang: Lang,
    ) -> list[RecipeOverview]:
        prompt = OverviewPrompt(
            ingredients=ingredient_names,
            priority_ingredients=priority_names,
            filters=filters,
            lang=lang,
            count=self.config.recipe_count,
        )
        data = await self._json(
            [{"role": "user", "content": str(prompt)}],
            model=self.config.overview_model,
            temperature=0.7,
        )
        try:
            payload = OverviewsPayload.model_validate(data)
        except ValidationError as e:
            raise GenerationFailure(f"Malformed recipe overviews: {e}") from e

        if not payload.recipes:
            raise GenerationFailure("The generation service returned no recipes.")
        if len(payload.recipes) != self.config.recipe_count:
            logger.warning(
                "Asked for %s recipes, got %s.",
                self.config.recipe_count,
                len(payload.recipes),
            )
        return [r.to_overview() for r in payload.recipes]

    async def hydrate_detail(
        self,
        recipe_name: str,
        ingredient_names: list[str],
        lang: Lang,
    ) -> RecipeDetail:
        prompt = DetailPrompt(recipe_name=recipe_name, ingredients=ingredient_names, lang=lang)
        data = await self._json(
            [{"role": "user", "content": str(prompt)}],
            model=self.config.detail_model,
            temperature=0.5,
        )
        try:
            return DetailPayload.model_validate(data).to_detail()
        except ValidationError as e:
            raise GenerationFailure(f"Malformed recipe detail: {e}") from e

    async def extract_ingredients_from_image(self, image: bytes) -> list[str]:
        data = await self._json(
            [
                {
                    "role": "user",
                    "content": [
                        image_content(image),  # type: ignore[list-item]
                        {"type": "text", "text": RECEIPT_PROMPT},
                    ],
                }
            ],
            model=self.config.vision_model,
        )
        try:
            return IngredientsPayload.model_validate(data).ingredients
        except ValidationError as e:
            raise GenerationFailure(f"Malformed receipt payload: {e}") from e

    async def chat(
        self,
        history: list[ChatMessage],
        message: str,
        profile: UserProfile,
        lang: Lang,
        recipe_context: Recipe | None = None,
    ) -> str:
        system = ChefPrompt(profile=profile, lang=lang, recipe=recipe_context)
        messages: list[ChatCompletionMessageParam] = [
            {"role": "system", "content": str(system)},
            *chat_history(history),
            {"role": "user", "content": message},
        ]
        try:
            ans = await quick_chat(
                messages,
                openai_client=self.client,
                model=self.config.chat_model,
            )
        except (openai.OpenAIError, httpx.HTTPError) as e:
            raise GenerationFailure(f"Generation service error: {e}") from e
        if not ans:
            raise GenerationFailure("The chef had nothing to say.")
        return ans

    async def transcribe(self, audio: bytes) -> str:
        """Speech to text, for spoken chat input."""
        try:
            text = await transcribe(
                audio,
                openai_client=self.client,
                model=self.config.transcription_model,
            )
        except (openai.OpenAIError, httpx.HTTPError) as e:
            raise GenerationFailure(f"Transcription error: {e}") from e
        if not text:
            raise GenerationFailure("Nothing was heard.")
        return text
