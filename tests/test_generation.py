import json
from types import SimpleNamespace
from typing import Any

import httpx
import openai
import pytest

from fakes import FakeImages, overview
from ohmycook.config import Config
from ohmycook.generation import GenerationClient, GenerationFailure
from ohmycook.images import ImageSearch, resolve_images
from ohmycook.models import (
    ChatMessage,
    Difficulty,
    Lang,
    Recipe,
    RecipeFilters,
    Role,
    UserProfile,
)


OVERVIEW = {
    "recipeName": "양파 계란 볶음",
    "englishRecipeName": "Stir-fried Onion and Egg",
    "description": "간단한 반찬",
    "cuisine": "Korean",
    "cookTime": 15,
    "difficulty": "easy",
    "spiciness": 7,
    "calories": 250,
    "servings": 2,
    "ingredients": ["양파", "계란"],
    "missingIngredients": ["쪽파"],
    "imageSearchQuery": "onion egg stir fry",
}


class FakeCompletions:
    def __init__(self, *answers: str | Exception) -> None:
        self.answers = list(answers)
        self.calls: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        message = SimpleNamespace(content=answer)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def client_with(*answers: str | Exception) -> tuple[GenerationClient, FakeCompletions]:
    completions = FakeCompletions(*answers)
    fake = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return GenerationClient(openai_client=fake, config=Config()), completions  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_generate_overviews_keeps_missing_ingredients() -> None:
    llm, completions = client_with(json.dumps({"recipes": [OVERVIEW]}))
    got = await llm.generate_overviews(["Onion", "Egg"], ["Egg"], RecipeFilters(), Lang.ko)

    assert len(got) == 1
    recipe = got[0]
    assert recipe.name == "양파 계란 볶음"
    assert recipe.english_name == "Stir-fried Onion and Egg"
    assert recipe.difficulty is Difficulty.easy
    assert recipe.spiciness == 5
    assert recipe.ingredient_names == ["양파", "계란"]
    assert recipe.missing_ingredient_names == ["쪽파"]
    assert recipe.image_url is None

    call = completions.calls[0]
    assert call["response_format"] == {"type": "json_object"}
    prompt = call["messages"][0]["content"]
    assert "Onion, Egg" in prompt
    assert "Korean" in prompt
    assert "Max Cook Time: 45 minutes" in prompt


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "answer",
    (
        "not json",
        json.dumps({"recipes": []}),
        json.dumps({"recipes": [{"recipeName": "Half a recipe"}]}),
        openai.APITimeoutError(request=httpx.Request("POST", "https://api.openai.com")),
    ),
)
async def test_generate_overviews_failures(answer: str | Exception) -> None:
    llm, _ = client_with(answer)
    with pytest.raises(GenerationFailure):
        await llm.generate_overviews(["Onion"], [], RecipeFilters(), Lang.en)


@pytest.mark.asyncio
async def test_hydrate_detail() -> None:
    payload = {
        "ingredients": ["1/2 Onion", "2 Eggs"],
        "instructions": ["Slice.", "Fry."],
        "substitutions": [{"missing": "Scallion", "substitute": "Onion"}],
    }
    llm, completions = client_with(json.dumps(payload))
    got = await llm.hydrate_detail("Onion Omelette", ["Onion", "Egg"], Lang.en)

    assert got.ingredients_with_quantities == ["1/2 Onion", "2 Eggs"]
    assert got.instructions == ["Slice.", "Fry."]
    assert got.substitutions[0].substitute == "Onion"
    assert '"Onion Omelette"' in completions.calls[0]["messages"][0]["content"]


@pytest.mark.asyncio
async def test_extract_ingredients_from_image() -> None:
    llm, completions = client_with(json.dumps({"ingredients": ["Egg", "Green Onion"]}))
    got = await llm.extract_ingredients_from_image(b"\xff\xd8receipt")

    assert got == ["Egg", "Green Onion"]
    content = completions.calls[0]["messages"][0]["content"]
    assert content[0]["image_url"]["url"].startswith("data:image/jpeg;base64,")


@pytest.mark.asyncio
async def test_chat_sends_history_and_recipe() -> None:
    llm, completions = client_with("Use less gochugaru.")
    history = [
        ChatMessage(Role.model, "Hi!"),
        ChatMessage(Role.user, "Is it spicy?"),
        ChatMessage(Role.model, "A little."),
    ]
    recipe = Recipe(overview("Kimchi Jjigae", ingredients=["Kimchi", "Tofu"]))

    got = await llm.chat(history, "Less spicy?", UserProfile(), Lang.en, recipe)

    assert got == "Use less gochugaru."
    messages = completions.calls[0]["messages"]
    assert [m["role"] for m in messages] == [
        "system",
        "assistant",
        "user",
        "assistant",
        "user",
    ]
    assert "Kimchi Jjigae" in messages[0]["content"]
    assert "Kimchi, Tofu" in messages[0]["content"]
    assert messages[-1]["content"] == "Less spicy?"


@pytest.mark.asyncio
async def test_chat_failure() -> None:
    llm, _ = client_with(
        openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com"))
    )
    with pytest.raises(GenerationFailure):
        await llm.chat([], "Hello", UserProfile(), Lang.en)


@pytest.mark.asyncio
async def test_transcribe() -> None:
    class Transcriptions:
        async def create(self, **kwargs: Any) -> SimpleNamespace:
            assert kwargs["model"] == "whisper-1"
            assert kwargs["file"] == ("speech.webm", b"audio")
            return SimpleNamespace(text="  How long do I boil it? ")

    fake = SimpleNamespace(audio=SimpleNamespace(transcriptions=Transcriptions()))
    llm = GenerationClient(openai_client=fake, config=Config())  # type: ignore[arg-type]

    assert await llm.transcribe(b"audio") == "How long do I boil it?"


@pytest.mark.asyncio
async def test_image_search_reads_first_link() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["q"] == "bibimbap"
        assert request.url.params["searchType"] == "image"
        return httpx.Response(200, json={"items": [{"link": "https://img/1.jpg"}]})

    search = ImageSearch(
        api_key="key",
        cx="cx",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    assert await search.search("bibimbap") == "https://img/1.jpg"


@pytest.mark.asyncio
async def test_image_search_degrades_to_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    search = ImageSearch(
        api_key="key",
        cx="cx",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    assert await search.search("bibimbap") is None
    assert await ImageSearch().search("bibimbap") is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    (
        ["not", "an", "object"],
        {"items": [None]},
        {"items": "nope"},
        {"items": [{"link": 42}]},
        {},
    ),
)
async def test_odd_search_bodies_leave_the_image_unset(body: Any) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    search = ImageSearch(
        api_key="key",
        cx="cx",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    got = await resolve_images([overview("Bibimbap"), overview("Japchae")], search)

    assert [o.image_url for o in got] == [None, None]


@pytest.mark.asyncio
async def test_resolve_images_falls_back_to_english_name() -> None:
    images = FakeImages(
        {
            "bulgogi dish": "https://img/bulgogi.jpg",
            "Japchae": "https://img/japchae.jpg",
        }
    )
    overviews = [
        overview("Bulgogi"),
        overview("잡채", english_name="Japchae", query="glass noodles"),
        overview("Mystery Stew"),
    ]

    got = await resolve_images(overviews, images)  # type: ignore[arg-type]

    assert [o.image_url for o in got] == [
        "https://img/bulgogi.jpg",
        "https://img/japchae.jpg",
        None,
    ]
    assert images.queries.count("glass noodles") == 1
    assert images.queries.count("Japchae") == 1
    assert "Bulgogi" not in images.queries
