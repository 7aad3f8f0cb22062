import asyncio

import pytest

from fakes import FakeGeneration, overview
from ohmycook.chat import ChatContextStore
from ohmycook.generation import GenerationFailure
from ohmycook.models import (
    GENERAL_CONTEXT,
    ChatMessage,
    Lang,
    Recipe,
    Role,
    UserProfile,
)


PROFILE = UserProfile()


def store_with() -> tuple[ChatContextStore, FakeGeneration]:
    llm = FakeGeneration()
    return ChatContextStore(llm), llm  # type: ignore[arg-type]


class FakeTranscriber:
    def __init__(self, text: str) -> None:
        self.text = text
        self.heard: list[bytes] = []

    async def transcribe(self, audio: bytes) -> str:
        self.heard.append(audio)
        return self.text


@pytest.mark.asyncio
async def test_messages_alternate() -> None:
    store, llm = store_with()

    reply = await store.append_and_reply(GENERAL_CONTEXT, "Hi chef", PROFILE, Lang.en)
    await store.append_and_reply(GENERAL_CONTEXT, "What's for dinner?", PROFILE, Lang.en)

    assert reply == ChatMessage(Role.model, "reply to Hi chef")
    context = store.get(GENERAL_CONTEXT)
    assert context is not None
    assert [m.role for m in context.messages] == [
        Role.user,
        Role.model,
        Role.user,
        Role.model,
    ]
    history, message, _ = llm.chat_calls[1]
    assert message == "What's for dinner?"
    assert [m.text for m in history] == ["Hi chef", "reply to Hi chef"]


@pytest.mark.asyncio
async def test_second_send_waits_for_first_reply() -> None:
    store, llm = store_with()
    llm.chat_gate = asyncio.Event()

    first = asyncio.create_task(
        store.append_and_reply(GENERAL_CONTEXT, "one", PROFILE, Lang.en)
    )
    second = asyncio.create_task(
        store.append_and_reply(GENERAL_CONTEXT, "two", PROFILE, Lang.en)
    )
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    assert len(llm.chat_calls) == 1

    llm.chat_gate.set()
    await asyncio.gather(first, second)

    context = store.get(GENERAL_CONTEXT)
    assert [m.text for m in context.messages] == [  # type: ignore[union-attr]
        "one",
        "reply to one",
        "two",
        "reply to two",
    ]


@pytest.mark.asyncio
async def test_keys_are_independent() -> None:
    store, llm = store_with()
    llm.chat_gate = asyncio.Event()

    general = asyncio.create_task(
        store.append_and_reply(GENERAL_CONTEXT, "hello", PROFILE, Lang.en)
    )
    recipe = asyncio.create_task(
        store.append_and_reply("Bibimbap", "how long?", PROFILE, Lang.en)
    )
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    assert len(llm.chat_calls) == 2

    llm.chat_gate.set()
    await asyncio.gather(general, recipe)
    assert len(store.get("Bibimbap").messages) == 2  # type: ignore[union-attr]
    assert len(store.get(GENERAL_CONTEXT).messages) == 2  # type: ignore[union-attr]


@pytest.mark.asyncio
async def test_failed_reply_rolls_back_the_user_message() -> None:
    store, llm = store_with()
    await store.append_and_reply(GENERAL_CONTEXT, "hello", PROFILE, Lang.en)
    llm.chat_failures = 1

    with pytest.raises(GenerationFailure):
        await store.append_and_reply(GENERAL_CONTEXT, "again", PROFILE, Lang.en)

    context = store.get(GENERAL_CONTEXT)
    assert [m.text for m in context.messages] == ["hello", "reply to hello"]  # type: ignore[union-attr]


@pytest.mark.asyncio
async def test_empty_message_is_rejected() -> None:
    store, llm = store_with()
    with pytest.raises(ValueError):
        await store.append_and_reply(GENERAL_CONTEXT, "   ", PROFILE, Lang.en)
    assert llm.chat_calls == []


@pytest.mark.asyncio
async def test_opening_a_recipe_seeds_a_greeting() -> None:
    store, _ = store_with()
    await store.append_and_reply(GENERAL_CONTEXT, "hello", PROFILE, Lang.en)
    recipe = Recipe(overview("Kimchi Jjigae"))

    context = store.open_recipe(recipe, lang=Lang.en)

    assert context.key == "Kimchi Jjigae"
    assert context.messages == [
        ChatMessage(
            Role.model,
            "Hi! Let's talk about Kimchi Jjigae. Ask me anything about it.",
        )
    ]
    assert len(store.get(GENERAL_CONTEXT).messages) == 2  # type: ignore[union-attr]

    again = store.open_recipe(recipe, lang=Lang.en)
    assert len(again.messages) == 1


def test_greeting_uses_the_display_name() -> None:
    store, _ = store_with()
    recipe = Recipe(overview("김치찌개 (Kimchi Stew)"))

    context = store.open_recipe(recipe, lang=Lang.ko)

    assert "김치찌개에 대해" in context.messages[0].text
    assert "(" not in context.messages[0].text


def test_opening_the_general_context_adds_nothing() -> None:
    store, _ = store_with()
    assert store.open().is_empty


@pytest.mark.asyncio
async def test_reply_after_clear_is_dropped() -> None:
    store, llm = store_with()
    llm.chat_gate = asyncio.Event()

    call = asyncio.create_task(
        store.append_and_reply(GENERAL_CONTEXT, "hello", PROFILE, Lang.en)
    )
    await asyncio.sleep(0)
    store.clear()
    llm.chat_gate.set()
    reply = await call

    assert reply.text == "reply to hello"
    assert GENERAL_CONTEXT not in store


@pytest.mark.asyncio
async def test_spoken_input() -> None:
    store, llm = store_with()
    transcriber = FakeTranscriber("How spicy is it?")

    reply = await store.append_spoken_and_reply(
        "Bibimbap", b"audio", transcriber, PROFILE, Lang.en
    )

    assert transcriber.heard == [b"audio"]
    assert reply.text == "reply to How spicy is it?"
    assert store.get("Bibimbap").messages[0].text == "How spicy is it?"  # type: ignore[union-attr]


@pytest.mark.asyncio
async def test_round_trip() -> None:
    store, llm = store_with()
    await store.append_and_reply(GENERAL_CONTEXT, "hello", PROFILE, Lang.en)
    store.open_recipe(Recipe(overview("Bibimbap")))

    other = ChatContextStore(llm)  # type: ignore[arg-type]
    other.load(store.to_dict())

    assert other.keys() == [GENERAL_CONTEXT, "Bibimbap"]
    assert other.get("Bibimbap").messages == store.get("Bibimbap").messages  # type: ignore[union-attr]
