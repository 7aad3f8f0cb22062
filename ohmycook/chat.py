import asyncio
import logging
from typing import Any, Protocol

from ohmycook.generation import GenerationClient, GenerationFailure
from ohmycook.messages import t
from ohmycook.models import (
    GENERAL_CONTEXT,
    ChatContext,
    ChatMessage,
    Lang,
    Recipe,
    Role,
    UserProfile,
)


logger = logging.getLogger(__name__)


class EmptyMessage(ValueError):
    pass


class AudioTranscriber(Protocol):
    async def transcribe(self, audio: bytes) -> str:
        ...


class ChatContextStore:
    """Chat histories keyed by context: the general chat or a recipe name.

    Sends on one key are serialised by a per-key lock, so a second message is
    only dispatched once the reply to the first is in. Different keys do not
    wait on each other.
    """

    def __init__(self, llm: GenerationClient) -> None:
        self.llm = llm
        self._contexts: dict[str, ChatContext] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._contexts

    def keys(self) -> list[str]:
        return list(self._contexts)

    def get(self, key: str) -> ChatContext | None:
        return self._contexts.get(key)

    def get_or_create(self, key: str) -> ChatContext:
        context = self._contexts.get(key)
        if context is None:
            context = ChatContext(key)
            self._contexts[key] = context
        return context

    def open(
        self,
        key: str = GENERAL_CONTEXT,
        *,
        recipe: Recipe | None = None,
        lang: Lang = Lang.en,
    ) -> ChatContext:
        """Enter a context. Coming from a recipe with no history yet seeds a greeting."""
        context = self.get_or_create(key)
        if recipe is not None and context.is_empty:
            greeting = t("recipe_greeting", lang, recipe_name=recipe.display_name)
            context.messages.append(ChatMessage(Role.model, greeting))
        return context

    def open_recipe(self, recipe: Recipe, *, lang: Lang = Lang.en) -> ChatContext:
        return self.open(recipe.name, recipe=recipe, lang=lang)

    async def append_and_reply(
        self,
        key: str,
        text: str,
        profile: UserProfile,
        lang: Lang,
        recipe_context: Recipe | None = None,
    ) -> ChatMessage:
        if not text.strip():
            raise EmptyMessage("Empty message.")

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            context = self.get_or_create(key)
            history = list(context.messages)
            user_msg = ChatMessage(Role.user, text)
            context.messages.append(user_msg)

            try:
                reply = await self.llm.chat(history, text, profile, lang, recipe_context)
            except GenerationFailure:
                logger.warning("Chat reply failed for %r.", key)
                if context.messages and context.messages[-1] is user_msg:
                    context.messages.pop()
                raise

            model_msg = ChatMessage(Role.model, reply)
            if self._contexts.get(key) is not context:
                logger.info("Dropping reply for cleared context %r.", key)
                return model_msg
            context.messages.append(model_msg)
            return model_msg

    async def append_spoken_and_reply(
        self,
        key: str,
        audio: bytes,
        transcriber: AudioTranscriber,
        profile: UserProfile,
        lang: Lang,
        recipe_context: Recipe | None = None,
    ) -> ChatMessage:
        text = await transcriber.transcribe(audio)
        return await self.append_and_reply(key, text, profile, lang, recipe_context)

    def clear(self) -> None:
        self._contexts = {}

    def to_dict(self) -> dict[str, Any]:
        return {key: context.to_dict() for key, context in self._contexts.items()}

    def load(self, data: dict[str, Any]) -> None:
        self._contexts = {key: ChatContext.from_dict(c) for key, c in data.items()}


async def main():
    from rich import print

    store = ChatContextStore(GenerationClient())
    profile = UserProfile()
    print(t("chef_greeting"))
    while True:
        msg = input("Qu: ")
        if msg.lower() in ("q", "quit", "exit"):
            break
        try:
            reply = await store.append_and_reply(GENERAL_CONTEXT, msg, profile, Lang.en)
        except GenerationFailure as e:
            print(f"[red]{e}[/red]")
            continue
        print(reply.text)
        print()


if __name__ == "__main__":
    asyncio.run(main())
