import base64
import json
import os
from typing import Any

import httpx
import openai
from openai.types.chat import ChatCompletionMessageParam


OPENAI_TOKEN = os.environ.get("OPENAI_API_KEY")
TIMEOUT = 60 * 2


def openai_client_factory(
    token: str | None = None,
    *,
    timeout: float = TIMEOUT,
) -> openai.AsyncOpenAI:
    token = OPENAI_TOKEN if token is None else token
    return openai.AsyncOpenAI(
        api_key=token,
        timeout=timeout,
        max_retries=0,
        http_client=httpx.AsyncClient(timeout=timeout),
    )


def image_content(data: bytes, *, mime: str = "image/jpeg") -> dict[str, Any]:
    url = f"data:{mime};base64,{base64.b64encode(data).decode('utf-8')}"
    return {"type": "image_url", "image_url": {"url": url}}


async def quick_chat(
    messages: list[ChatCompletionMessageParam],
    *,
    openai_client: openai.AsyncOpenAI,
    model: str,
    temperature: float | None = None,
) -> str:
    kwargs: dict[str, Any] = {} if temperature is None else {"temperature": temperature}
    resp = await openai_client.chat.completions.create(
        model=model,
        messages=messages,
        **kwargs,
    )
    ans = resp.choices[0].message.content or ""
    return ans.strip()


async def json_chat(
    messages: list[ChatCompletionMessageParam],
    *,
    openai_client: openai.AsyncOpenAI,
    model: str,
    temperature: float | None = None,
) -> Any:
    """Like `quick_chat` but the model must answer with a JSON object.

    Raises `json.JSONDecodeError` when it does not.
    """
    kwargs: dict[str, Any] = {} if temperature is None else {"temperature": temperature}
    resp = await openai_client.chat.completions.create(
        model=model,
        messages=messages,
        response_format={"type": "json_object"},
        **kwargs,
    )
    return json.loads(resp.choices[0].message.content or "")


async def transcribe(
    audio: bytes,
    *,
    openai_client: openai.AsyncOpenAI,
    model: str = "whisper-1",
    filename: str = "speech.webm",
) -> str:
    resp = await openai_client.audio.transcriptions.create(
        file=(filename, audio),
        model=model,
    )
    return resp.text.strip()
