import asyncio
import logging

import httpx

from ohmycook.config import Config
from ohmycook.models import RecipeOverview


logger = logging.getLogger(__name__)


SEARCH_URL = "https://www.googleapis.com/customsearch/v1"


class ImageSearch:
    """Google custom search, images only. Returns None rather than raising."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        cx: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 20,
    ) -> None:
        self.api_key = api_key
        self.cx = cx
        self._client = http_client
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: Config) -> "ImageSearch":
        return cls(api_key=config.google_api_key, cx=config.google_search_cx)

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def search(self, query: str) -> str | None:
        if not query.strip():
            return None
        if not (self.api_key and self.cx):
            logger.warning("Missing Google search api key or cx.")
            return None

        params = {
            "key": self.api_key,
            "cx": self.cx,
            "q": query,
            "searchType": "image",
            "num": 1,
            "safe": "off",
        }
        try:
            resp = await self.client.get(SEARCH_URL, params=params)
            resp.raise_for_status()
            body = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Image search failed for %r: %s", query, e)
            return None

        items = body.get("items") if isinstance(body, dict) else None
        if not isinstance(items, list) or not items or not isinstance(items[0], dict):
            return None
        link = items[0].get("link")
        return link if isinstance(link, str) and link else None

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()


async def resolve_image(overview: RecipeOverview, images: ImageSearch) -> RecipeOverview:
    url = await images.search(overview.image_search_query)
    if not url and overview.english_name:
        url = await images.search(overview.english_name)
    overview.image_url = url or None
    return overview


async def resolve_images(
    overviews: list[RecipeOverview],
    images: ImageSearch,
) -> list[RecipeOverview]:
    """Look up every image at once and return when all of them have settled."""
    coros = [resolve_image(o, images) for o in overviews]
    return list(await asyncio.gather(*coros))
