import logging
import string
from typing import Iterable, Protocol

from ohmycook.catalog import CATALOG, IngredientCatalog, UnresolvedIngredientName
from ohmycook.generation import GenerationClient
from ohmycook.models import DEFAULT_QUANTITY, Ingredient


logger = logging.getLogger(__name__)


class ImageCapture(Protocol):
    async def capture(self) -> bytes:
        ...


def clean_name(raw: str) -> str:
    return " ".join(raw.split())


def canonical_key(raw: str, catalog: IngredientCatalog = CATALOG) -> str:
    """Catalog key for `raw`, or a title-cased best effort when there is none."""
    cleaned = clean_name(raw)
    try:
        return catalog.require_canonical_key(cleaned)
    except UnresolvedIngredientName:
        logger.info("No catalog entry for %r, keeping it as typed.", cleaned)
        return string.capwords(cleaned)


class ReceiptIngestion:
    def __init__(
        self,
        llm: GenerationClient,
        *,
        catalog: IngredientCatalog = CATALOG,
    ) -> None:
        self.llm = llm
        self.catalog = catalog

    def normalise(
        self,
        raw_names: Iterable[str],
        existing: Iterable[Ingredient],
    ) -> list[Ingredient]:
        held = {i.canonical_key for i in existing}
        new: list[Ingredient] = []
        for raw in raw_names:
            if not clean_name(raw):
                continue
            key = canonical_key(raw, self.catalog)
            if key in held:
                continue
            held.add(key)
            new.append(Ingredient(key, DEFAULT_QUANTITY))
        return new

    async def ingest(
        self,
        image: bytes,
        existing: Iterable[Ingredient],
    ) -> list[Ingredient]:
        """Net-new ingredients found on a receipt. Does not touch `existing`."""
        raw_names = await self.llm.extract_ingredients_from_image(image)
        new = self.normalise(raw_names, existing)
        logger.info("Receipt had %s items, %s new.", len(raw_names), len(new))
        return new

    async def ingest_capture(
        self,
        capture: ImageCapture,
        existing: Iterable[Ingredient],
    ) -> list[Ingredient]:
        return await self.ingest(await capture.capture(), existing)
