"""
Catalog Data Hook

Loads the product catalog (categories with their products) and reports it as
a CatalogState with loading and error flags, which is all the catalog view
needs to decide what to render.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

import anyio.to_thread
import httpx

from goblin_store import config
from goblin_store.cart.models import Product
from goblin_store.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)


@dataclass
class Category:
    """Named group of products shown together on the catalog page."""

    name: str
    items: List[Product] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        if not isinstance(data, dict) or not isinstance(data.get("name"), str):
            raise ValueError("category must be an object with a name")
        items = data.get("items", [])
        if not isinstance(items, list):
            raise ValueError("category items must be a list")
        return cls(name=data["name"], items=[Product.from_dict(item) for item in items])


@dataclass
class CatalogState:
    """What the catalog hook reports: data plus loading/error flags."""

    categories: List[Category] = field(default_factory=list)
    is_loading: bool = False
    error: bool = False


def parse_catalog(data: Any) -> List[Category]:
    """
    Parse a catalog payload.

    Accepts ``{"categories": [...]}`` or a bare list of categories.
    """
    if isinstance(data, dict):
        data = data.get("categories")
    if not isinstance(data, list):
        raise ValueError("catalog payload has no category list")
    return [Category.from_dict(item) for item in data]


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


class CatalogLoader:
    """
    Fetches the catalog from a URL (httpx) or a JSON file.

    ``state`` starts as loading; ``load()`` settles it to either the parsed
    categories or the error flag. Failures are logged, never raised.
    """

    def __init__(
        self,
        source: str = config.CATALOG_SOURCE,
        timeout: float = config.CATALOG_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.source = source
        self.timeout = timeout
        self._client = client
        self.state = CatalogState(is_loading=True)

    async def _fetch_remote(self) -> Any:
        if self._client is not None:
            response = await self._client.get(self.source)
            response.raise_for_status()
            return response.json()

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(self.source)
            response.raise_for_status()
            return response.json()

    def _read_file(self) -> Any:
        return json.loads(Path(self.source).read_text(encoding="utf-8"))

    async def load(self) -> CatalogState:
        try:
            if _is_url(self.source):
                payload = await self._fetch_remote()
            else:
                payload = await anyio.to_thread.run_sync(self._read_file)
            categories = parse_catalog(payload)
        except (httpx.HTTPError, OSError, ValueError) as e:
            logger.error(f"Failed to load catalog from {sanitize_string_for_logging(self.source, 120)}: {e}")
            self.state = CatalogState(categories=[], is_loading=False, error=True)
            return self.state

        logger.debug(f"Loaded catalog with {len(categories)} categories")
        self.state = CatalogState(categories=categories, is_loading=False, error=False)
        return self.state


async def use_products() -> CatalogState:
    """FastAPI dependency: load the catalog for the current request."""
    return await CatalogLoader().load()
