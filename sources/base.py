from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from config.settings import settings
from core.models import Item
from sources.cache import TTLCache

log = logging.getLogger(__name__)


class BaseSource(ABC):
    """One external source, normalised into canonical items.

    ``fetch`` is the public entry point: it consults the cache and never
    raises.  Subclasses implement ``_fetch`` and ``cache_key``.
    """

    source_name: str

    def __init__(self, cache: TTLCache) -> None:
        self._cache = cache

    @abstractmethod
    def cache_key(self, **params: Any) -> str:
        """Key encoding every parameter that affects the output."""
        ...

    @abstractmethod
    async def _fetch(self, client: httpx.AsyncClient, **params: Any) -> list[Item]:
        ...

    @property
    def available(self) -> bool:
        return True

    async def fetch(self, client: httpx.AsyncClient, **params: Any) -> list[Item]:
        key = self.cache_key(**params)
        hit = self._cache.get(key)
        if hit is not None:
            return list(hit)

        try:
            items = await self._fetch(client, **params)
        except Exception as exc:
            log.warning("%s fetch failed (%s): %r", self.source_name, key, exc)
            return []

        self._cache.set(key, items)
        return list(items)


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> Any:
    resp = await client.get(
        url,
        params=params,
        headers={"Accept": "application/json", **(headers or {})},
        timeout=settings.HTTP_TIMEOUT,
    )
    resp.raise_for_status()
    return resp.json()


def new_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": settings.USER_AGENT},
        follow_redirects=True,
        timeout=settings.HTTP_TIMEOUT,
        transport=transport,
    )
