"""NewsAPI.org adapter (top headlines, or keyword search when ``q`` is set)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from config.settings import settings
from core.categorizer import categorize
from core.models import SNIPPET_MAX_CHARS, Item, Source
from core.text import fingerprint, iso_to_ms, strip_html
from sources.base import BaseSource, get_json
from sources.cache import TTLCache

log = logging.getLogger(__name__)

NEWSAPI_URL = "https://newsapi.org/v2"

# Categories the top-headlines endpoint accepts.
NEWSAPI_CATEGORIES = frozenset(
    {"business", "entertainment", "general", "health", "science", "sports", "technology"}
)


def _to_item(article: dict[str, Any]) -> Item:
    outlet = (article.get("source") or {}).get("name") or ""
    url = article.get("url") or ""
    title = article.get("title") or ""
    return Item(
        id=f"na_{fingerprint(url or title)}",
        title=title,
        url=url,
        permalink=url,
        source=Source.NEWSAPI,
        source_detail=outlet or "News",
        created=iso_to_ms(article.get("publishedAt")),
        category=categorize("", title),
        snippet=strip_html(article.get("description"), SNIPPET_MAX_CHARS),
        thumbnail=article.get("urlToImage") or None,
        author=article.get("author") or "",
        domain=outlet,
    )


class NewsApiSource(BaseSource):
    source_name = Source.NEWSAPI

    def __init__(self, cache: TTLCache, api_key: str | None = None) -> None:
        super().__init__(cache)
        self._api_key = settings.NEWSAPI_KEY if api_key is None else api_key

    @property
    def available(self) -> bool:
        return bool(self._api_key)

    def cache_key(
        self, q: str = "", category: str = "general", country: str = "us", limit: int = 20
    ) -> str:
        return f"news:{q}:{category}:{country}:{limit}"

    async def fetch(self, client: httpx.AsyncClient, **params: Any) -> list[Item]:
        if not self.available:
            return []
        return await super().fetch(client, **params)

    async def _fetch(
        self,
        client: httpx.AsyncClient,
        q: str = "",
        category: str = "general",
        country: str = "us",
        limit: int = 20,
    ) -> list[Item]:
        if q:
            url = f"{NEWSAPI_URL}/everything"
            params: dict[str, Any] = {"q": q, "pageSize": limit, "sortBy": "popularity"}
        else:
            url = f"{NEWSAPI_URL}/top-headlines"
            params = {"category": category, "country": country, "pageSize": limit}
        params["apiKey"] = self._api_key

        data = await get_json(client, url, params=params)
        items = [
            _to_item(a)
            for a in (data or {}).get("articles") or []
            if isinstance(a, dict) and a.get("title") and a["title"] != "[Removed]"
        ]
        log.info("newsapi: %d articles fetched", len(items))
        return items
