"""The Guardian open-platform adapter."""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from config.settings import settings
from core.categorizer import categorize
from core.models import SNIPPET_MAX_CHARS, Item, Source
from core.text import iso_to_ms, strip_html
from sources.base import BaseSource, get_json
from sources.cache import TTLCache

log = logging.getLogger(__name__)

GUARDIAN_SEARCH_URL = "https://content.guardianapis.com/search"

_ID_UNSAFE_RE = re.compile(r"[^a-z0-9]", re.I)


def _to_item(article: dict[str, Any]) -> Item:
    fields = article.get("fields") or {}
    title = article.get("webTitle") or ""
    url = article.get("webUrl") or ""
    return Item(
        id="guardian_" + _ID_UNSAFE_RE.sub("_", article.get("id") or ""),
        title=title,
        url=url,
        permalink=url,
        source=Source.GUARDIAN,
        source_detail="The Guardian",
        created=iso_to_ms(article.get("webPublicationDate")),
        category=categorize(article.get("sectionId") or "", title),
        snippet=strip_html(fields.get("trailText"), SNIPPET_MAX_CHARS),
        thumbnail=fields.get("thumbnail") or None,
        domain="theguardian.com",
    )


class GuardianSource(BaseSource):
    source_name = Source.GUARDIAN

    def __init__(self, cache: TTLCache, api_key: str | None = None) -> None:
        super().__init__(cache)
        self._api_key = api_key or settings.GUARDIAN_API_KEY

    def cache_key(self, section: str = "", limit: int = 25) -> str:
        return f"guardian:{section}:{limit}"

    async def _fetch(
        self, client: httpx.AsyncClient, section: str = "", limit: int = 25
    ) -> list[Item]:
        params: dict[str, Any] = {
            "api-key": self._api_key,
            "page-size": limit,
            "show-fields": "thumbnail,trailText",
            "order-by": "newest",
        }
        if section:
            params["section"] = section

        data = await get_json(client, GUARDIAN_SEARCH_URL, params=params)
        results = (data or {}).get("response", {}).get("results")
        if not isinstance(results, list):
            raise ValueError("unexpected guardian payload")

        items = [_to_item(a) for a in results if isinstance(a, dict)]
        log.info("guardian/%s: %d articles fetched", section or "all", len(items))
        return items
