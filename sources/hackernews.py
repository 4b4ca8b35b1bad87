"""Hacker News adapter using the Firebase item API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from core.categorizer import categorize
from core.models import Item, Source
from core.text import domain_of
from sources.base import BaseSource, get_json

log = logging.getLogger(__name__)

HN_API_URL = "https://hacker-news.firebaseio.com/v0"
HN_ITEM_URL = "https://news.ycombinator.com/item?id={id}"


async def fetch_hn_item(client: httpx.AsyncClient, item_id: int | str) -> dict[str, Any] | None:
    data = await get_json(client, f"{HN_API_URL}/item/{item_id}.json")
    return data if isinstance(data, dict) else None


def _to_item(story: dict[str, Any]) -> Item:
    discussion = HN_ITEM_URL.format(id=story["id"])
    title = story.get("title") or ""
    return Item(
        id=f"hn_{story['id']}",
        title=title,
        url=story.get("url") or discussion,
        permalink=discussion,
        source=Source.HACKERNEWS,
        source_detail="Hacker News",
        score=int(story.get("score") or 0),
        comments=int(story.get("descendants") or 0),
        created=int((story.get("time") or 0) * 1000),
        category=categorize("technology", title),
        author=story.get("by") or "",
        domain=domain_of(story.get("url"), default="news.ycombinator.com"),
    )


class HackerNewsSource(BaseSource):
    source_name = Source.HACKERNEWS

    def cache_key(self, type: str = "top", limit: int = 30) -> str:
        return f"hn:{type}:{limit}"

    async def _fetch(
        self, client: httpx.AsyncClient, type: str = "top", limit: int = 30
    ) -> list[Item]:
        ids = await get_json(client, f"{HN_API_URL}/{type}stories.json")
        if not isinstance(ids, list):
            raise ValueError(f"unexpected {type}stories payload")

        results = await asyncio.gather(
            *(fetch_hn_item(client, story_id) for story_id in ids[: int(limit)]),
            return_exceptions=True,
        )
        items = [
            _to_item(story)
            for story in results
            if isinstance(story, dict) and story.get("title") and story.get("id")
        ]
        log.info("hackernews/%s: %d stories fetched", type, len(items))
        return items
