"""Reddit adapter using the public JSON listing API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.categorizer import categorize
from core.models import SNIPPET_MAX_CHARS, Item, Source
from sources.base import BaseSource, get_json

log = logging.getLogger(__name__)

REDDIT_BASE_URL = "https://www.reddit.com"

# Listing thumbnails that are placeholders rather than image URLs.
_PLACEHOLDER_THUMBNAILS = frozenset({"self", "default", "nsfw", "spoiler", "image", ""})


def _thumbnail(post: dict[str, Any]) -> str | None:
    thumb = post.get("thumbnail") or ""
    if thumb in _PLACEHOLDER_THUMBNAILS or not thumb.startswith("http"):
        return None
    return thumb


def _to_item(post: dict[str, Any]) -> Item:
    subreddit = post.get("subreddit", "")
    title = post.get("title") or ""
    return Item(
        id=f"r_{post.get('id', '')}",
        title=title,
        url=post.get("url") or "",
        permalink=f"https://reddit.com{post.get('permalink', '')}",
        source=Source.REDDIT,
        source_detail=f"r/{subreddit}",
        score=int(post.get("score") or 0),
        comments=int(post.get("num_comments") or 0),
        created=int((post.get("created_utc") or 0) * 1000),
        category=categorize(subreddit, title),
        snippet=(post.get("selftext") or "")[:SNIPPET_MAX_CHARS],
        thumbnail=_thumbnail(post),
        author=post.get("author") or "",
        domain=post.get("domain") or "",
    )


class RedditSource(BaseSource):
    source_name = Source.REDDIT

    def cache_key(
        self, subreddit: str = "popular", sort: str = "hot", limit: int = 25, t: str = "day"
    ) -> str:
        return f"reddit:{subreddit}:{sort}:{limit}:{t}"

    async def _fetch(
        self,
        client: httpx.AsyncClient,
        subreddit: str = "popular",
        sort: str = "hot",
        limit: int = 25,
        t: str = "day",
    ) -> list[Item]:
        data = await get_json(
            client,
            f"{REDDIT_BASE_URL}/r/{subreddit}/{sort}.json",
            params={"limit": limit, "t": t, "raw_json": 1},
        )
        children = (data or {}).get("data", {}).get("children")
        if not isinstance(children, list):
            raise ValueError(f"unexpected response shape for r/{subreddit}")

        items = [
            _to_item(child["data"])
            for child in children
            if isinstance(child, dict)
            and isinstance(child.get("data"), dict)
            and not child["data"].get("over_18")
            and not child["data"].get("stickied")
        ]
        log.info("r/%s: %d posts fetched", subreddit, len(items))
        return items
