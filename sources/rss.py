from __future__ import annotations

import asyncio
import calendar
import logging
import re
from typing import Any

import feedparser
import httpx

from config.settings import settings
from core.categorizer import categorize
from core.models import SNIPPET_MAX_CHARS, Item, Source
from core.text import fingerprint, now_ms, strip_html
from sources.base import BaseSource
from sources.cache import TTLCache

log = logging.getLogger(__name__)

# Outlets fetched by the syndication adapter.  ``category`` is the channel
# hint passed to the categorizer for every entry of that outlet.
RSS_FEEDS: list[dict[str, str]] = [
    {"url": "https://feeds.bbci.co.uk/news/rss.xml", "name": "BBC News", "category": "world"},
    {"url": "https://rss.cnn.com/rss/edition.rss", "name": "CNN", "category": "world"},
    {"url": "https://techcrunch.com/feed/", "name": "TechCrunch", "category": "technology"},
    {"url": "https://www.theverge.com/rss/index.xml", "name": "The Verge", "category": "technology"},
    {
        "url": "https://feeds.arstechnica.com/arstechnica/index",
        "name": "Ars Technica",
        "category": "technology",
    },
    {
        "url": "https://rss.nytimes.com/services/xml/rss/nyt/HomePage.xml",
        "name": "NY Times",
        "category": "world",
    },
]

WIKINEWS_FEED_URL = "https://en.wikinews.org/w/index.php?title=Special:NewsFeed&feed=rss"

_WIKI_ID_RE = re.compile(r"[^a-z0-9]", re.I)


def _entry_created(entry: Any) -> int:
    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if not parsed:
        return now_ms()
    return calendar.timegm(parsed) * 1000


def _entry_thumbnail(entry: Any) -> str | None:
    for media in entry.get("media_thumbnail") or []:
        if media.get("url"):
            return media["url"]
    for enclosure in entry.get("enclosures") or []:
        if enclosure.get("href"):
            return enclosure["href"]
    return None


async def fetch_feed_entries(client: httpx.AsyncClient, url: str) -> list[Any]:
    resp = await client.get(url, timeout=settings.HTTP_TIMEOUT)
    resp.raise_for_status()
    parsed = feedparser.parse(resp.content)
    if parsed.bozo and not parsed.entries:
        raise ValueError(f"unparseable feed: {parsed.get('bozo_exception')!r}")
    return list(parsed.entries)


class RssSource(BaseSource):
    """Fixed bundle of outlet feeds, fetched concurrently."""

    source_name = Source.RSS

    def __init__(self, cache: TTLCache, feeds: list[dict[str, str]] | None = None) -> None:
        super().__init__(cache)
        self._feeds = RSS_FEEDS if feeds is None else feeds

    def cache_key(self, per_feed: int = 10) -> str:
        return f"rss:all:{per_feed}"

    async def _fetch(self, client: httpx.AsyncClient, per_feed: int = 10) -> list[Item]:
        results = await asyncio.gather(
            *(self._fetch_outlet(client, feed, per_feed) for feed in self._feeds),
            return_exceptions=True,
        )
        items: list[Item] = []
        for feed, result in zip(self._feeds, results):
            if isinstance(result, BaseException):
                log.warning("RSS %s failed: %r", feed["name"], result)
                continue
            items.extend(result)
        return items

    async def _fetch_outlet(
        self, client: httpx.AsyncClient, feed: dict[str, str], per_feed: int
    ) -> list[Item]:
        entries = await fetch_feed_entries(client, feed["url"])
        items: list[Item] = []
        for entry in entries[:per_feed]:
            link = entry.get("link") or ""
            title = entry.get("title") or ""
            items.append(
                Item(
                    id=f"rss_{fingerprint(link or feed['url'] + title)}",
                    title=title,
                    url=link,
                    permalink=link,
                    source=Source.RSS,
                    source_detail=feed["name"],
                    created=_entry_created(entry),
                    category=categorize(feed.get("category", ""), title),
                    snippet=strip_html(entry.get("summary"), SNIPPET_MAX_CHARS),
                    thumbnail=_entry_thumbnail(entry),
                    author=entry.get("author") or "",
                    domain=feed["name"],
                )
            )
        log.info("Scraped %s: %d articles", feed["name"], len(items))
        return items


class WikinewsSource(BaseSource):
    source_name = Source.WIKINEWS

    def cache_key(self, limit: int = 20) -> str:
        return f"wikinews:{limit}"

    async def _fetch(self, client: httpx.AsyncClient, limit: int = 20) -> list[Item]:
        entries = await fetch_feed_entries(client, WIKINEWS_FEED_URL)
        items: list[Item] = []
        for entry in entries[:limit]:
            title = entry.get("title") or ""
            raw_id = entry.get("id") or entry.get("link") or title
            items.append(
                Item(
                    id="wiki_" + _WIKI_ID_RE.sub("_", raw_id)[:80],
                    title=title,
                    url=entry.get("link") or "",
                    permalink=entry.get("link") or "",
                    source=Source.WIKINEWS,
                    source_detail="WikiNews",
                    created=_entry_created(entry),
                    category=categorize("world", title),
                    snippet=strip_html(entry.get("summary"), SNIPPET_MAX_CHARS),
                    author=entry.get("author") or "",
                    domain="en.wikinews.org",
                )
            )
        log.info("wikinews: %d articles fetched", len(items))
        return items
