"""Multi-source fan-out behind the aggregate feed endpoint."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
from collections.abc import Awaitable, Sequence
from typing import Any

import httpx

from config.settings import settings
from core.dedup import deduplicate
from core.models import Comment, FeedResult, Item, Source
from core.ranking import coarse_rank
from sources.base import BaseSource, new_client
from sources.cache import TTLCache
from sources.comments import fetch_comments
from sources.guardian import GuardianSource
from sources.hackernews import HackerNewsSource
from sources.newsapi import NEWSAPI_CATEGORIES, NewsApiSource
from sources.reddit import RedditSource
from sources.rss import RssSource, WikinewsSource

log = logging.getLogger(__name__)

# Country-specific subreddits merged in as local news.
COUNTRY_SUBS: dict[str, list[str]] = {
    "us": ["news", "politics", "usa"],
    "gb": ["ukpolitics", "unitedkingdom", "CasualUK"],
    "ca": ["canada", "canadapolitics", "onguardforthee"],
    "au": ["australia", "AustralianPolitics"],
    "de": ["de", "germany"],
    "fr": ["france", "French"],
    "in": ["india", "IndiaSpeaks", "indianews"],
    "jp": ["japan", "newsokur"],
    "br": ["brasil", "BrazilNews"],
    "za": ["southafrica"],
    "ng": ["Nigeria"],
    "ae": ["dubai", "UAE"],
    "sg": ["singapore"],
    "kr": ["korea"],
    "mx": ["mexico"],
    "it": ["italy"],
    "es": ["spain", "es"],
    "nl": ["thenetherlands"],
    "se": ["sweden"],
    "pl": ["Polska", "poland"],
    "ph": ["Philippines", "phinvest", "CasualPH", "PHClassifieds"],
}


def parse_channels(subs: str | None, default: Sequence[str], cap: int) -> list[str]:
    if not subs:
        return list(default)
    return [s.strip() for s in subs.split(",") if s.strip()][:cap]


def batched(seq: Sequence[str], size: int) -> list[list[str]]:
    return [list(seq[i : i + size]) for i in range(0, len(seq), size)]


class FeedOrchestrator:
    """Runs every adapter for one aggregate request.

    Reddit is rate limited, so its channels go out in fixed-size batches
    with a pause in between.  Every other source races alongside.
    """

    def __init__(
        self,
        cache: TTLCache | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        batch_size: int | None = None,
        batch_delay: float | None = None,
        sleep=asyncio.sleep,
    ) -> None:
        self.cache = cache if cache is not None else TTLCache(settings.CACHE_TTL_SECONDS)
        self._transport = transport
        self._batch_size = max(1, batch_size or settings.REDDIT_BATCH_SIZE)
        self._batch_delay = settings.REDDIT_BATCH_DELAY if batch_delay is None else batch_delay
        self._sleep = sleep

        self.sources: dict[str, BaseSource] = {
            Source.REDDIT: RedditSource(self.cache),
            Source.HACKERNEWS: HackerNewsSource(self.cache),
            Source.RSS: RssSource(self.cache),
            Source.NEWSAPI: NewsApiSource(self.cache),
            Source.GUARDIAN: GuardianSource(self.cache),
            Source.WIKINEWS: WikinewsSource(self.cache),
        }

    def availability(self) -> dict[str, bool]:
        return {name: src.available for name, src in self.sources.items()}

    # ── rate-limited channels ───────────────────────────────────────

    async def fetch_channels(
        self,
        client: httpx.AsyncClient,
        channels: Sequence[str],
        *,
        limit: int,
    ) -> list[Item]:
        """Fetch subreddits batch by batch; a failed channel adds nothing."""
        reddit = self.sources[Source.REDDIT]
        items: list[Item] = []
        batches = batched(channels, self._batch_size)
        for n, batch in enumerate(batches):
            results = await asyncio.gather(
                *(reddit.fetch(client, subreddit=sub, sort="hot", limit=limit) for sub in batch),
                return_exceptions=True,
            )
            for sub, result in zip(batch, results):
                if isinstance(result, BaseException):
                    log.warning("r/%s: %r", sub, result)
                    continue
                items.extend(result)
            if n + 1 < len(batches):
                await self._sleep(self._batch_delay)
        return items

    async def _fetch_reddit(
        self, client: httpx.AsyncClient, channels: list[str], country: str | None
    ) -> tuple[list[Item], list[Item]]:
        posts = await self.fetch_channels(client, channels, limit=settings.REDDIT_FEED_LIMIT)

        local: list[Item] = []
        if country and country != "auto" and country in COUNTRY_SUBS:
            wanted = [s for s in COUNTRY_SUBS[country] if s not in channels]
            if channels and wanted:
                # Local batches continue the same rate-limited sequence.
                await self._sleep(self._batch_delay)
            fetched = await self.fetch_channels(client, wanted, limit=settings.REDDIT_LOCAL_LIMIT)
            local = [dataclasses.replace(i, local=True) for i in fetched]
        return posts, local

    # ── aggregate ───────────────────────────────────────────────────

    async def _settle(self, name: str, coro: Awaitable[list[Item]]) -> list[Item]:
        try:
            return await coro
        except Exception as exc:
            log.error("[FEED/%s] %r", name, exc)
            return []

    async def collect(
        self,
        *,
        category: str | None = None,
        country: str | None = None,
        subs: str | None = None,
    ) -> FeedResult:
        start = time.monotonic()
        channels = parse_channels(subs, settings.default_subreddits(), settings.REDDIT_MAX_SUBS)
        news_category = category if category in NEWSAPI_CATEGORIES else "general"
        news_country = country if country and country != "auto" else "us"

        async with new_client(self._transport) as client:
            parallel: dict[str, Awaitable[list[Item]]] = {
                Source.HACKERNEWS: self.sources[Source.HACKERNEWS].fetch(
                    client, type="top", limit=settings.HN_FEED_LIMIT
                ),
                Source.RSS: self.sources[Source.RSS].fetch(
                    client, per_feed=settings.RSS_ITEMS_PER_FEED
                ),
                Source.NEWSAPI: self.sources[Source.NEWSAPI].fetch(
                    client,
                    category=news_category,
                    country=news_country,
                    limit=settings.NEWSAPI_LIMIT,
                ),
                Source.GUARDIAN: self.sources[Source.GUARDIAN].fetch(
                    client, limit=settings.GUARDIAN_FEED_LIMIT
                ),
                Source.WIKINEWS: self.sources[Source.WIKINEWS].fetch(
                    client, limit=settings.WIKINEWS_LIMIT
                ),
            }
            *others, (reddit, local) = await asyncio.gather(
                *(self._settle(name, coro) for name, coro in parallel.items()),
                self._fetch_reddit(client, channels, country),
            )

        counts = {name: len(found) for name, found in zip(parallel, others)}
        counts[Source.REDDIT] = len(reddit)
        counts["local"] = len(local)
        items = [i for found in others for i in found] + reddit + local
        log.info(
            "[FEED] %s Total=%d",
            " ".join(f"{k}={v}" for k, v in counts.items()),
            len(items),
        )
        return FeedResult(items=items, counts=counts, duration_seconds=time.monotonic() - start)

    async def aggregate(
        self,
        *,
        category: str | None = None,
        search: str | None = None,
        country: str | None = None,
        subs: str | None = None,
    ) -> list[Item]:
        """Deduplicated, filtered, coarse-ranked feed.  Never raises."""
        try:
            result = await self.collect(category=category, country=country, subs=subs)
            items = deduplicate(result.items)

            if category and category != "all":
                items = [i for i in items if i.category == category]

            if search:
                needle = search.lower()
                items = [
                    i for i in items if needle in i.title.lower() or needle in i.snippet.lower()
                ]

            return coarse_rank(items, limit=settings.FEED_MAX_ITEMS)
        except Exception:
            log.exception("[FEED] aggregate failed, returning empty feed")
            return []

    # ── passthrough ─────────────────────────────────────────────────

    async def fetch_source(self, name: str, **params: Any) -> list[Item]:
        source = self.sources.get(name)
        if source is None:
            return []
        async with new_client(self._transport) as client:
            return await source.fetch(client, **params)

    async def fetch_comments(
        self,
        source: str | None,
        *,
        permalink: str | None = None,
        item_id: str | None = None,
    ) -> list[Comment]:
        async with new_client(self._transport) as client:
            return await fetch_comments(client, source, permalink=permalink, item_id=item_id)
