from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from api.deps import get_orchestrator
from core.models import Source
from sources.orchestrator import FeedOrchestrator

router = APIRouter(prefix="/api", tags=["feed"])


@router.get("/feed")
async def aggregate_feed(
    category: str | None = None,
    search: str | None = None,
    country: str | None = None,
    subs: str | None = None,
    orchestrator: FeedOrchestrator = Depends(get_orchestrator),
):
    items = await orchestrator.aggregate(
        category=category, search=search, country=country, subs=subs
    )
    return [i.to_dict() for i in items]


# ── per-source passthrough ──────────────────────────────────────────


@router.get("/reddit")
async def reddit(
    subreddit: str = "popular",
    sort: str = Query("hot", pattern="^(hot|new|top|rising|controversial)$"),
    limit: int = Query(25, ge=1, le=100),
    t: str = Query("day", pattern="^(hour|day|week|month|year|all)$"),
    orchestrator: FeedOrchestrator = Depends(get_orchestrator),
):
    items = await orchestrator.fetch_source(
        Source.REDDIT, subreddit=subreddit, sort=sort, limit=limit, t=t
    )
    return [i.to_dict() for i in items]


@router.get("/hackernews")
async def hackernews(
    type: str = Query("top", pattern="^(top|new|best|ask|show)$"),
    limit: int = Query(30, ge=1, le=100),
    orchestrator: FeedOrchestrator = Depends(get_orchestrator),
):
    items = await orchestrator.fetch_source(Source.HACKERNEWS, type=type, limit=limit)
    return [i.to_dict() for i in items]


@router.get("/news")
async def news(
    q: str = "",
    category: str = "general",
    country: str = "us",
    limit: int = Query(20, ge=1, le=100),
    orchestrator: FeedOrchestrator = Depends(get_orchestrator),
):
    items = await orchestrator.fetch_source(
        Source.NEWSAPI, q=q, category=category, country=country, limit=limit
    )
    return [i.to_dict() for i in items]


@router.get("/rss")
async def rss(orchestrator: FeedOrchestrator = Depends(get_orchestrator)):
    items = await orchestrator.fetch_source(Source.RSS)
    return [i.to_dict() for i in items]


@router.get("/guardian")
async def guardian(
    section: str = "",
    limit: int = Query(25, ge=1, le=50),
    orchestrator: FeedOrchestrator = Depends(get_orchestrator),
):
    items = await orchestrator.fetch_source(Source.GUARDIAN, section=section, limit=limit)
    return [i.to_dict() for i in items]


@router.get("/wikinews")
async def wikinews(orchestrator: FeedOrchestrator = Depends(get_orchestrator)):
    items = await orchestrator.fetch_source(Source.WIKINEWS)
    return [i.to_dict() for i in items]


# ── discussion threads ──────────────────────────────────────────────


@router.get("/comments")
async def comments(
    source: str | None = None,
    permalink: str | None = None,
    id: str | None = None,
    orchestrator: FeedOrchestrator = Depends(get_orchestrator),
):
    found = await orchestrator.fetch_comments(source, permalink=permalink, item_id=id)
    return {"source": source or "unknown", "comments": [c.to_dict() for c in found]}
