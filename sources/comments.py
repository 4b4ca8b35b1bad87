"""Discussion threads: top-level comments with up to three replies each."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import urlparse

import httpx

from core.models import COMMENT_MAX_CHARS, REPLY_MAX_CHARS, Comment, Source
from core.text import strip_html
from sources.base import get_json
from sources.hackernews import fetch_hn_item
from sources.reddit import REDDIT_BASE_URL

log = logging.getLogger(__name__)

MAX_REDDIT_COMMENTS = 15
MAX_HN_COMMENTS = 12
MAX_REPLIES = 3


def _reddit_path(permalink: str) -> str:
    """Accept either ``/r/x/comments/...`` or a full reddit.com URL."""
    path = urlparse(permalink).path if permalink.startswith("http") else permalink
    path = path.rstrip("/")
    if not path.startswith("/"):
        path = "/" + path
    return path


def _reddit_node(data: dict[str, Any], limit: int) -> Comment:
    return Comment(
        author=data.get("author") or "[deleted]",
        text=(data.get("body") or "")[:limit],
        score=int(data.get("score") or 0),
        time=int((data.get("created_utc") or 0) * 1000),
    )


async def fetch_reddit_comments(client: httpx.AsyncClient, permalink: str) -> list[Comment]:
    data = await get_json(
        client,
        f"{REDDIT_BASE_URL}{_reddit_path(permalink)}.json",
        params={"limit": MAX_REDDIT_COMMENTS, "depth": 2, "sort": "top"},
    )
    if not isinstance(data, list) or len(data) < 2:
        return []

    comments: list[Comment] = []
    for child in data[1].get("data", {}).get("children", [])[:MAX_REDDIT_COMMENTS]:
        if child.get("kind") != "t1":
            continue
        node = _reddit_node(child["data"], COMMENT_MAX_CHARS)
        replies = child["data"].get("replies")
        if isinstance(replies, dict):
            for reply in replies.get("data", {}).get("children", [])[:MAX_REPLIES]:
                if reply.get("kind") == "t1":
                    node.replies.append(_reddit_node(reply["data"], REPLY_MAX_CHARS))
        comments.append(node)
    return comments


def _hn_node(data: dict[str, Any], limit: int) -> Comment:
    return Comment(
        author=data.get("by") or "anon",
        text=strip_html(data.get("text"), limit),
        score=int(data.get("score") or 0),
        time=int((data.get("time") or 0) * 1000),
    )


def _alive(result: Any) -> bool:
    return isinstance(result, dict) and not result.get("deleted") and not result.get("dead")


async def _hn_thread(client: httpx.AsyncClient, kid_id: int) -> Comment | None:
    kid = await fetch_hn_item(client, kid_id)
    if not _alive(kid):
        return None
    node = _hn_node(kid, COMMENT_MAX_CHARS)
    replies = await asyncio.gather(
        *(fetch_hn_item(client, rid) for rid in (kid.get("kids") or [])[:MAX_REPLIES]),
        return_exceptions=True,
    )
    node.replies = [_hn_node(r, REPLY_MAX_CHARS) for r in replies if _alive(r)]
    return node


async def fetch_hn_comments(client: httpx.AsyncClient, item_id: str) -> list[Comment]:
    story = await fetch_hn_item(client, item_id)
    if story is None:
        return []
    threads = await asyncio.gather(
        *(_hn_thread(client, kid) for kid in (story.get("kids") or [])[:MAX_HN_COMMENTS]),
        return_exceptions=True,
    )
    return [t for t in threads if isinstance(t, Comment)]


async def fetch_comments(
    client: httpx.AsyncClient,
    source: str | None,
    *,
    permalink: str | None = None,
    item_id: str | None = None,
) -> list[Comment]:
    """Never raises; unsupported combinations and failures give ``[]``."""
    try:
        if source == Source.REDDIT and permalink:
            return await fetch_reddit_comments(client, permalink)
        if source == Source.HACKERNEWS and item_id:
            # Accept the prefixed item id as well as the bare HN id.
            return await fetch_hn_comments(client, item_id.removeprefix("hn_"))
    except Exception as exc:
        log.warning("comments fetch failed for %s: %r", source, exc)
    return []
