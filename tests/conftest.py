"""Shared fixtures: item factory, fixed clock, mock HTTP transports."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from api.identity import IdentityProvider
from core.models import Item, Source

NOW_MS = 1_700_000_000_000
HOUR_MS = 3_600_000


def make_item(
    id: str = "r_1",
    title: str = "Some headline",
    *,
    source: str = Source.REDDIT,
    source_detail: str = "r/technology",
    score: int = 0,
    comments: int = 0,
    age_hours: float = 1.0,
    category: str = "technology",
    snippet: str = "",
) -> Item:
    return Item(
        id=id,
        title=title,
        url=f"https://example.com/{id}",
        permalink=f"https://example.com/{id}",
        source=source,
        source_detail=source_detail,
        score=score,
        comments=comments,
        created=int(NOW_MS - age_hours * HOUR_MS),
        category=category,
        snippet=snippet,
    )


def reddit_post(sub: str, post_id: str, title: str, **extra) -> dict:
    data = {
        "id": post_id,
        "subreddit": sub,
        "title": title,
        "url": f"https://example.com/{post_id}",
        "permalink": f"/r/{sub}/comments/{post_id}/slug/",
        "score": 100,
        "num_comments": 10,
        "created_utc": NOW_MS / 1000 - 3600,
        "author": "someone",
        "domain": "example.com",
        "thumbnail": "self",
        "selftext": "",
    }
    data.update(extra)
    return {"kind": "t3", "data": data}


def reddit_listing(*posts: dict) -> dict:
    return {"kind": "Listing", "data": {"children": list(posts)}}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording)


@pytest.fixture
def item_factory():
    return make_item


# ── identity provider stub ─────────────────────────────


ALICE = {"id": "alice", "email": "alice@example.com"}
ALICE_TOKEN = "tok-alice"
BAD_LOGIN = {"error": "invalid_grant", "error_description": "Invalid login credentials"}


def identity_handler(request: httpx.Request) -> httpx.Response:
    """GoTrue-shaped responses for a single account (alice / hunter2)."""
    if request.headers.get("apikey") != "anon":
        return httpx.Response(401, json={"message": "No API key found in request"})

    path = request.url.path
    auth = request.headers.get("authorization")
    if path == "/auth/v1/signup":
        return httpx.Response(200, json={"id": "new-user", "email": "new@example.com"})
    if path == "/auth/v1/token":
        body = json.loads(request.content)
        if body.get("password") != "hunter2":
            return httpx.Response(400, json=BAD_LOGIN)
        return httpx.Response(200, json={"access_token": ALICE_TOKEN, "user": ALICE})
    if path == "/auth/v1/logout":
        return httpx.Response(204)
    if path == "/auth/v1/user":
        if auth != f"Bearer {ALICE_TOKEN}":
            return httpx.Response(401, json={"msg": "invalid JWT"})
        return httpx.Response(200, json=ALICE)
    return httpx.Response(404)


@pytest.fixture
def identity():
    return IdentityProvider(
        "https://auth.example", "anon", transport=httpx.MockTransport(identity_handler)
    )
