import asyncio

import httpx
from conftest import RecordingTransport

from sources.base import new_client
from sources.comments import fetch_comments


def t1(author, body, replies=None, score=1):
    data = {"author": author, "body": body, "score": score, "created_utc": 1_700_000_000}
    data["replies"] = (
        {"kind": "Listing", "data": {"children": replies}} if replies is not None else ""
    )
    return {"kind": "t1", "data": data}


def run(transport, source, **kwargs):
    async def go():
        async with new_client(transport) as client:
            return await fetch_comments(client, source, **kwargs)

    return asyncio.run(go())


def test_reddit_thread_shape():
    replies = [t1(f"r{n}", f"reply {n}") for n in range(5)]
    thread = [
        {"kind": "Listing", "data": {"children": []}},
        {"kind": "Listing", "data": {"children": [
            t1("alice", "x" * 2000, replies=replies, score=42),
            {"kind": "more", "data": {"children": ["zzz"]}},
            t1("bob", "short"),
        ]}},
    ]
    transport = RecordingTransport(lambda r: httpx.Response(200, json=thread))

    comments = run(
        transport, "reddit", permalink="https://reddit.com/r/news/comments/abc/slug/"
    )

    assert [c.author for c in comments] == ["alice", "bob"]
    assert len(comments[0].text) == 800
    assert comments[0].score == 42
    assert comments[0].time == 1_700_000_000_000
    assert [r.author for r in comments[0].replies] == ["r0", "r1", "r2"]
    assert transport.requests[0].url.path == "/r/news/comments/abc/slug.json"


def test_hackernews_thread_skips_dead_and_deleted():
    items = {
        "100": {"id": 100, "kids": [1, 2, 3]},
        "1": {"id": 1, "by": "a", "text": "<p>Hello &amp; welcome</p>", "time": 10,
              "kids": [11, 12]},
        "2": {"id": 2, "deleted": True},
        "3": {"id": 3, "by": "c", "text": "gone", "dead": True},
        "11": {"id": 11, "by": "b", "text": "reply", "time": 11},
        "12": {"id": 12, "deleted": True},
    }

    def handler(request):
        key = request.url.path.rsplit("/", 1)[1].removesuffix(".json")
        return httpx.Response(200, json=items[key])

    comments = run(RecordingTransport(handler), "hackernews", item_id="hn_100")

    assert len(comments) == 1
    assert comments[0].author == "a"
    assert comments[0].text == "Hello & welcome"
    assert comments[0].time == 10_000
    assert [r.author for r in comments[0].replies] == ["b"]


def test_unsupported_or_failing_source_gives_empty_list():
    transport = RecordingTransport(lambda r: httpx.Response(500))
    assert run(transport, "rss", permalink="/x") == []
    assert run(transport, "reddit") == []
    assert run(transport, "reddit", permalink="/r/x/comments/1/") == []
    assert run(transport, "hackernews", item_id="5") == []
