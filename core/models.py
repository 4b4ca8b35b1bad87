from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class Source(StrEnum):
    REDDIT = "reddit"
    HACKERNEWS = "hackernews"
    RSS = "rss"
    NEWSAPI = "newsapi"
    GUARDIAN = "guardian"
    WIKINEWS = "wikinews"


class Category(StrEnum):
    TECHNOLOGY = "technology"
    POLITICS = "politics"
    SCIENCE = "science"
    BUSINESS = "business"
    ENTERTAINMENT = "entertainment"
    SPORTS = "sports"
    ESPORTS = "esports"
    WORLD = "world"
    COMMUNITY = "community"
    GENERAL = "general"


SNIPPET_MAX_CHARS = 250
COMMENT_MAX_CHARS = 800
REPLY_MAX_CHARS = 500


@dataclass
class Item:
    """A single piece of content normalised from any source."""

    id: str  # prefixed by source tag, e.g. "r_abc123"
    title: str
    url: str
    permalink: str
    source: str
    source_detail: str  # channel: "r/worldnews", "BBC News", ...
    score: int = 0
    comments: int = 0
    created: int = 0  # epoch milliseconds
    category: str = Category.GENERAL.value
    snippet: str = ""
    thumbnail: str | None = None
    author: str = ""
    domain: str = ""
    local: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "permalink": self.permalink,
            "source": self.source,
            "sourceDetail": self.source_detail,
            "score": self.score,
            "comments": self.comments,
            "created": self.created,
            "category": self.category,
            "snippet": self.snippet,
            "thumbnail": self.thumbnail,
            "author": self.author,
            "domain": self.domain,
            "local": self.local,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Item:
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title") or "",
            url=data.get("url") or "",
            permalink=data.get("permalink") or "",
            source=data.get("source") or "",
            source_detail=data.get("sourceDetail") or "",
            score=int(data.get("score") or 0),
            comments=int(data.get("comments") or 0),
            created=int(data.get("created") or 0),
            category=data.get("category") or Category.GENERAL.value,
            snippet=data.get("snippet") or "",
            thumbnail=data.get("thumbnail"),
            author=data.get("author") or "",
            domain=data.get("domain") or "",
            local=bool(data.get("local", False)),
        )


@dataclass
class Comment:
    """One node of a discussion thread."""

    author: str
    text: str
    score: int
    time: int  # epoch milliseconds
    replies: list[Comment] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "author": self.author,
            "text": self.text,
            "score": self.score,
            "time": self.time,
            "replies": [r.to_dict() for r in self.replies],
        }


@dataclass
class FeedResult:
    """Outcome of one aggregate fetch, before response serialisation."""

    items: list[Item]
    counts: dict[str, int]
    duration_seconds: float
