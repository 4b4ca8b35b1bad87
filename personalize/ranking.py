"""Per-user re-ranking of the coarse feed."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from core.models import Category, Item
from core.ranking import engagement, recency_decay
from core.text import now_ms as _now_ms
from personalize.store import DISLIKE, LIKE, PersonalizationStore

INTEREST_WEIGHT = 4.0
SUBSCRIPTION_BOOST = 1.3
LIKE_WEIGHT = 0.15
DISLIKE_WEIGHT = 0.25
REACTION_FLOOR = 0.1
SHOW_LESS_MULTIPLIER = 0.2

# Pseudo-categories understood by filter_pool.
ALL_CATEGORY = "all"
LOCAL_CATEGORY = "local"


class SortMode(StrEnum):
    RANKED = "ranked"
    NEWEST = "newest"
    OLDEST = "oldest"


def _channel_name(source_detail: str) -> str:
    return source_detail.removeprefix("r/").lower()


@dataclass(frozen=True)
class RankingProfile:
    """Immutable view of the personalization state used for one ranking pass."""

    interests: Mapping[str, int] = field(default_factory=dict)
    subscriptions: frozenset[str] = frozenset()
    likes: Mapping[str, int] = field(default_factory=dict)
    dislikes: Mapping[str, int] = field(default_factory=dict)
    muted: frozenset[str] = frozenset()
    blocked: frozenset[str] = frozenset()

    @classmethod
    def from_store(cls, store: PersonalizationStore) -> RankingProfile:
        likes: Counter[str] = Counter()
        dislikes: Counter[str] = Counter()
        for reaction in store.get_reactions().values():
            if reaction.type == LIKE:
                likes[reaction.category] += 1
            elif reaction.type == DISLIKE:
                dislikes[reaction.category] += 1
        return cls(
            interests=store.get_interests(),
            subscriptions=frozenset(s.lower() for s in store.get_subscriptions()),
            likes=dict(likes),
            dislikes=dict(dislikes),
            muted=frozenset(store.get_show_less()),
            blocked=frozenset(store.get_blocked()),
        )

    def interest_share(self, category: str) -> float:
        total = sum(self.interests.values())
        if not total:
            return 0.0
        return self.interests.get(category, 0) / total

    def interest_boost(self, category: str) -> float:
        return 1 + INTEREST_WEIGHT * self.interest_share(category)

    def subscription_boost(self, source_detail: str) -> float:
        if _channel_name(source_detail) in self.subscriptions:
            return SUBSCRIPTION_BOOST
        return 1.0

    def reaction_multiplier(self, category: str) -> float:
        return max(
            REACTION_FLOOR,
            1
            + LIKE_WEIGHT * self.likes.get(category, 0)
            - DISLIKE_WEIGHT * self.dislikes.get(category, 0),
        )

    def show_less_multiplier(self, source_detail: str) -> float:
        return SHOW_LESS_MULTIPLIER if source_detail in self.muted else 1.0


def personal_score(item: Item, profile: RankingProfile, now_ms: int) -> float:
    weighted = (
        engagement(item)
        * profile.interest_boost(item.category)
        * profile.subscription_boost(item.source_detail)
        * profile.reaction_multiplier(item.category)
        * profile.show_less_multiplier(item.source_detail)
    )
    return (weighted + 1) / recency_decay(item, now_ms)


def filter_pool(
    items: Iterable[Item],
    *,
    sources: Iterable[str] | None = None,
    category: str = ALL_CATEGORY,
    query: str = "",
) -> list[Item]:
    """Narrow the candidate pool before ranking.

    ``sources`` is the set of enabled sources (None keeps every source).
    Category ``local`` keeps regional items and ``all`` hides community
    posts; other categories match exactly.  ``query`` is matched
    case-insensitively against title, snippet and channel.
    """
    pool = list(items)
    if sources is not None:
        enabled = set(sources)
        pool = [i for i in pool if i.source in enabled]

    if category == LOCAL_CATEGORY:
        pool = [i for i in pool if i.local]
    elif category == ALL_CATEGORY:
        pool = [i for i in pool if i.category != Category.COMMUNITY]
    else:
        pool = [i for i in pool if i.category == category]

    needle = (query or "").strip().lower()
    if needle:
        pool = [
            i
            for i in pool
            if needle in i.title.lower()
            or needle in i.snippet.lower()
            or needle in i.source_detail.lower()
        ]
    return pool


def rank_items(
    items: Iterable[Item],
    profile: RankingProfile,
    mode: str = SortMode.RANKED,
    *,
    now_ms: int | None = None,
) -> list[Item]:
    """Blocked items are removed before any scoring happens."""
    mode = SortMode(mode)
    pool = [i for i in items if i.id not in profile.blocked]

    if mode is SortMode.NEWEST:
        return sorted(pool, key=lambda i: i.created, reverse=True)
    if mode is SortMode.OLDEST:
        return sorted(pool, key=lambda i: i.created)

    now = _now_ms() if now_ms is None else now_ms
    return sorted(pool, key=lambda i: personal_score(i, profile, now), reverse=True)
