"""Engagement normalisation and the source-agnostic default ordering."""

from __future__ import annotations

import math
from collections.abc import Iterable

from core.models import Item, Source
from core.text import now_ms as _now_ms

# Log-scale multipliers so raw Reddit upvotes cannot drown out other sources.
REDDIT_ENGAGEMENT_SCALE = 15.0
HACKERNEWS_ENGAGEMENT_SCALE = 18.0
# Sources without a native vote signal (RSS, editorial APIs).
BASELINE_ENGAGEMENT = 30.0
COMMENT_WEIGHT = 2

AGE_EXPONENT = 1.3
AGE_OFFSET_HOURS = 2.0

_MS_PER_HOUR = 3_600_000

_LOG_SCALES = {
    Source.REDDIT.value: REDDIT_ENGAGEMENT_SCALE,
    Source.HACKERNEWS.value: HACKERNEWS_ENGAGEMENT_SCALE,
}


def engagement(item: Item) -> float:
    scale = _LOG_SCALES.get(item.source)
    if scale is None:
        return BASELINE_ENGAGEMENT
    raw = max(item.score, 0) + max(item.comments, 0) * COMMENT_WEIGHT
    return math.log10(raw + 1) * scale


def age_hours(item: Item, now_ms: int) -> float:
    # Clock skew can put an item slightly in the future; treat it as brand new.
    return max(now_ms - item.created, 0) / _MS_PER_HOUR


def recency_decay(item: Item, now_ms: int, exponent: float = AGE_EXPONENT) -> float:
    return (age_hours(item, now_ms) + AGE_OFFSET_HOURS) ** exponent


def coarse_score(item: Item, now_ms: int, exponent: float = AGE_EXPONENT) -> float:
    return (engagement(item) + 1) / recency_decay(item, now_ms, exponent)


def coarse_rank(
    items: Iterable[Item],
    *,
    now_ms: int | None = None,
    limit: int | None = None,
    exponent: float = AGE_EXPONENT,
) -> list[Item]:
    """Sort by descending coarse score (stable on ties) and truncate."""
    now = _now_ms() if now_ms is None else now_ms
    ranked = sorted(items, key=lambda i: coarse_score(i, now, exponent), reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return ranked
