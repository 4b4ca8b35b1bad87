from __future__ import annotations

import re
from collections.abc import Iterable

from core.models import Item

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")

DEDUP_KEY_LENGTH = 60


def dedup_key(title: str | None) -> str:
    """Normalised title fingerprint shared by near-identical headlines."""
    return _NON_ALNUM_RE.sub("", (title or "").lower())[:DEDUP_KEY_LENGTH]


def deduplicate(items: Iterable[Item]) -> list[Item]:
    """Keep the first item per dedup key; drop untitled items."""
    seen: set[str] = set()
    kept: list[Item] = []
    for item in items:
        key = dedup_key(item.title)
        if not key or key in seen:
            continue
        seen.add(key)
        kept.append(item)
    return kept
