"""Local personalization state and the only API allowed to mutate it.

Each namespace is read from storage, modified and written back in one call.
After every write the registered change callback fires (the cloud sync hook),
unless an import is in progress.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from core.models import Category, Item
from personalize.catalog import CatalogEntry, catalog_with_custom, default_subscriptions
from personalize.storage import Storage

log = logging.getLogger(__name__)

LIKE = "like"
DISLIKE = "dislike"
REACTION_TYPES = frozenset({LIKE, DISLIKE})

DEFAULT_SETTINGS: dict[str, Any] = {
    "refreshInterval": 120,
    "country": "auto",
    "sound": False,
    "crtEffect": True,
    "radarSpeed": "normal",
    "avatar": None,
}

NAMESPACES = (
    "bookmarks",
    "reactions",
    "blocked",
    "showLess",
    "interests",
    "subreddits",
    "customSubs",
    "settings",
)

MAX_CHANNEL_NAME = 21
_CHANNEL_MARKER_RE = re.compile(r"^/?r/", re.I)
_CHANNEL_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_]")


def normalize_channel(raw: str | None) -> str | None:
    """``"r/Some-Sub"`` -> ``"SomeSub"``; None when nothing valid is left."""
    clean = _CHANNEL_UNSAFE_RE.sub("", _CHANNEL_MARKER_RE.sub("", (raw or "").strip()))
    if not clean or len(clean) > MAX_CHANNEL_NAME:
        return None
    return clean


@dataclass(frozen=True)
class Reaction:
    type: str
    category: str
    source_detail: str

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "category": self.category, "sourceDetail": self.source_detail}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Reaction:
        return cls(
            type=data.get("type", ""),
            category=data.get("category") or Category.GENERAL.value,
            source_detail=data.get("sourceDetail") or data.get("source") or "",
        )


class PersonalizationStore:
    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self._on_change: Callable[[], None] | None = None
        self._importing = 0

    # ── plumbing ────────────────────────────────────────────────────

    def on_change(self, callback: Callable[[], None] | None) -> None:
        self._on_change = callback

    @property
    def is_importing(self) -> bool:
        return self._importing > 0

    @contextmanager
    def importing(self) -> Iterator[None]:
        """Apply remote state without signalling changes back out."""
        self._importing += 1
        try:
            yield
        finally:
            self._importing -= 1

    def _get(self, key: str, fallback: Any, expected: type) -> Any:
        value = self._storage.get(key)
        if value is None:
            return fallback
        if not isinstance(value, expected):
            log.warning("Ignoring malformed %s (got %s)", key, type(value).__name__)
            return fallback
        return value

    def _set(self, key: str, value: Any) -> None:
        self._storage.set(key, value)
        self._notify()

    def _notify(self) -> None:
        if self._importing or self._on_change is None:
            return
        self._on_change()

    # ── bookmarks ───────────────────────────────────────────────────

    def _bookmark_dicts(self) -> list[dict[str, Any]]:
        return [b for b in self._get("bookmarks", [], list) if isinstance(b, dict)]

    def get_bookmarks(self) -> list[Item]:
        return [Item.from_dict(b) for b in self._bookmark_dicts()]

    def is_bookmarked(self, item_id: str) -> bool:
        return any(b.get("id") == item_id for b in self._bookmark_dicts())

    def add_bookmark(self, item: Item) -> bool:
        bookmarks = self._bookmark_dicts()
        if any(b.get("id") == item.id for b in bookmarks):
            return False
        bookmarks.insert(0, item.to_dict())
        self._set("bookmarks", bookmarks)
        return True

    def remove_bookmark(self, item_id: str) -> None:
        self._set("bookmarks", [b for b in self._bookmark_dicts() if b.get("id") != item_id])

    def clear_bookmarks(self) -> None:
        self._set("bookmarks", [])

    # ── reactions / block / show less ───────────────────────────────

    def get_reactions(self) -> dict[str, Reaction]:
        raw = self._get("reactions", {}, dict)
        return {k: Reaction.from_dict(v) for k, v in raw.items() if isinstance(v, dict)}

    def get_reaction(self, item_id: str) -> str | None:
        reaction = self.get_reactions().get(item_id)
        return reaction.type if reaction else None

    def set_reaction(
        self,
        item_id: str,
        kind: str,
        *,
        category: str | None = None,
        source_detail: str | None = None,
    ) -> None:
        if kind not in REACTION_TYPES:
            raise ValueError(f"unknown reaction type: {kind!r}")
        reactions = self._get("reactions", {}, dict)
        reactions[item_id] = Reaction(
            kind, category or Category.GENERAL.value, source_detail or ""
        ).to_dict()
        self._set("reactions", reactions)

    def like_item(self, item: Item) -> None:
        self.set_reaction(item.id, LIKE, category=item.category, source_detail=item.source_detail)

    def dislike_item(self, item: Item) -> None:
        self.set_reaction(
            item.id, DISLIKE, category=item.category, source_detail=item.source_detail
        )

    def clear_reaction(self, item_id: str) -> None:
        reactions = self._get("reactions", {}, dict)
        if reactions.pop(item_id, None) is not None:
            self._set("reactions", reactions)

    def get_blocked(self) -> set[str]:
        return set(self._get("blocked", [], list))

    def is_blocked(self, item_id: str) -> bool:
        return item_id in self.get_blocked()

    def block_item(self, item_id: str) -> None:
        blocked = self._get("blocked", [], list)
        if item_id not in blocked:
            blocked.append(item_id)
            self._set("blocked", blocked)

    def unblock_item(self, item_id: str) -> None:
        blocked = self._get("blocked", [], list)
        if item_id in blocked:
            self._set("blocked", [x for x in blocked if x != item_id])

    def get_show_less(self) -> set[str]:
        return set(self._get("showLess", [], list))

    def is_muted(self, channel: str) -> bool:
        return channel in self.get_show_less()

    def toggle_show_less(self, channel: str) -> bool:
        """Mute or unmute a channel; returns True when it is now muted."""
        muted = self._get("showLess", [], list)
        if channel in muted:
            self._set("showLess", [x for x in muted if x != channel])
            return False
        muted.append(channel)
        self._set("showLess", muted)
        return True

    # ── interests ───────────────────────────────────────────────────

    def get_interests(self) -> dict[str, int]:
        return dict(self._get("interests", {}, dict))

    def track_click(self, category: str | None) -> None:
        if not category:
            return
        interests = self.get_interests()
        interests[category] = int(interests.get(category, 0)) + 1
        self._set("interests", interests)

    def interest_share(self, category: str) -> float:
        interests = self.get_interests()
        total = sum(interests.values())
        if not total:
            return 0.0
        return interests.get(category, 0) / total

    # ── subscriptions ───────────────────────────────────────────────

    def get_subscriptions(self) -> list[str]:
        subs = self._get("subreddits", None, list)
        return list(subs) if subs is not None else default_subscriptions()

    def set_subscriptions(self, channels: list[str]) -> None:
        self._set("subreddits", list(channels))

    def toggle_subscription(self, channel: str) -> list[str]:
        current = self.get_subscriptions()
        if channel in current:
            current.remove(channel)
        else:
            current.append(channel)
        self._set("subreddits", current)
        return list(current)

    def get_custom_subscriptions(self) -> list[str]:
        return list(self._get("customSubs", [], list))

    def get_catalog(self) -> list[CatalogEntry]:
        """Subscription catalog including this profile's custom channels."""
        return catalog_with_custom(self.get_custom_subscriptions())

    def add_custom_subscription(self, raw_name: str) -> str | None:
        name = normalize_channel(raw_name)
        if name is None:
            return None
        lowered = name.lower()

        current = self.get_subscriptions()
        if not any(s.lower() == lowered for s in current):
            current.append(name)
            self._set("subreddits", current)

        custom = self.get_custom_subscriptions()
        if not any(s.lower() == lowered for s in custom):
            custom.append(name)
            self._set("customSubs", custom)
        return name

    def remove_custom_subscription(self, channel: str) -> None:
        lowered = channel.lower()
        self._set(
            "customSubs", [s for s in self.get_custom_subscriptions() if s.lower() != lowered]
        )
        self._set("subreddits", [s for s in self.get_subscriptions() if s.lower() != lowered])

    # ── settings ────────────────────────────────────────────────────

    def get_settings(self) -> dict[str, Any]:
        return {**DEFAULT_SETTINGS, **self._get("settings", {}, dict)}

    def save_setting(self, key: str, value: Any) -> None:
        stored = self._get("settings", {}, dict)
        stored[key] = value
        self._set("settings", stored)

    # ── snapshot / wipe ─────────────────────────────────────────────

    def export_all(self) -> dict[str, Any]:
        return {
            "subreddits": self.get_subscriptions(),
            "customSubs": self.get_custom_subscriptions(),
            "interests": self.get_interests(),
            "settings": dict(self._get("settings", {}, dict)),
            "bookmarks": self._bookmark_dicts(),
            "reactions": dict(self._get("reactions", {}, dict)),
            "blocked": list(self._get("blocked", [], list)),
            "showLess": list(self._get("showLess", [], list)),
        }

    def import_all(self, data: dict[str, Any]) -> None:
        """Overwrite every namespace present in ``data``; others are kept."""
        for key in NAMESPACES:
            if key in data and data[key] is not None:
                self._set(key, data[key])

    def clear_all(self) -> None:
        for key in NAMESPACES:
            self._storage.remove(key)
