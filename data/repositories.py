from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert as sqlite_upsert
from sqlalchemy.ext.asyncio import AsyncSession

from data.schema import DBBookmark, DBUserPrefs


def _prefs_to_dict(p: DBUserPrefs) -> dict[str, Any]:
    return {
        "subreddits": list(p.subreddits or []),
        "custom_subs": list(p.custom_subs or []),
        "interests": dict(p.interests or {}),
        "settings": dict(p.settings or {}),
        "extras": dict(p.extras or {}),
        "updated_at": p.updated_at.isoformat() if p.updated_at else None,
    }


class SyncRepository:
    """Remote copy of one account's personalization snapshot.

    Writes replace the whole snapshot; there is no field-level merge.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._s = session

    async def get_snapshot(self, user_id: str) -> dict[str, Any]:
        prefs = await self._s.get(DBUserPrefs, user_id)
        q = (
            select(DBBookmark)
            .where(DBBookmark.user_id == user_id)
            .order_by(DBBookmark.position.asc())
        )
        bookmarks = (await self._s.execute(q)).scalars().all()
        return {
            "prefs": _prefs_to_dict(prefs) if prefs is not None else None,
            "bookmarks": [dict(b.data) for b in bookmarks],
        }

    async def replace_snapshot(
        self,
        user_id: str,
        *,
        subreddits: list[str],
        custom_subs: list[str],
        interests: dict[str, int],
        settings: dict[str, Any],
        extras: dict[str, Any],
        bookmarks: list[dict[str, Any]],
    ) -> int:
        """Upsert the prefs row, then delete-and-reinsert bookmarks.

        Returns the number of bookmarks stored.
        """
        now = datetime.now(timezone.utc)
        values = {
            "subreddits": subreddits,
            "custom_subs": custom_subs,
            "interests": interests,
            "settings": settings,
            "extras": extras,
            "updated_at": now,
        }
        stmt = (
            sqlite_upsert(DBUserPrefs)
            .values(user_id=user_id, **values)
            .on_conflict_do_update(index_elements=["user_id"], set_=values)
        )
        await self._s.execute(stmt)

        await self._s.execute(delete(DBBookmark).where(DBBookmark.user_id == user_id))
        seen: set[str] = set()
        rows: list[DBBookmark] = []
        for bm in bookmarks:
            item_id = str(bm.get("id") or "")
            if not item_id or item_id in seen:
                continue
            seen.add(item_id)
            rows.append(
                DBBookmark(
                    user_id=user_id,
                    item_id=item_id,
                    position=len(rows),
                    data=bm,
                    created_at=now,
                )
            )
        self._s.add_all(rows)
        return len(rows)
