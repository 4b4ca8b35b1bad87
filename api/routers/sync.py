from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from api.deps import current_user, get_database
from api.schemas import SyncSnapshot
from data.database import Database
from data.repositories import SyncRepository

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sync", tags=["sync"])


@router.get("/pull")
async def pull(
    user: dict[str, Any] = Depends(current_user),
    db: Database = Depends(get_database),
):
    async with db.session() as session:
        return await SyncRepository(session).get_snapshot(user["id"])


@router.post("/push")
async def push(
    snapshot: SyncSnapshot,
    user: dict[str, Any] = Depends(current_user),
    db: Database = Depends(get_database),
):
    async with db.session() as session:
        stored = await SyncRepository(session).replace_snapshot(
            user["id"],
            subreddits=snapshot.subreddits,
            custom_subs=snapshot.custom_subs,
            interests=snapshot.interests,
            settings=snapshot.settings,
            extras=snapshot.extras(),
            bookmarks=snapshot.bookmarks,
        )
    log.info("sync push for %s: %d bookmarks", user["id"], stored)
    return {"ok": True}
