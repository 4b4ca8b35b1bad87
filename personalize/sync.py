"""Mirrors personalization state to the signed-in account.

Push replaces the whole remote snapshot (last writer wins).  Pull overwrites
local preferences and merges bookmarks.  Pushes are debounced: each local
change restarts a quiet-period timer and only the last one fires.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Any

import httpx

from personalize.client import SentinelAPIError, SentinelClient
from personalize.store import PersonalizationStore

log = logging.getLogger(__name__)

QUIET_PERIOD_SECONDS = 2.0


class SyncState(StrEnum):
    GUEST = "guest"
    IDLE = "idle"
    PUSHING = "pushing"
    PULLING = "pulling"


class SyncStatus(StrEnum):
    SYNCED = "synced"
    ERROR = "error"


class Debouncer:
    """Cancel-and-restart timer around an async callback."""

    def __init__(self, delay: float, callback: Callable[[], Awaitable[Any]]) -> None:
        self.delay = delay
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> bool:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            log.warning("No running event loop; sync push not scheduled")
            return False
        self.cancel()
        self._handle = loop.call_later(self.delay, self._fire)
        return True

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._task = asyncio.ensure_future(self._callback())

    async def flush(self) -> None:
        """Run a pending callback now instead of waiting out the delay."""
        if self._handle is not None:
            self.cancel()
            await self._callback()
        elif self._task is not None and not self._task.done():
            await self._task


class CloudSyncEngine:
    def __init__(
        self,
        store: PersonalizationStore,
        client: SentinelClient,
        *,
        quiet_period: float = QUIET_PERIOD_SECONDS,
        include_local_only: bool = False,
    ) -> None:
        self._store = store
        self._client = client
        self._include_local_only = include_local_only
        self._debouncer = Debouncer(quiet_period, self.push)
        self._token: str | None = None
        self.user: dict[str, Any] | None = None
        self.state = SyncState.GUEST
        self.status: SyncStatus | None = None
        store.on_change(self._on_local_change)

    @property
    def authenticated(self) -> bool:
        return self._token is not None and self.user is not None

    @property
    def push_pending(self) -> bool:
        return self._debouncer.pending

    def _on_local_change(self) -> None:
        if not self.authenticated:
            return
        self._debouncer.schedule()

    # ── session ─────────────────────────────────────────────────────

    async def sign_up(self, email: str, password: str) -> dict[str, Any]:
        return await self._client.sign_up(email, password)

    async def sign_in(self, email: str, password: str) -> dict[str, Any]:
        """Raises SentinelAPIError with the provider's body on failure."""
        data = await self._client.sign_in(email, password)
        token = data.get("access_token")
        user = data.get("user")
        if token and user:
            self._start_session(token, user)
            await self.pull()
        return data

    async def restore_session(self, token: str) -> bool:
        """Re-validate a saved token; pulls on success, stays guest otherwise."""
        try:
            data = await self._client.who_am_i(token)
        except (SentinelAPIError, httpx.HTTPError) as exc:
            log.info("Saved session rejected: %s", exc)
            return False
        user = data.get("user", data) if isinstance(data, dict) else None
        if not user or not user.get("id"):
            return False
        self._start_session(token, user)
        await self.pull()
        return True

    async def sign_out(self) -> None:
        token = self._token
        self._debouncer.cancel()
        self._token = None
        self.user = None
        self.state = SyncState.GUEST
        if token is None:
            return
        try:
            await self._client.sign_out(token)
        except (SentinelAPIError, httpx.HTTPError) as exc:
            log.info("Server sign-out failed (ignored): %s", exc)

    async def change_password(self, password: str) -> dict[str, Any]:
        if self._token is None:
            raise SentinelAPIError(401, {"error": "Not signed in"})
        return await self._client.change_password(self._token, password)

    def _start_session(self, token: str, user: dict[str, Any]) -> None:
        self._token = token
        self.user = user
        self.state = SyncState.IDLE

    # ── transfer ────────────────────────────────────────────────────

    async def flush(self) -> None:
        await self._debouncer.flush()

    async def push(self) -> bool:
        if not self.authenticated:
            return False
        self.state = SyncState.PUSHING
        try:
            await self._client.sync_push(self._token, self._store.export_all())
        except (SentinelAPIError, httpx.HTTPError) as exc:
            log.warning("Push failed: %s", exc)
            self.status = SyncStatus.ERROR
            return False
        finally:
            if self.authenticated:
                self.state = SyncState.IDLE
        self.status = SyncStatus.SYNCED
        return True

    async def pull(self) -> bool:
        if not self.authenticated:
            return False
        self.state = SyncState.PULLING
        try:
            data = await self._client.sync_pull(self._token)
        except (SentinelAPIError, httpx.HTTPError) as exc:
            log.warning("Pull failed: %s", exc)
            self.status = SyncStatus.ERROR
            self.state = SyncState.IDLE
            return False

        prefs = data.get("prefs")
        remote_bookmarks = [
            b for b in data.get("bookmarks") or [] if isinstance(b, dict) and b.get("id")
        ]
        added_local = False
        with self._store.importing():
            if prefs:
                self._store.import_all(self._prefs_to_local(prefs))
            if remote_bookmarks:
                merged = self._merge_bookmarks(remote_bookmarks)
                added_local = len(merged) > len(remote_bookmarks)
                self._store.import_all({"bookmarks": merged})
        self.state = SyncState.IDLE

        if not prefs or added_local:
            # First sync seeds the account; local-only bookmarks go back up.
            return await self.push()
        self.status = SyncStatus.SYNCED
        return True

    def _prefs_to_local(self, prefs: dict[str, Any]) -> dict[str, Any]:
        local: dict[str, Any] = {
            "subreddits": prefs.get("subreddits") or [],
            "customSubs": prefs.get("custom_subs") or [],
            "interests": prefs.get("interests") or {},
            "settings": prefs.get("settings") or {},
        }
        if self._include_local_only:
            extras = prefs.get("extras") or {}
            for key in ("reactions", "blocked", "showLess"):
                if key in extras:
                    local[key] = extras[key]
        return local

    def _merge_bookmarks(self, remote: list[dict[str, Any]]) -> list[dict[str, Any]]:
        merged = [b for b in remote if isinstance(b, dict) and b.get("id")]
        seen = {b["id"] for b in merged}
        for bm in self._store.export_all()["bookmarks"]:
            if bm.get("id") not in seen:
                merged.append(bm)
        return merged
