"""HTTP client for the Sentinel server: feed, auth passthrough and sync."""

from __future__ import annotations

from typing import Any

import httpx

from core.models import Item


class SentinelAPIError(Exception):
    """Non-success response; ``body`` is the server's JSON body verbatim."""

    def __init__(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self.body = body
        message = (body.get("error") or body.get("msg")) if isinstance(body, dict) else None
        super().__init__(f"HTTP {status_code}: {message or body}")


class SentinelClient:
    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    @classmethod
    def connect(cls, base_url: str, **kwargs: Any) -> SentinelClient:
        return cls(httpx.AsyncClient(base_url=base_url, **kwargs))

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _call(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        resp = await self._http.request(method, path, headers=headers, json=json, params=params)
        try:
            body = resp.json() if resp.content else {}
        except ValueError:
            body = {"error": resp.text}
        if resp.is_error:
            raise SentinelAPIError(resp.status_code, body)
        return body

    # ── feed ────────────────────────────────────────────────────────

    async def feed(
        self,
        *,
        category: str | None = None,
        search: str | None = None,
        country: str | None = None,
        subs: list[str] | None = None,
    ) -> list[Item]:
        params = {
            "category": category,
            "search": search,
            "country": country,
            "subs": ",".join(subs) if subs else None,
        }
        data = await self._call(
            "GET", "/api/feed", params={k: v for k, v in params.items() if v}
        )
        return [Item.from_dict(d) for d in data]

    # ── auth ────────────────────────────────────────────────────────

    async def sign_up(self, email: str, password: str) -> dict[str, Any]:
        return await self._call(
            "POST", "/api/auth/signup", json={"email": email, "password": password}
        )

    async def sign_in(self, email: str, password: str) -> dict[str, Any]:
        return await self._call(
            "POST", "/api/auth/signin", json={"email": email, "password": password}
        )

    async def sign_out(self, token: str) -> None:
        await self._call("POST", "/api/auth/signout", token=token)

    async def change_password(self, token: str, password: str) -> dict[str, Any]:
        return await self._call(
            "POST", "/api/auth/password", token=token, json={"password": password}
        )

    async def who_am_i(self, token: str) -> dict[str, Any]:
        return await self._call("GET", "/api/auth/user", token=token)

    # ── sync ────────────────────────────────────────────────────────

    async def sync_pull(self, token: str) -> dict[str, Any]:
        return await self._call("GET", "/api/sync/pull", token=token)

    async def sync_push(self, token: str, snapshot: dict[str, Any]) -> None:
        await self._call("POST", "/api/sync/push", token=token, json=snapshot)
