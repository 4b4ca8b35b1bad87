"""Thin proxy to a Supabase-style (GoTrue) identity provider."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from config.settings import settings

log = logging.getLogger(__name__)


class IdentityProvider:
    def __init__(
        self,
        base_url: str | None = None,
        anon_key: str | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (settings.SUPABASE_URL if base_url is None else base_url).rstrip("/")
        self._anon_key = settings.SUPABASE_ANON_KEY if anon_key is None else anon_key
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._base_url and self._anon_key)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        headers = {"apikey": self._anon_key, "Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=settings.HTTP_TIMEOUT,
            transport=self._transport,
        ) as client:
            return await client.request(method, path, headers=headers, json=json, params=params)

    async def sign_up(self, email: str, password: str) -> httpx.Response:
        return await self._request(
            "POST", "/auth/v1/signup", json={"email": email, "password": password}
        )

    async def sign_in(self, email: str, password: str) -> httpx.Response:
        return await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )

    async def sign_out(self, token: str) -> httpx.Response:
        return await self._request("POST", "/auth/v1/logout", token=token)

    async def change_password(self, token: str, password: str) -> httpx.Response:
        return await self._request("PUT", "/auth/v1/user", token=token, json={"password": password})

    async def get_user_response(self, token: str) -> httpx.Response:
        return await self._request("GET", "/auth/v1/user", token=token)

    async def get_user(self, token: str) -> dict[str, Any] | None:
        """Resolve a bearer token to the provider's user object, or None."""
        try:
            resp = await self.get_user_response(token)
        except httpx.HTTPError as exc:
            log.warning("identity provider unreachable: %r", exc)
            return None
        if resp.status_code != 200:
            return None
        try:
            user = resp.json()
        except ValueError:
            log.warning("identity provider sent a non-JSON user body")
            return None
        if not isinstance(user, dict) or not user.get("id"):
            return None
        return user
