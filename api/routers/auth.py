"""Auth passthrough: status code and body come straight from the provider."""

from __future__ import annotations

import logging
from collections.abc import Awaitable

import httpx
from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse

from api.deps import bearer_token, get_identity
from api.identity import IdentityProvider
from api.schemas import Credentials, PasswordChange

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

_NOT_CONFIGURED = {"error": "Auth not configured. Set SUPABASE_URL and SUPABASE_ANON_KEY."}


def _body(resp: httpx.Response):
    try:
        return resp.json()
    except ValueError:
        return {"error": resp.text}


async def _proxy(call: Awaitable[httpx.Response]) -> JSONResponse:
    try:
        resp = await call
    except httpx.HTTPError as exc:
        log.warning("identity provider request failed: %r", exc)
        return JSONResponse({"error": "Identity provider unreachable"}, status_code=502)
    if not resp.content:
        # logout answers 204 No Content
        return JSONResponse({}, status_code=200 if resp.status_code == 204 else resp.status_code)
    return JSONResponse(_body(resp), status_code=resp.status_code)


def _unconfigured() -> JSONResponse:
    return JSONResponse(_NOT_CONFIGURED, status_code=503)


def _unauthorized() -> JSONResponse:
    return JSONResponse({"error": "Missing bearer token"}, status_code=401)


@router.post("/signup")
async def sign_up(body: Credentials, identity: IdentityProvider = Depends(get_identity)):
    if not identity.configured:
        return _unconfigured()
    return await _proxy(identity.sign_up(body.email, body.password))


@router.post("/signin")
async def sign_in(body: Credentials, identity: IdentityProvider = Depends(get_identity)):
    if not identity.configured:
        return _unconfigured()
    return await _proxy(identity.sign_in(body.email, body.password))


@router.post("/signout")
async def sign_out(
    authorization: str | None = Header(default=None),
    identity: IdentityProvider = Depends(get_identity),
):
    token = bearer_token(authorization)
    if not identity.configured or token is None:
        # Nothing to revoke; the client drops its session either way.
        return {"ok": True}
    return await _proxy(identity.sign_out(token))


@router.post("/password")
async def change_password(
    body: PasswordChange,
    authorization: str | None = Header(default=None),
    identity: IdentityProvider = Depends(get_identity),
):
    if not identity.configured:
        return _unconfigured()
    token = bearer_token(authorization)
    if token is None:
        return _unauthorized()
    return await _proxy(identity.change_password(token, body.password))


@router.get("/user")
async def who_am_i(
    authorization: str | None = Header(default=None),
    identity: IdentityProvider = Depends(get_identity),
):
    if not identity.configured:
        return _unconfigured()
    token = bearer_token(authorization)
    if token is None:
        return _unauthorized()
    return await _proxy(identity.get_user_response(token))
