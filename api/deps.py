from __future__ import annotations

from typing import Any

from fastapi import Header, HTTPException, Request

from api.identity import IdentityProvider
from data.database import Database
from sources.orchestrator import FeedOrchestrator


def get_orchestrator(request: Request) -> FeedOrchestrator:
    return request.app.state.orchestrator


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_identity(request: Request) -> IdentityProvider:
    return request.app.state.identity


def bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    if not authorization or not authorization.lower().startswith("bearer "):
        return None
    return authorization[7:].strip() or None


async def current_user(
    request: Request, authorization: str | None = Header(default=None)
) -> dict[str, Any]:
    identity = get_identity(request)
    if not identity.configured:
        raise HTTPException(503, "Auth not configured")
    token = bearer_token(authorization)
    if token is None:
        raise HTTPException(401, "Missing bearer token")
    user = await identity.get_user(token)
    if user is None:
        raise HTTPException(401, "Invalid or expired session")
    return user
