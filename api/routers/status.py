from __future__ import annotations

import time

from fastapi import APIRouter, Depends, Request

from api.deps import get_identity, get_orchestrator
from api.identity import IdentityProvider
from sources.orchestrator import FeedOrchestrator

router = APIRouter(prefix="/api", tags=["status"])


@router.get("/status")
async def status(
    request: Request,
    orchestrator: FeedOrchestrator = Depends(get_orchestrator),
):
    warmer = getattr(request.app.state, "warmer", None)
    return {
        "sources": orchestrator.availability(),
        "cacheEntries": len(orchestrator.cache),
        "uptime": int(time.monotonic() - request.app.state.started_at),
        "warmer": warmer.get_status() if warmer is not None else None,
    }


@router.get("/config")
async def public_config(identity: IdentityProvider = Depends(get_identity)):
    return {"authConfigured": identity.configured}
