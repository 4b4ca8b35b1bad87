from __future__ import annotations

import logging
import time

from fastapi import FastAPI

from api.identity import IdentityProvider
from api.routers import auth, feed, status, sync
from data.database import Database
from sources.orchestrator import FeedOrchestrator

log = logging.getLogger(__name__)


def create_app(
    *,
    orchestrator: FeedOrchestrator | None = None,
    database: Database | None = None,
    identity: IdentityProvider | None = None,
) -> FastAPI:
    app = FastAPI(title="Sentinel", version="0.1.0")
    app.state.orchestrator = orchestrator or FeedOrchestrator()
    app.state.database = database or Database()
    app.state.identity = identity or IdentityProvider()
    app.state.started_at = time.monotonic()

    # Register API routers
    app.include_router(feed.router)
    app.include_router(status.router)
    app.include_router(auth.router)
    app.include_router(sync.router)

    # Health check
    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app
