"""Sentinel aggregation server entry point."""

from __future__ import annotations

import logging

import uvicorn

from api.app import create_app
from config.settings import settings
from sources.scheduler import FeedWarmer

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)
log = logging.getLogger(__name__)

app = create_app()


@app.on_event("startup")
async def on_startup() -> None:
    log.info("Initialising database…")
    await app.state.database.init()

    if settings.CACHE_WARM_ENABLED:
        log.info("Starting feed warmer…")
        warmer = FeedWarmer(app.state.orchestrator)
        app.state.warmer = warmer
        warmer.start()

    log.info("NewsAPI: %s", "CONFIGURED" if settings.NEWSAPI_KEY else "NOT SET (optional)")
    log.info(
        "Identity provider: %s",
        "CONFIGURED" if app.state.identity.configured else "NOT SET (guest mode)",
    )


@app.on_event("shutdown")
async def on_shutdown() -> None:
    if hasattr(app.state, "warmer"):
        app.state.warmer.stop()
        log.info("Feed warmer stopped.")
    await app.state.database.dispose()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=False,
    )
