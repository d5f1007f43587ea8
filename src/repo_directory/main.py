# src/repo_directory/main.py
"""Main entry point for the Repo Directory application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse

from repo_directory.api.v1 import (
    auth_router,
    listings_router,
    lists_router,
    reviews_router,
    submissions_router,
)
from repo_directory.core.settings import Settings, settings
from repo_directory.db.session import Database

logger = logging.getLogger(__name__)

DESCRIPTION = "Crowdsourced directory of GitHub repos and Replit templates"


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the application and the database it owns.

    The database engine is created here and disposed of on shutdown; request
    handlers receive sessions through the ``get_db`` dependency.
    """
    app_settings = app_settings or settings
    app = FastAPI(
        title=f"{app_settings.app_name} API",
        description=DESCRIPTION,
        version=app_settings.app_version,
    )
    app.state.settings = app_settings
    app.state.database = Database(
        app_settings.sqlalchemy_url,
        echo=app_settings.sql_debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=app_settings.cors_allow_credentials,
        allow_methods=app_settings.cors_allow_methods,
        allow_headers=app_settings.cors_allow_headers,
    )
    app.add_middleware(GZipMiddleware)

    # The submission endpoints keep their original unversioned paths.
    app.include_router(submissions_router)
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(listings_router, prefix="/api/v1")
    app.include_router(reviews_router, prefix="/api/v1")
    app.include_router(lists_router, prefix="/api/v1")

    @app.on_event("startup")
    async def on_startup() -> None:
        logging.basicConfig(
            level=app_settings.log_level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        if app_settings.create_tables_on_startup:
            app.state.database.create_tables()
        logger.info("%s %s started", app_settings.app_name, app_settings.app_version)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        app.state.database.dispose()

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        """Plain-text greeting."""
        return "Hello from the Repo Directory server!"

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("repo_directory.main:app", host="0.0.0.0", port=4000, reload=settings.debug)
