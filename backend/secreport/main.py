"""
Security Report Service — FastAPI Main Application
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from secreport.api.router import api_router
from secreport.api.routes.reports import error_response
from secreport.core.config import Settings
from secreport.core.errors import StorageUnavailable
from secreport.core.logging_config import configure_logging
from secreport.models.database import ReportStore
from secreport.services.report_service import ReportService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the report store; the app does not start serving if this fails."""
    settings: Settings = app.state.settings
    store = ReportStore(settings.sqlite_path)
    try:
        store.open()
    except StorageUnavailable:
        logger.exception("Failed to initialize database")
        raise
    app.state.report_store = store
    app.state.report_service = ReportService(store)
    logger.info("%s v%s ready", settings.app_name, settings.version)
    yield
    store.close()
    logger.info("Shutting down...")


def static_response(static_dir: Path, path: str):
    """Serve a built front-end file, or ``index.html`` for client-side routes."""
    root = static_dir.resolve()
    if path:
        candidate = (root / path).resolve()
        if candidate.is_relative_to(root) and candidate.is_file():
            return FileResponse(candidate)
    index = root / "index.html"
    if index.is_file():
        return FileResponse(index)
    return error_response(404, "Not found")


async def unhandled_error(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(500, "Internal server error")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(
        title=settings.app_name,
        description="Create and share read-only security assessment reports",
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.add_exception_handler(Exception, unhandled_error)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": settings.version}

    # Must stay last: catches every GET the API did not claim
    @app.get("/{full_path:path}", include_in_schema=False)
    async def frontend(full_path: str):
        return static_response(Path(settings.static_dir), full_path)

    return app


def run() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    logger.info("Server starting on %s:%d", settings.host, settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        lifespan="on",
        log_config=None,
    )


if __name__ == "__main__":
    run()
