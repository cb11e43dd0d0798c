"""
Main entrypoint for the Glamora API.

This module assembles the FastAPI application, sets up logging, CORS
and error rendering, and includes the routers.  The ``create_app``
function builds and configures the app, which is then instantiated
at module import time as ``app``, e.g.::

    uvicorn glamora_api.app.main:app --reload

The document store is opened on startup and closed on shutdown; the
single instance is shared by every request through ``app.state``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.endpoints import health
from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import create_store
from .core.logging_config import setup_logging
from .core.security import PasswordHasher

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use instead of the environment-derived
        module default.  Tests pass their own to point the store at a
        temporary database.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings
    app.state.hasher = PasswordHasher(settings.bcrypt_rounds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["health"])
    app.include_router(api_router, prefix="/api")

    # Every error leaves the API as {"error": "<message>"}.
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.on_event("startup")
    async def startup_event() -> None:
        store = create_store(settings)
        await store.open()
        app.state.store = store
        logger.info("%s ready, listening on port %s", settings.project_name, settings.port)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        store = getattr(app.state, "store", None)
        if store is not None:
            await store.close()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
