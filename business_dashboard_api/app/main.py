"""
Main entrypoint for the Business Dashboard API.

This module assembles the FastAPI application, sets up logging,
registers error handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn business_dashboard_api.app.main:app --reload

Service exceptions are translated into HTTP responses here:

* ``RecordNotFoundError``   -> 404 (also for updates and deletes of a
  missing record)
* ``RecordStoreError``      -> 502 (the record store failed)
* ``TimerStateError``       -> 409 (timer already running / not running)
* ``RecordValidationError`` -> 422
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .core.config import settings
from .core.errors import (
    RecordNotFoundError,
    RecordStoreError,
    RecordValidationError,
    TimerStateError,
)
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router


logger = logging.getLogger(__name__)


def _error_handler(status_code: int):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        message = getattr(exc, "message", None) or str(exc)
        if status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=status_code, content={"detail": message})

    return handler


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the handlers and
    # services log through the configured root logger.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    # Starlette picks the handler of the nearest class in the
    # exception's MRO, so a missing record answers 404, not 502.
    app.add_exception_handler(RecordNotFoundError, _error_handler(status.HTTP_404_NOT_FOUND))
    app.add_exception_handler(RecordStoreError, _error_handler(status.HTTP_502_BAD_GATEWAY))
    app.add_exception_handler(TimerStateError, _error_handler(status.HTTP_409_CONFLICT))
    app.add_exception_handler(
        RecordValidationError, _error_handler(status.HTTP_422_UNPROCESSABLE_ENTITY)
    )

    app.include_router(v1_router, prefix="/api/v1")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
