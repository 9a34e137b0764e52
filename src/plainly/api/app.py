"""
FastAPI Application Factory & Configuration.

This module initializes the FastAPI application instance. It is responsible for:
1.  **Middleware Setup**: CORS for the browser front end.
2.  **Exception Handling**: Map the error taxonomy to `{"error": ...}` bodies.
3.  **Routing**: Mounting the explain router and the health probe.

Status mapping
--------------
- `ValidationError`            -> 400
- any other `ExplainError`     -> 500
- any other exception          -> 500 (catch-all)
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from plainly import __version__
from plainly.api.routers import explain
from plainly.core.errors import ExplainError, ValidationError
from plainly.core.settings import get_logger, load_settings

logger = get_logger(__name__)

_FALLBACK_MESSAGE = "Unexpected error."


def _error_body(exc: Exception) -> dict[str, str]:
    return {"error": str(exc) or _FALLBACK_MESSAGE}


def create_app() -> FastAPI:
    """
    Construct and configure the Plainly FastAPI application.

    Returns
    -------
    FastAPI
        The configured ASGI application ready to be served by Uvicorn.
    """
    app = FastAPI(
        title="Plainly API",
        description="Paste confusing text, get a plain-language explanation.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Exception Handlers
    # -----------------------------------------------------------------------
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        """Map invalid inbound fields to HTTP 400."""
        logger.warning("Rejected %s: %s", request.url.path, exc)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=_error_body(exc))

    @app.exception_handler(ExplainError)
    async def explain_error_handler(request: Request, exc: ExplainError) -> JSONResponse:
        """Map configuration, upstream and parse failures to HTTP 500."""
        logger.error("Explain failed on %s: %s: %s", request.url.path, type(exc).__name__, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=_error_body(exc)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all so unhandled exceptions still return `{"error": ...}`."""
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=_error_body(exc)
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    app.include_router(explain.router)

    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        """Simple liveness probe."""
        return {
            "status": "ok",
            "environment": load_settings().environment,
            "version": __version__,
        }

    return app


__all__ = ["create_app"]
