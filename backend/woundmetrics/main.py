"""
Main application module for the wound metrics backend.

This file sets up the FastAPI application, configures CORS so a capture
client running elsewhere can make cross-origin requests, and exposes a
simple health check endpoint.  Validation errors are rendered with
non-finite inputs spelled out as strings, since a NaN or infinite
coordinate cannot be echoed back in strict JSON.

The measurement session routes are included under the `/api`
namespace.
"""

import math
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.routes_sessions import router as sessions_router


def _finite_only(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {key: _finite_only(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_finite_only(item) for item in value]
    return value


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return the usual 422 body with NaN and infinities replaced by strings."""
    return JSONResponse(
        status_code=422,
        content={"detail": _finite_only(jsonable_encoder(exc.errors()))},
    )


def create_app() -> FastAPI:
    """Factory to create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    app = FastAPI(title="Wound Metrics")

    # Allow all origins by default.  In production you should restrict
    # this to the domains that are allowed to access your API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check endpoint for monitoring and deployment checks.
    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(sessions_router, prefix="/api", tags=["sessions"])

    return app


# Create the application instance.  Uvicorn will import this when
# running `uvicorn woundmetrics.main:app` from within the backend directory
app = create_app()
