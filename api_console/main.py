"""
FastAPI application entrypoint for the API console relay.
"""

from __future__ import annotations

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api_console.api.routes import router as api_router
from api_console.core.config import get_settings
from api_console.core.logging import configure_logging


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render malformed requests in the console's ``{"error": ...}`` shape."""
    return JSONResponse(
        status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
        content={"error": "Invalid request", "detail": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="API Console Relay",
        version="0.1.0",
        description="Token caching and audited request relay for the API console.",
    )
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()

__all__ = ["app", "create_app"]
