# app/core/errors.py
"""Error kinds raised by the data-access layer and their FastAPI handlers."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class PokedexError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(PokedexError):
    """Upstream answered 404 for the requested resource."""

    kind = "Resource"

    def __init__(self, name: str):
        super().__init__(f'{self.kind} "{name}" not found', status_code=404)
        self.name = name


class PokemonNotFoundError(NotFoundError):
    kind = "Pokémon"


class UpstreamError(PokedexError):
    """Any other non-2xx answer, or a transport failure (upstream_status is None)."""

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(message, status_code=502)
        self.upstream_status = upstream_status


class MalformedPayloadError(UpstreamError):
    pass


class ConfigurationError(PokedexError, ValueError):
    def __init__(self, message: str):
        super().__init__(message, status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(PokedexError)
    async def handle_pokedex_error(_request: Request, exc: PokedexError):
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse({"error": "Internal server error"}, status_code=500)
