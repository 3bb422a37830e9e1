"""Exception handlers mapping engine errors to JSON responses.

Every error body carries ``error`` (a readable reason) and ``kind``:
``invalid_bundle`` for a rejected parameter bundle, ``invalid_query`` for bad
coordinates or out-of-range query values, ``internal`` otherwise.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sunset_engine.params.store import BundleValidationError

logger = logging.getLogger(__name__)


def _error(status_code: int, kind: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "kind": kind})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(BundleValidationError)
    async def bundle_error_handler(request: Request, exc: BundleValidationError):
        # The store keeps its previous bundle, so only the reason is reported
        logger.warning("Parameter bundle rejected on %s: %s", request.url.path, exc)
        return _error(400, "invalid_bundle", str(exc))

    @app.exception_handler(ValueError)
    async def query_error_handler(request: Request, exc: ValueError):
        logger.warning("Invalid query on %s: %s", request.url.path, exc)
        return _error(400, "invalid_query", str(exc))

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.exception("Scoring request %s failed", request.url.path)
        return _error(500, "internal", "Internal server error")
