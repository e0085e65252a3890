"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import register_routes
from .core import ALLOWED_CORS_ORIGINS, APP_DEBUG, LOG_LEVEL, ArenaLadderError, setup_logging

logger = logging.getLogger(__name__)


def _error_body(message: str, details: str) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": message}
    if APP_DEBUG:
        body["details"] = details
    return body


async def _ladder_error_handler(request: Request, exc: ArenaLadderError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(_error_body(exc.user_message, str(exc)), status_code=exc.status_code)


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        _error_body("Invalid request parameters", str(exc.errors())), status_code=400
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(_error_body("Internal server error", repr(exc)), status_code=500)


def create_app() -> FastAPI:
    setup_logging(LOG_LEVEL)
    app = FastAPI(title="WoW Arena Ladder API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=ALLOWED_CORS_ORIGINS != ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_exception_handler(ArenaLadderError, _ladder_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("arena_ladder.app:app", host="127.0.0.1", port=3000, reload=True)
