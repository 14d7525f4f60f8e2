"""FastAPI application exposing the verification handler over HTTP."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..age_protocol.types import VerificationPolicy
from .constants import ERR_INTERNAL, HEALTH_PATH, STATUS_INTERNAL_ERROR, VERIFY_PATH
from .handler import handle_verify_request

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def create_app(
    policy: Optional[VerificationPolicy] = None,
    clock: Optional[Clock] = None,
) -> FastAPI:
    """
    Build the verifier app.

    Args:
        policy: Freshness limits (defaults to settings at request time)
        clock: Callable returning the current instant (defaults to wall clock)
    """
    app = FastAPI(title="Age Proof Verifier")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s: %s", request.url.path, type(exc).__name__)
        return JSONResponse(status_code=STATUS_INTERNAL_ERROR, content={"error": ERR_INTERNAL})

    @app.get(HEALTH_PATH)
    async def health() -> dict:
        return {"status": "ok"}

    @app.post(VERIFY_PATH)
    async def verify_proof(request: Request) -> JSONResponse:
        body = await request.body()
        now = clock() if clock is not None else None
        response = handle_verify_request(body, now=now, policy=policy)
        return JSONResponse(status_code=response.status, content=response.payload)

    return app


app = create_app()
