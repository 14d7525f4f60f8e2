"""Pure request/response handler for proof verification."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from ..age_protocol.dates import format_human, resolve_now
from ..age_protocol.types import VerificationPolicy
from ..age_protocol.verifier import verify_claim_only
from .constants import (
    ERR_INTERNAL,
    ERR_INVALID_STRUCTURE,
    ERR_TOO_LARGE,
    STATUS_BAD_REQUEST,
    STATUS_INTERNAL_ERROR,
    STATUS_OK,
    STATUS_PAYLOAD_TOO_LARGE,
)
from .errors import SchemaError, SizeLimitError
from .messages import RequestBody, VerifyResponse, decode_public_proof

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandlerResponse:
    status: int
    payload: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK


def _error_response(
    status: int, err: str, detail: Optional[str] = None
) -> HandlerResponse:
    payload: Dict[str, Any] = {"error": err}
    if detail:
        payload["detail"] = detail
    return HandlerResponse(status=status, payload=payload)


def handle_verify_request(
    body: RequestBody,
    now: Optional[datetime] = None,
    policy: Optional[VerificationPolicy] = None,
) -> HandlerResponse:
    """
    Handle one verification request.

    Structural violations are rejected before the verifier runs (400).
    Unexpected failures are logged and mapped to a generic 500. Every other
    outcome, including a rejected proof, is a 200 with ``isValid`` in the
    body.
    """
    try:
        proof = decode_public_proof(body)
    except SizeLimitError:
        return _error_response(STATUS_PAYLOAD_TOO_LARGE, ERR_TOO_LARGE)
    except SchemaError as exc:
        return _error_response(STATUS_BAD_REQUEST, ERR_INVALID_STRUCTURE, str(exc))

    try:
        current = resolve_now(now)
        result = verify_claim_only(proof, now=current, policy=policy)
        response = VerifyResponse(
            is_valid=result.is_valid,
            message=result.message,
            timestamp=format_human(current),
        )
        response.validate()
    except Exception:
        logger.exception("Proof verification error")
        return _error_response(STATUS_INTERNAL_ERROR, ERR_INTERNAL)

    return HandlerResponse(status=STATUS_OK, payload=response.to_dict())


def handle_verify_request_bytes(
    request_blob: bytes,
    now: Optional[datetime] = None,
    policy: Optional[VerificationPolicy] = None,
) -> Tuple[int, bytes]:
    response = handle_verify_request(request_blob, now=now, policy=policy)
    return response.status, json.dumps(response.payload).encode("utf-8")
