"""JSON message schemas for the verification endpoint."""

from __future__ import annotations

import json
import string
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from ..age_protocol.config import COMMITMENT_HEX_LENGTH
from ..age_protocol.types import PublicProof
from .constants import FORBIDDEN_FIELDS, REQUEST_MAX_BYTES, REQUIRED_FIELDS
from .errors import SchemaError, SizeLimitError

_HEX_DIGITS = frozenset(string.hexdigits)

RequestBody = Union[bytes, bytearray, str, Mapping]


def _load_json(blob: Union[bytes, bytearray, str]) -> Any:
    raw = blob.encode("utf-8") if isinstance(blob, str) else bytes(blob)
    if len(raw) > REQUEST_MAX_BYTES:
        raise SizeLimitError("request too large")
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, ValueError):
        raise SchemaError("request body is not valid JSON") from None


def _require_commitment(value: Any) -> str:
    if not isinstance(value, str):
        raise SchemaError("commitment must be a string")
    if len(value) != COMMITMENT_HEX_LENGTH or not set(value) <= _HEX_DIGITS:
        raise SchemaError(f"commitment must be {COMMITMENT_HEX_LENGTH} hex characters")
    return value.lower()


def _require_timestamp(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError("timestamp must be an integer")
    if value <= 0:
        raise SchemaError("timestamp must be positive")
    return value


@dataclass(frozen=True)
class VerifyResponse:
    is_valid: bool
    message: str
    timestamp: str

    def validate(self) -> None:
        if not isinstance(self.is_valid, bool):
            raise SchemaError("isValid must be a boolean")
        if not isinstance(self.message, str) or not self.message:
            raise SchemaError("message required")
        if not isinstance(self.timestamp, str) or not self.timestamp:
            raise SchemaError("timestamp required")

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "message": self.message,
            "timestamp": self.timestamp,
        }


def decode_public_proof(body: RequestBody) -> PublicProof:
    """
    Parse and validate a verification request body.

    Raises:
        SizeLimitError: If the body exceeds REQUEST_MAX_BYTES
        SchemaError: If a field is missing or mistyped, or a salt is present
    """
    if isinstance(body, Mapping):
        payload = body
    elif isinstance(body, (bytes, bytearray, str)):
        payload = _load_json(body)
    else:
        raise SchemaError("request body must be bytes, str or a mapping")

    if not isinstance(payload, Mapping):
        raise SchemaError("request payload must be an object")

    for name in REQUIRED_FIELDS:
        if name not in payload:
            raise SchemaError(f"missing field: {name}")
    leaked = FORBIDDEN_FIELDS.intersection(payload)
    if leaked:
        raise SchemaError(f"forbidden field: {sorted(leaked)[0]}")

    age_proof = payload["ageProof"]
    if not isinstance(age_proof, bool):
        raise SchemaError("ageProof must be a boolean")

    return PublicProof(
        commitment=_require_commitment(payload["commitment"]),
        age_proof=age_proof,
        timestamp=_require_timestamp(payload["timestamp"]),
    )


def encode_public_proof(proof: PublicProof) -> bytes:
    """Serialize a public proof as a request body (never includes a salt)."""
    if not isinstance(proof, PublicProof):
        raise SchemaError("only PublicProof values can be encoded for transport")
    return json.dumps(proof.to_dict(), separators=(",", ":")).encode("utf-8")


def encode_response(resp: VerifyResponse) -> bytes:
    resp.validate()
    return json.dumps(resp.to_dict(), separators=(",", ":")).encode("utf-8")


def decode_response(blob: Union[bytes, bytearray, str]) -> VerifyResponse:
    try:
        payload = json.loads(blob)
    except (UnicodeDecodeError, ValueError):
        raise SchemaError("response body is not valid JSON") from None
    if not isinstance(payload, Mapping):
        raise SchemaError("response payload must be an object")
    error: Optional[str] = payload.get("error")
    if error is not None:
        raise SchemaError(f"error response: {error}")
    resp = VerifyResponse(
        is_valid=payload.get("isValid"),
        message=payload.get("message"),
        timestamp=payload.get("timestamp"),
    )
    resp.validate()
    return resp
