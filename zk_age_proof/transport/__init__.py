"""Verification endpoint schemas, handler and client utilities."""

from .constants import VERIFY_PATH
from .errors import SchemaError, SizeLimitError, TransportError
from .handler import HandlerResponse, handle_verify_request, handle_verify_request_bytes
from .messages import (
    VerifyResponse,
    decode_public_proof,
    decode_response,
    encode_public_proof,
    encode_response,
)

__all__ = [
    "VERIFY_PATH",
    "TransportError",
    "SchemaError",
    "SizeLimitError",
    "HandlerResponse",
    "handle_verify_request",
    "handle_verify_request_bytes",
    "VerifyResponse",
    "decode_public_proof",
    "decode_response",
    "encode_public_proof",
    "encode_response",
]
