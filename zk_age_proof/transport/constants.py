"""Transport constants for the verification endpoint."""

from __future__ import annotations

VERIFY_PATH = "/api/verify-proof"
HEALTH_PATH = "/health"

STATUS_OK = 200
STATUS_BAD_REQUEST = 400
STATUS_PAYLOAD_TOO_LARGE = 413
STATUS_INTERNAL_ERROR = 500

REQUEST_MAX_BYTES = 4096
REQUIRED_FIELDS = ("commitment", "ageProof", "timestamp")
FORBIDDEN_FIELDS = frozenset({"salt"})

ERR_INVALID_STRUCTURE = "Invalid proof structure"
ERR_TOO_LARGE = "Request body too large"
ERR_INTERNAL = "Failed to verify proof"
