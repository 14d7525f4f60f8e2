"""
⚠️ DRAFT — requires crypto review before production use

Security utilities for age proof commitments.

This is a PROTOTYPE implementation. The commitment is a salted hash, which
hides the birth date but does not prove anything about it on its own.
"""

import hashlib
import hmac
import os
import secrets

from .config import HASH_FUNCTION, SALT_BYTES
from .exceptions import ProofGenerationError


# ============================================================================
# RANDOMNESS SOURCE (Fork-Safe)
# ============================================================================


class RandomnessSource:
    """
    Cryptographically secure randomness with fork detection.

    Prevents randomness reuse if the process forks. Pass an instance (or any
    object with ``get_random_bytes``) to ``generate_proof`` to control the
    salt in tests.

    Example:
        >>> rng = RandomnessSource()
        >>> salt = rng.get_random_bytes(32)
    """

    def __init__(self):
        """Initialize randomness source with fork detection."""
        self._pid = os.getpid()

    def get_random_bytes(self, n: int) -> bytes:
        """
        Get n cryptographically secure random bytes.

        Args:
            n: Number of bytes to generate

        Returns:
            n random bytes
        """
        if os.getpid() != self._pid:
            self.__init__()
        return secrets.token_bytes(n)


_DEFAULT_RNG = RandomnessSource()


def generate_salt(rng=None) -> str:
    """
    Draw a fresh 256-bit salt and return it hex encoded.

    Args:
        rng: Optional randomness source (defaults to the process source)

    Returns:
        Salt as 64 lowercase hex characters

    Raises:
        ProofGenerationError: If the source returns anything but SALT_BYTES bytes
    """
    source = rng if rng is not None else _DEFAULT_RNG
    raw = source.get_random_bytes(SALT_BYTES)
    if not isinstance(raw, (bytes, bytearray)) or len(raw) != SALT_BYTES:
        raise ProofGenerationError("Randomness source returned an invalid salt")
    return bytes(raw).hex()


# ============================================================================
# COMMITMENT
# ============================================================================


def compute_commitment(date_string: str, salt: str) -> str:
    """
    Compute the commitment for a canonical date string and hex salt.

    The digest covers the UTF-8 bytes of ``date_string + salt``.

    Args:
        date_string: Canonical YYYY-MM-DD date
        salt: Hex-encoded salt

    Returns:
        Hex digest (64 characters)

    Raises:
        TypeError: If inputs are not strings
    """
    if not isinstance(date_string, str):
        raise TypeError(f"date_string must be str, got {type(date_string)}")
    if not isinstance(salt, str):
        raise TypeError(f"salt must be str, got {type(salt)}")

    data = (date_string + salt).encode("utf-8")
    if HASH_FUNCTION == "SHA3-256":
        h = hashlib.sha3_256(data)
    else:
        h = hashlib.sha256(data)
    return h.hexdigest()


# ============================================================================
# CONSTANT-TIME OPERATIONS
# ============================================================================


def constant_time_compare(a: str, b: str) -> bool:
    """
    Constant-time comparison of two hex digests.

    Uses hmac.compare_digest on the UTF-8 bytes of both strings.
    """
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))
