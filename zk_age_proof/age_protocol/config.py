"""
⚠️ DRAFT — requires crypto review before production use

Protocol configuration for commitment-based age proofs.

This is a PROTOTYPE implementation. The commitment hides the birth date, but
the verifier in the production path trusts the claimant's eligibility flag.
It is NOT a zero-knowledge proof system.
"""

# ============================================================================
# COMMITMENT
# ============================================================================

# commitment = SHA-256(date_string || salt_hex), hex encoded
HASH_FUNCTION = "SHA256"
HASH_OUTPUT_BITS = 256
COMMITMENT_HEX_LENGTH = HASH_OUTPUT_BITS // 4

# Salt size (must be >= 256 bits so dictionary attacks over dates fail)
SALT_BYTES = 32

# ============================================================================
# ELIGIBILITY
# ============================================================================

AGE_THRESHOLD_YEARS = 18

# ============================================================================
# FRESHNESS
# ============================================================================

# Replay window: proofs older than this are rejected (boundary inclusive)
DEFAULT_REPLAY_WINDOW_MS = 60 * 60 * 1000

# Tolerated clock drift for timestamps ahead of the verifier's clock
DEFAULT_MAX_CLOCK_SKEW_MS = 60 * 1000

# ============================================================================
# VALIDATION
# ============================================================================


def validate_config() -> bool:
    """
    Validate configuration parameters.

    Returns:
        True if configuration is valid

    Raises:
        AssertionError: If configuration is invalid
    """
    assert HASH_FUNCTION in ["SHA256", "SHA3-256"], "Invalid hash function"
    assert SALT_BYTES >= 32, "Salt too small"
    assert COMMITMENT_HEX_LENGTH == 64, "Commitment must be 64 hex characters"
    assert AGE_THRESHOLD_YEARS > 0, "Age threshold must be positive"
    assert DEFAULT_REPLAY_WINDOW_MS > 0, "Replay window must be positive"
    assert DEFAULT_MAX_CLOCK_SKEW_MS >= 0, "Clock skew cannot be negative"
    return True


# Auto-validate on import
validate_config()
