"""
Verifier side: accept or reject a public proof.

Two named operations keep the trust model explicit at call sites:

- ``verify_claim_only``: the production path. The verifier has neither the
  date nor the salt, so after the structure and freshness checks it can only
  trust the claimant's ``ageProof`` flag. The commitment acts as an
  unlinkable receipt here, not as a checked assertion.
- ``verify_recomputed``: testing/administrative path where the original
  date and salt are supplied out of band. The commitment is recomputed and
  eligibility is re-derived.

Checks run in order and stop at the first failure: structure, freshness,
then the path-specific decision. Nothing is stored, so duplicate use of a
proof inside the replay window is not detected.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union

from .dates import (
    DateInput,
    canonical_date_string,
    is_of_age,
    parse_birth_date,
    resolve_now,
    to_epoch_ms,
)
from .exceptions import ProofVerificationError
from .security import compute_commitment, constant_time_compare
from .types import (
    ProofDetails,
    PublicProof,
    VerificationMode,
    VerificationPolicy,
    VerificationResult,
)

logger = logging.getLogger(__name__)

MSG_INVALID_STRUCTURE = "Invalid proof structure"
MSG_EXPIRED = "Proof has expired"
MSG_FUTURE_TIMESTAMP = "Proof timestamp is in the future"
MSG_CLAIM_ACCEPTED = "Proof accepted: User claims to be over 18"
MSG_CLAIM_REJECTED = "Proof rejected: User is not over 18"
MSG_VERIFIED = "Proof verified: User is over 18"
MSG_VERIFICATION_FAILED = "Proof verification failed"


# ============================================================================
# VERIFICATION REQUESTS (tagged variant)
# ============================================================================


@dataclass(frozen=True)
class ClaimOnlyVerification:
    """Verify without a recomputation oracle."""


@dataclass(frozen=True)
class RecomputedVerification:
    """Verify against a date and salt supplied out of band."""

    known_date: DateInput
    salt: str


Verification = Union[ClaimOnlyVerification, RecomputedVerification]


# ============================================================================
# CHECKS
# ============================================================================


def check_structure(proof: Any) -> Optional[PublicProof]:
    """
    Validate the three public fields.

    Accepts a ``PublicProof`` (or any object with the same attributes) or a
    mapping with wire keys. Returns a normalized ``PublicProof``, or None if
    a field is missing or mistyped.
    """
    if isinstance(proof, Mapping):
        commitment = proof.get("commitment")
        age_proof = proof.get("ageProof")
        timestamp = proof.get("timestamp")
    else:
        commitment = getattr(proof, "commitment", None)
        age_proof = getattr(proof, "age_proof", None)
        timestamp = getattr(proof, "timestamp", None)

    if not isinstance(commitment, str) or not commitment:
        return None
    if not isinstance(age_proof, bool):
        return None
    if isinstance(timestamp, bool) or not isinstance(timestamp, int) or timestamp <= 0:
        return None

    return PublicProof(commitment=commitment, age_proof=age_proof, timestamp=timestamp)


def check_freshness(
    timestamp: int, now_ms: int, policy: VerificationPolicy
) -> Optional[str]:
    """
    Return a rejection message if the timestamp is outside the window.

    A proof exactly ``replay_window_ms`` old is still fresh.
    """
    if now_ms - timestamp > policy.replay_window_ms:
        return MSG_EXPIRED
    if timestamp - now_ms > policy.max_clock_skew_ms:
        return MSG_FUTURE_TIMESTAMP
    return None


def _reject(message: str, mode: VerificationMode) -> VerificationResult:
    logger.info("Proof rejected: %s", message)
    return VerificationResult(is_valid=False, message=message, mode=mode)


def _preflight(
    proof: Any,
    now: Optional[datetime],
    policy: Optional[VerificationPolicy],
    mode: VerificationMode,
):
    current = resolve_now(now)
    active_policy = policy if policy is not None else VerificationPolicy.from_settings()

    public_proof = check_structure(proof)
    if public_proof is None:
        return current, None, _reject(MSG_INVALID_STRUCTURE, mode)

    stale = check_freshness(public_proof.timestamp, to_epoch_ms(current), active_policy)
    if stale is not None:
        return current, None, _reject(stale, mode)

    return current, public_proof, None


# ============================================================================
# OPERATIONS
# ============================================================================


def verify_claim_only(
    public_proof: Any,
    now: Optional[datetime] = None,
    policy: Optional[VerificationPolicy] = None,
) -> VerificationResult:
    """
    Verify a public proof without the date or salt.

    Accepts iff the proof is well-formed, fresh, and claims ``ageProof``.
    The commitment content is not (and cannot be) checked.

    Args:
        public_proof: ``PublicProof`` or wire mapping
        now: Verification instant (defaults to the local wall clock)
        policy: Freshness limits (defaults to current settings)

    Returns:
        VerificationResult in CLAIM_ONLY mode
    """
    mode = VerificationMode.CLAIM_ONLY
    _, proof, rejection = _preflight(public_proof, now, policy, mode)
    if rejection is not None:
        return rejection

    if proof.age_proof:
        return VerificationResult(is_valid=True, message=MSG_CLAIM_ACCEPTED, mode=mode)
    return _reject(MSG_CLAIM_REJECTED, mode)


def verify_recomputed(
    public_proof: Any,
    known_date: DateInput,
    salt: str,
    now: Optional[datetime] = None,
    policy: Optional[VerificationPolicy] = None,
) -> VerificationResult:
    """
    Verify a public proof against an out-of-band date and salt.

    Valid only if the recomputed commitment matches, the recomputed
    eligibility equals the claimed flag, and the flag is True.

    Raises:
        InvalidDateError: If ``known_date`` is malformed
        TypeError: If ``salt`` is not a string
    """
    mode = VerificationMode.RECOMPUTED
    current, proof, rejection = _preflight(public_proof, now, policy, mode)
    if rejection is not None:
        return rejection

    birth_date = parse_birth_date(known_date)
    expected = compute_commitment(canonical_date_string(birth_date), salt)
    commitment_matches = constant_time_compare(proof.commitment, expected)
    age_valid = proof.age_proof == is_of_age(birth_date, current.date())

    details = ProofDetails(
        commitment=proof.commitment,
        expected_commitment=expected,
        commitment_matches=commitment_matches,
        age_valid=age_valid,
        timestamp=proof.timestamp,
    )

    if commitment_matches and age_valid and proof.age_proof:
        return VerificationResult(
            is_valid=True, message=MSG_VERIFIED, mode=mode, proof_details=details
        )

    if not commitment_matches:
        reason = "commitment does not match"
    elif not age_valid:
        reason = "age claim does not match"
    else:
        reason = "User is not over 18"
    message = f"{MSG_VERIFICATION_FAILED}: {reason}"
    logger.info("Proof rejected: %s", message)
    return VerificationResult(
        is_valid=False, message=message, mode=mode, proof_details=details
    )


def verify_proof(
    public_proof: Any,
    verification: Optional[Verification] = None,
    now: Optional[datetime] = None,
    policy: Optional[VerificationPolicy] = None,
) -> VerificationResult:
    """
    Dispatch on an explicit verification request.

    ``None`` means ``ClaimOnlyVerification()``.
    """
    if verification is None or isinstance(verification, ClaimOnlyVerification):
        return verify_claim_only(public_proof, now=now, policy=policy)
    if isinstance(verification, RecomputedVerification):
        return verify_recomputed(
            public_proof,
            verification.known_date,
            verification.salt,
            now=now,
            policy=policy,
        )
    raise ProofVerificationError(
        f"Unsupported verification request: {verification!r}"
    )
