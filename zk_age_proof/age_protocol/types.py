"""
Common types for age proofs.

This module provides:
1. PrivateProof - the prover-side record, including the salt
2. PublicProof - the projection that is actually transmitted
3. VerificationResult - the verifier's accept/reject decision
4. VerificationPolicy - freshness limits applied by the verifier

Wire dictionaries use camelCase keys (``ageProof``, ``isValid``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from . import settings

# ============================================================================
# PROOF RECORDS
# ============================================================================


@dataclass(frozen=True)
class PrivateProof:
    """
    Prover-side proof record.

    Never transmitted. The salt is excluded from ``repr`` so it does not
    end up in logs or tracebacks.

    Attributes:
        commitment: SHA-256(date_string || salt) as 64 hex characters
        age_proof: Whether the subject was of age at generation time
        timestamp: Generation time in milliseconds since the epoch
        salt: 256-bit random salt, hex encoded
    """

    commitment: str
    age_proof: bool
    timestamp: int
    salt: str = field(repr=False)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize including the salt (for local display only)."""
        return {
            "commitment": self.commitment,
            "ageProof": self.age_proof,
            "timestamp": self.timestamp,
            "salt": self.salt,
        }


@dataclass(frozen=True)
class PublicProof:
    """
    Public proof artifact: ``PrivateProof`` minus the salt.

    Build it with ``to_public_proof``. The transport layer also decodes
    received payloads into this type.
    """

    commitment: str
    age_proof: bool
    timestamp: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "commitment": self.commitment,
            "ageProof": self.age_proof,
            "timestamp": self.timestamp,
        }


# ============================================================================
# VERIFICATION
# ============================================================================


class VerificationMode(Enum):
    """
    How a verification decision was reached.

    - CLAIM_ONLY: only the self-asserted ``ageProof`` flag was checked
    - RECOMPUTED: the commitment was recomputed from a known date and salt
    """

    CLAIM_ONLY = "claim_only"
    RECOMPUTED = "recomputed"


@dataclass(frozen=True)
class ProofDetails:
    """Breakdown of a recomputed verification."""

    commitment: str
    expected_commitment: str
    commitment_matches: bool
    age_valid: bool
    timestamp: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "commitment": self.commitment,
            "expectedCommitment": self.expected_commitment,
            "commitmentMatches": self.commitment_matches,
            "ageValid": self.age_valid,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class VerificationResult:
    is_valid: bool
    message: str
    mode: VerificationMode = VerificationMode.CLAIM_ONLY
    proof_details: Optional[ProofDetails] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "isValid": self.is_valid,
            "message": self.message,
        }
        if self.proof_details is not None:
            data["proofDetails"] = self.proof_details.to_dict()
        return data


@dataclass(frozen=True)
class VerificationPolicy:
    """
    Freshness limits applied by the verifier.

    Attributes:
        replay_window_ms: Maximum accepted proof age (inclusive)
        max_clock_skew_ms: Maximum accepted distance of a timestamp ahead
            of the verifier's clock
    """

    replay_window_ms: int
    max_clock_skew_ms: int

    @classmethod
    def from_settings(
        cls,
        replay_window_ms: int | None = None,
        max_clock_skew_ms: int | None = None,
    ) -> "VerificationPolicy":
        """Snapshot the current settings, with optional explicit values."""
        return cls(
            replay_window_ms=settings.get_replay_window_ms(replay_window_ms),
            max_clock_skew_ms=settings.get_max_clock_skew_ms(max_clock_skew_ms),
        )
