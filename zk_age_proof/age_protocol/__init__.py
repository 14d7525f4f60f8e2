"""
Commitment-based age proofs.

A prover commits to a birth date with a salted SHA-256 hash and asserts an
age >= 18 flag. The verifier checks structure and freshness. Without the
salt it can only trust the flag: the commitment is a privacy-preserving,
unlinkable receipt, not a soundness guarantee.
"""

from __future__ import annotations

from .disclosure import Disclosure, describe_disclosure
from .exceptions import (
    AgeProofError,
    ConfigurationError,
    InvalidDateError,
    NotEligibleError,
    ProofGenerationError,
    ProofVerificationError,
)
from .projection import to_public_proof
from .prover import generate_proof
from .security import RandomnessSource, compute_commitment
from .types import (
    PrivateProof,
    ProofDetails,
    PublicProof,
    VerificationMode,
    VerificationPolicy,
    VerificationResult,
)
from .verifier import (
    ClaimOnlyVerification,
    RecomputedVerification,
    verify_claim_only,
    verify_proof,
    verify_recomputed,
)

__all__ = [
    "generate_proof",
    "to_public_proof",
    "verify_claim_only",
    "verify_recomputed",
    "verify_proof",
    "ClaimOnlyVerification",
    "RecomputedVerification",
    "describe_disclosure",
    "Disclosure",
    "compute_commitment",
    "RandomnessSource",
    "PrivateProof",
    "PublicProof",
    "ProofDetails",
    "VerificationMode",
    "VerificationPolicy",
    "VerificationResult",
    "AgeProofError",
    "ConfigurationError",
    "InvalidDateError",
    "NotEligibleError",
    "ProofGenerationError",
    "ProofVerificationError",
]
