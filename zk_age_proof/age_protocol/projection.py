"""Projection of a private proof onto the artifact that is transmitted."""

from __future__ import annotations

from .types import PrivateProof, PublicProof


def to_public_proof(private_proof: PrivateProof) -> PublicProof:
    """
    Drop the salt from a private proof.

    This is the only constructor of outbound ``PublicProof`` values.
    """
    return PublicProof(
        commitment=private_proof.commitment,
        age_proof=private_proof.age_proof,
        timestamp=private_proof.timestamp,
    )
