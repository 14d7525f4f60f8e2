"""
Prover side: turn a private birth date into a proof record.

Runs wherever the birth date is known. Only the projection produced by
``to_public_proof`` should ever leave this process.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from .dates import (
    DateInput,
    canonical_date_string,
    is_of_age,
    parse_birth_date,
    resolve_now,
    to_epoch_ms,
)
from .exceptions import InvalidDateError
from .security import compute_commitment, generate_salt
from .types import PrivateProof

logger = logging.getLogger(__name__)


def generate_proof(
    private_date: DateInput,
    now: Optional[datetime] = None,
    rng=None,
) -> PrivateProof:
    """
    Generate a commitment and an eligibility flag for a birth date.

    A fresh salt is drawn on every call, so two proofs for the same date
    never share a commitment.

    Args:
        private_date: Birth date (``date``, ``datetime`` or ISO string)
        now: Generation instant (defaults to the local wall clock)
        rng: Optional randomness source with ``get_random_bytes(n)``

    Returns:
        PrivateProof including the salt

    Raises:
        InvalidDateError: If the date is malformed or after ``now``
        ProofGenerationError: If the randomness source misbehaves

    Example:
        >>> proof = generate_proof("2000-01-31")
        >>> len(proof.commitment)
        64
    """
    current = resolve_now(now)
    birth_date = parse_birth_date(private_date)
    if birth_date > current.date():
        raise InvalidDateError("Birth date must be in the past")

    salt = generate_salt(rng)
    age_proof = is_of_age(birth_date, current.date())
    commitment = compute_commitment(canonical_date_string(birth_date), salt)

    logger.debug("Generated age proof (eligible=%s)", age_proof)
    return PrivateProof(
        commitment=commitment,
        age_proof=age_proof,
        timestamp=to_epoch_ms(current),
        salt=salt,
    )
