"""Summary of what a proof reveals, for the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .config import AGE_THRESHOLD_YEARS
from .types import PrivateProof, PublicProof


@dataclass
class Disclosure:
    proved: str
    sent_fields: List[str]
    withheld: List[str]
    verifier_learned: List[str] = field(default_factory=list)


def describe_disclosure(
    private_proof: PrivateProof,
    public_proof: PublicProof,
    result=None,
) -> Disclosure:
    """
    Describe what the prover kept back and what the verifier saw.

    ``result`` is any decision with an ``is_valid`` flag, such as a
    ``VerificationResult`` or the transport's ``VerifyResponse``.
    """
    sent = sorted(public_proof.to_dict())
    withheld = ["birth date"] + [
        key for key in sorted(private_proof.to_dict()) if key not in sent
    ]

    if public_proof.age_proof:
        proved = f"I am {AGE_THRESHOLD_YEARS} years old or older"
    else:
        proved = f"I am younger than {AGE_THRESHOLD_YEARS}"

    learned = ["an unlinkable commitment", "the proof generation time"]
    if result is not None:
        learned.append(
            "the proof is valid" if result.is_valid else "the proof was rejected"
        )

    return Disclosure(
        proved=proved, sent_fields=sent, withheld=withheld, verifier_learned=learned
    )
