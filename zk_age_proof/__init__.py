"""
zk-age-proof: commitment-based proof that a private birth date implies age >= 18.

⚠️ PROOF OF CONCEPT - NOT A ZERO-KNOWLEDGE PROOF SYSTEM
"""

__version__ = "0.1.0"

DISCLAIMER = (
    "The verifier trusts the claimant's age flag. The commitment keeps the "
    "birth date private and makes proofs unlinkable, but it does not prove "
    "the flag is true."
)


def print_disclaimer() -> None:
    print(f"⚠️  {DISCLAIMER}")
