"""
Custom exceptions for the age proof protocol.

Input errors and infrastructure failures are exceptions. Policy rejections
(expired, not eligible) are ordinary ``VerificationResult`` values.
"""


class AgeProofError(Exception):
    """Base exception for age proof errors."""

    pass


class InvalidDateError(AgeProofError, ValueError):
    """Birth date is malformed, not a calendar date, or in the future."""

    pass


class ProofGenerationError(AgeProofError):
    """Error during proof generation."""

    pass


class ProofVerificationError(AgeProofError):
    """Unexpected error during proof verification."""

    pass


class ConfigurationError(AgeProofError):
    """Configuration error."""

    pass


class NotEligibleError(AgeProofError):
    """Generated proof does not claim eligibility, so it is not submitted."""

    pass
