"""Prover-side client: generate, gate, project and submit a proof."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Protocol

import httpx

from ..age_protocol.dates import DateInput
from ..age_protocol.exceptions import NotEligibleError
from ..age_protocol.projection import to_public_proof
from ..age_protocol.prover import generate_proof
from ..age_protocol.types import PrivateProof, PublicProof, VerificationPolicy
from .constants import STATUS_OK, VERIFY_PATH
from .errors import TransportError
from .handler import handle_verify_request
from .messages import VerifyResponse, decode_response, encode_public_proof

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class ProofTransport(Protocol):
    def submit(self, proof: PublicProof) -> VerifyResponse:
        ...


def _response_from(status: int, payload: dict) -> VerifyResponse:
    if status != STATUS_OK:
        error = payload.get("error", "unknown error") if isinstance(payload, dict) else "unknown error"
        raise TransportError(f"verifier returned {status}: {error}")
    return VerifyResponse(
        is_valid=payload["isValid"],
        message=payload["message"],
        timestamp=payload["timestamp"],
    )


class InProcessTransport:
    """Submit through the handler in the same process."""

    def __init__(
        self,
        policy: Optional[VerificationPolicy] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._policy = policy
        self._clock = clock

    def submit(self, proof: PublicProof) -> VerifyResponse:
        now = self._clock() if self._clock is not None else None
        response = handle_verify_request(
            encode_public_proof(proof), now=now, policy=self._policy
        )
        return _response_from(response.status, response.payload)


class HttpTransport:
    """Submit to a running verifier over HTTP."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    def submit(self, proof: PublicProof) -> VerifyResponse:
        url = f"{self._base_url}{VERIFY_PATH}"
        content = encode_public_proof(proof)
        headers = {"content-type": "application/json"}
        try:
            if self._client is not None:
                resp = self._client.post(url, content=content, headers=headers)
            else:
                resp = httpx.post(url, content=content, headers=headers, timeout=self._timeout)
        except httpx.HTTPError as exc:
            raise TransportError(f"request failed: {exc}") from exc

        try:
            if resp.status_code != STATUS_OK:
                return _response_from(resp.status_code, resp.json())
            return decode_response(resp.content)
        except ValueError as exc:
            raise TransportError(
                f"verifier returned non-JSON response ({resp.status_code})"
            ) from exc


@dataclass(frozen=True)
class Submission:
    private_proof: PrivateProof
    public_proof: PublicProof
    response: VerifyResponse


class AgeProofClient:
    """
    Run the prover flow against a verifier transport.

    Proofs that do not claim eligibility are never submitted.

    Example:
        >>> client = AgeProofClient(InProcessTransport())
        >>> submission = client.prove_and_submit("1990-05-01")
        >>> submission.response.is_valid
        True
    """

    def __init__(self, transport: ProofTransport, rng=None) -> None:
        self._transport = transport
        self._rng = rng

    def prove(self, birth_date: DateInput, now: Optional[datetime] = None) -> PrivateProof:
        proof = generate_proof(birth_date, now=now, rng=self._rng)
        if not proof.age_proof:
            raise NotEligibleError("You must be 18 or older to continue")
        return proof

    def prove_and_submit(
        self, birth_date: DateInput, now: Optional[datetime] = None
    ) -> Submission:
        private_proof = self.prove(birth_date, now=now)
        public_proof = to_public_proof(private_proof)
        response = self._transport.submit(public_proof)
        logger.debug("Verifier answered isValid=%s", response.is_valid)
        return Submission(
            private_proof=private_proof,
            public_proof=public_proof,
            response=response,
        )
