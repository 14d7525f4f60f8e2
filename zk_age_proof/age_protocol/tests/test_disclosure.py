"""
Unit tests for the disclosure summary.
"""

from zk_age_proof.age_protocol import describe_disclosure, generate_proof, to_public_proof
from zk_age_proof.age_protocol.verifier import verify_claim_only


def test_disclosure_lists_withheld_salt_and_date(fixed_now):
    private = generate_proof("1990-05-01", now=fixed_now)
    public = to_public_proof(private)
    disclosure = describe_disclosure(private, public)

    assert disclosure.proved == "I am 18 years old or older"
    assert disclosure.sent_fields == ["ageProof", "commitment", "timestamp"]
    assert disclosure.withheld == ["birth date", "salt"]


def test_disclosure_includes_verifier_decision(fixed_now):
    private = generate_proof("2012-01-01", now=fixed_now)
    public = to_public_proof(private)
    result = verify_claim_only(public, now=fixed_now)
    disclosure = describe_disclosure(private, public, result)

    assert disclosure.proved == "I am younger than 18"
    assert "the proof was rejected" in disclosure.verifier_learned


def test_disclosure_accepts_transport_response(fixed_now):
    from zk_age_proof.transport.messages import VerifyResponse

    private = generate_proof("1990-05-01", now=fixed_now)
    response = VerifyResponse(is_valid=True, message="ok", timestamp="now")
    disclosure = describe_disclosure(private, to_public_proof(private), response)

    assert disclosure.verifier_learned[-1] == "the proof is valid"
