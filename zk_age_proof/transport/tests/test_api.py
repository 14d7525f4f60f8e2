"""HTTP tests for the verification endpoint."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from zk_age_proof.age_protocol import VerificationPolicy, generate_proof, to_public_proof
from zk_age_proof.age_protocol.dates import to_epoch_ms
from zk_age_proof.transport import api as api_module
from zk_age_proof.transport.api import create_app


@pytest.fixture
def client(fixed_now) -> TestClient:
    return TestClient(create_app(clock=lambda: fixed_now), raise_server_exceptions=False)


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_verify_accepts_generated_proof(client: TestClient, fixed_now) -> None:
    public = to_public_proof(generate_proof("1990-05-01", now=fixed_now))
    resp = client.post("/api/verify-proof", json=public.to_dict())
    assert resp.status_code == 200
    body = resp.json()
    assert body["isValid"] is True
    assert body["message"] == "Proof accepted: User claims to be over 18"
    assert body["timestamp"]


def test_verify_expired_is_200_false(client: TestClient, fixed_now) -> None:
    body = {
        "commitment": "ab" * 32,
        "ageProof": True,
        "timestamp": to_epoch_ms(fixed_now) - 3_600_001,
    }
    resp = client.post("/api/verify-proof", json=body)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Proof has expired"


def test_verify_missing_commitment_is_400(client: TestClient) -> None:
    resp = client.post("/api/verify-proof", json={"ageProof": True, "timestamp": 1})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid proof structure"


def test_verify_custom_policy(fixed_now) -> None:
    app = create_app(
        policy=VerificationPolicy(replay_window_ms=10, max_clock_skew_ms=0),
        clock=lambda: fixed_now,
    )
    body = {"commitment": "ab" * 32, "ageProof": True, "timestamp": to_epoch_ms(fixed_now) - 11}
    resp = TestClient(app).post("/api/verify-proof", json=body)
    assert resp.json()["isValid"] is False


def test_unhandled_error_is_generic_500(fixed_now, monkeypatch) -> None:
    def _boom(*args, **kwargs):
        raise RuntimeError("secret detail")

    monkeypatch.setattr(api_module, "handle_verify_request", _boom)
    client = TestClient(create_app(clock=lambda: fixed_now), raise_server_exceptions=False)
    resp = client.post("/api/verify-proof", json={})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to verify proof"}
    assert "secret detail" not in resp.text
