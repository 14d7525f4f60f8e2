"""
Unit tests for proof generation.
"""

import hashlib
import string
from datetime import date, datetime, timedelta, timezone

import pytest

from zk_age_proof.age_protocol import (
    InvalidDateError,
    ProofGenerationError,
    compute_commitment,
    generate_proof,
)
from zk_age_proof.age_protocol.dates import to_epoch_ms


class TestGenerateProof:
    """Test generate_proof output shape and semantics."""

    def test_commitment_is_64_hex(self, fixed_now):
        proof = generate_proof("1990-05-01", now=fixed_now)
        assert len(proof.commitment) == 64
        assert set(proof.commitment) <= set(string.hexdigits.lower())

    def test_salt_is_256_bits_hex(self, fixed_now):
        proof = generate_proof("1990-05-01", now=fixed_now)
        assert len(proof.salt) == 64
        assert len(bytes.fromhex(proof.salt)) == 32

    def test_timestamp_is_now_in_ms(self, fixed_now):
        proof = generate_proof("1990-05-01", now=fixed_now)
        assert proof.timestamp == to_epoch_ms(fixed_now)
        assert isinstance(proof.timestamp, int)

    def test_commitment_is_sha256_of_date_and_salt(self, fixed_now):
        proof = generate_proof(date(1990, 5, 1), now=fixed_now)
        expected = hashlib.sha256(("1990-05-01" + proof.salt).encode("utf-8")).hexdigest()
        assert proof.commitment == expected
        assert compute_commitment("1990-05-01", proof.salt) == proof.commitment

    def test_datetime_input_discards_time_of_day(self, fixed_now, fixed_rng):
        with_time = generate_proof(
            datetime(1990, 5, 1, 23, 59, tzinfo=timezone(timedelta(hours=-5))),
            now=fixed_now,
            rng=fixed_rng,
        )
        plain = generate_proof("1990-05-01", now=fixed_now, rng=fixed_rng)
        assert with_time.commitment == plain.commitment

    def test_deterministic_with_fixed_randomness(self, fixed_now, fixed_rng):
        first = generate_proof("1990-05-01", now=fixed_now, rng=fixed_rng)
        second = generate_proof("1990-05-01", now=fixed_now, rng=fixed_rng)
        assert first == second
        assert first.salt == "ab" * 32
        assert fixed_rng.calls == 2

    def test_unlinkable_across_calls(self, fixed_now):
        commitments = {generate_proof("1990-05-01", now=fixed_now).commitment for _ in range(20)}
        assert len(commitments) == 20

    def test_salt_not_in_repr(self, fixed_now):
        proof = generate_proof("1990-05-01", now=fixed_now)
        assert proof.salt not in repr(proof)


class TestAgeBoundary:
    """Eligibility at the 18th birthday."""

    @pytest.mark.parametrize(
        "birth_date, expected",
        [
            ("2006-06-15", True),
            ("2006-06-16", False),
            ("2005-06-14", True),
            ("2006-06-14", True),
            ("2007-01-01", False),
            ("1950-12-31", True),
        ],
    )
    def test_age_proof_flag(self, fixed_now, birth_date, expected):
        assert generate_proof(birth_date, now=fixed_now).age_proof is expected

    def test_birthday_later_this_year_counts_one_younger(self):
        now = datetime(2024, 3, 1, tzinfo=timezone.utc)
        assert generate_proof("2006-03-02", now=now).age_proof is False
        assert generate_proof("2006-03-01", now=now).age_proof is True


class TestInvalidDates:
    """Input errors at generation time."""

    def test_future_date_rejected(self, fixed_now):
        with pytest.raises(InvalidDateError, match="past"):
            generate_proof("2024-06-16", now=fixed_now)

    def test_today_is_allowed(self, fixed_now):
        proof = generate_proof("2024-06-15", now=fixed_now)
        assert proof.age_proof is False

    @pytest.mark.parametrize("value", ["2023-02-30", "not-a-date", "", "2024-13-01", None, 19900501])
    def test_malformed_date_rejected(self, fixed_now, value):
        with pytest.raises(InvalidDateError):
            generate_proof(value, now=fixed_now)

    def test_invalid_date_error_is_value_error(self, fixed_now):
        with pytest.raises(ValueError):
            generate_proof("garbage", now=fixed_now)


class TestRandomnessFailures:
    """Never fall back to a weak salt."""

    def test_short_salt_aborts(self, fixed_now):
        class ShortRandomness:
            def get_random_bytes(self, n):
                return b"\x00" * (n - 1)

        with pytest.raises(ProofGenerationError):
            generate_proof("1990-05-01", now=fixed_now, rng=ShortRandomness())

    def test_source_exception_propagates(self, fixed_now):
        class BrokenRandomness:
            def get_random_bytes(self, n):
                raise OSError("entropy unavailable")

        with pytest.raises(OSError, match="entropy unavailable"):
            generate_proof("1990-05-01", now=fixed_now, rng=BrokenRandomness())
