"""Shared pytest fixtures: fixed clocks and deterministic randomness."""

from datetime import datetime, timezone

import pytest

from zk_age_proof.age_protocol import settings


class FixedRandomness:
    """Randomness source that returns a repeating byte pattern."""

    def __init__(self, byte: int = 0xAB):
        self.byte = byte
        self.calls = 0

    def get_random_bytes(self, n: int) -> bytes:
        self.calls += 1
        return bytes([self.byte]) * n


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_rng() -> FixedRandomness:
    return FixedRandomness()


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch: pytest.MonkeyPatch):
    settings.set_replay_window_ms(None)
    settings.set_max_clock_skew_ms(None)
    monkeypatch.delenv(settings.REPLAY_WINDOW_ENV_VAR, raising=False)
    monkeypatch.delenv(settings.MAX_CLOCK_SKEW_ENV_VAR, raising=False)
    yield
    settings.set_replay_window_ms(None)
    settings.set_max_clock_skew_ms(None)
