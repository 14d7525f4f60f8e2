"""
Unit tests for replay window and clock skew resolution.
"""

import pytest

from zk_age_proof.age_protocol import ConfigurationError, VerificationPolicy, settings


def test_default_replay_window_is_one_hour() -> None:
    assert settings.get_replay_window_ms() == 3_600_000


def test_default_clock_skew() -> None:
    assert settings.get_max_clock_skew_ms() == 60_000


def test_env_var_controls_replay_window(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AGE_PROOF_REPLAY_WINDOW_MS", "5000")
    assert settings.get_replay_window_ms() == 5000


def test_prefer_overrides_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AGE_PROOF_REPLAY_WINDOW_MS", "5000")
    assert settings.get_replay_window_ms(prefer=100) == 100


def test_set_override_and_clear(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AGE_PROOF_REPLAY_WINDOW_MS", "5000")
    settings.set_replay_window_ms(42)
    assert settings.get_replay_window_ms() == 42
    settings.set_replay_window_ms(None)
    assert settings.get_replay_window_ms() == 5000


def test_empty_env_var_treated_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AGE_PROOF_REPLAY_WINDOW_MS", "")
    assert settings.get_replay_window_ms() == 3_600_000


def test_zero_skew_allowed() -> None:
    settings.set_max_clock_skew_ms(0)
    assert settings.get_max_clock_skew_ms() == 0


@pytest.mark.parametrize("value", [0, -1, "abc", True, 1.5])
def test_invalid_replay_window_raises(value) -> None:
    with pytest.raises(ConfigurationError, match="Invalid replay window"):
        settings.get_replay_window_ms(prefer=value)


def test_invalid_env_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AGE_PROOF_MAX_CLOCK_SKEW_MS", "-3")
    with pytest.raises(ConfigurationError, match="Invalid clock skew"):
        settings.get_max_clock_skew_ms()


def test_policy_snapshots_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AGE_PROOF_MAX_CLOCK_SKEW_MS", "7")
    policy = VerificationPolicy.from_settings(replay_window_ms=99)
    assert policy == VerificationPolicy(replay_window_ms=99, max_clock_skew_ms=7)
