"""
Runtime settings for proof verification windows.

Values resolve in precedence order: explicit argument, in-memory override,
environment variable, then the default from ``config``.
"""

from __future__ import annotations

import os
from typing import Final

from .config import DEFAULT_MAX_CLOCK_SKEW_MS, DEFAULT_REPLAY_WINDOW_MS
from .exceptions import ConfigurationError

REPLAY_WINDOW_ENV_VAR: Final[str] = "AGE_PROOF_REPLAY_WINDOW_MS"
MAX_CLOCK_SKEW_ENV_VAR: Final[str] = "AGE_PROOF_MAX_CLOCK_SKEW_MS"

_replay_window_override: int | None = None
_clock_skew_override: int | None = None


def _normalize_ms(value: int | str | None, name: str, allow_zero: bool) -> int | None:
    if value is None:
        return None

    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid {name}: {value!r}")

    if isinstance(value, str):
        if value.strip() == "":
            return None
        try:
            value = int(value.strip())
        except ValueError:
            raise ConfigurationError(f"Invalid {name}: {value!r}") from None

    if not isinstance(value, int):
        raise ConfigurationError(f"Invalid {name}: {value!r}")

    if value < 0 or (value == 0 and not allow_zero):
        raise ConfigurationError(f"Invalid {name}: {value!r}")

    return value


def get_replay_window_ms(prefer: int | str | None = None) -> int:
    """
    Resolve the replay window in milliseconds.

    Args:
        prefer: Optional explicit value.

    Returns:
        Replay window in milliseconds.

    Raises:
        ConfigurationError: If a provided value is invalid.
    """
    preferred = _normalize_ms(prefer, "replay window", allow_zero=False)
    if preferred is not None:
        return preferred

    if _replay_window_override is not None:
        return _replay_window_override

    env_value = _normalize_ms(
        os.getenv(REPLAY_WINDOW_ENV_VAR), "replay window", allow_zero=False
    )
    if env_value is not None:
        return env_value

    return DEFAULT_REPLAY_WINDOW_MS


def get_max_clock_skew_ms(prefer: int | str | None = None) -> int:
    """
    Resolve the tolerated clock skew for future timestamps in milliseconds.

    Raises:
        ConfigurationError: If a provided value is invalid.
    """
    preferred = _normalize_ms(prefer, "clock skew", allow_zero=True)
    if preferred is not None:
        return preferred

    if _clock_skew_override is not None:
        return _clock_skew_override

    env_value = _normalize_ms(
        os.getenv(MAX_CLOCK_SKEW_ENV_VAR), "clock skew", allow_zero=True
    )
    if env_value is not None:
        return env_value

    return DEFAULT_MAX_CLOCK_SKEW_MS


def set_replay_window_ms(value: int | str | None) -> None:
    """Set in-memory replay window override (testing only). None clears it."""
    global _replay_window_override
    _replay_window_override = _normalize_ms(value, "replay window", allow_zero=False)


def set_max_clock_skew_ms(value: int | str | None) -> None:
    """Set in-memory clock skew override (testing only). None clears it."""
    global _clock_skew_override
    _clock_skew_override = _normalize_ms(value, "clock skew", allow_zero=True)
