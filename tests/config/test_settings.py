"""Tests for engine settings.

Why these tests exist:
- Hash constants come from settings; invalid ones must be rejected early
- Environment variables configure a deployment without code changes
"""

import pytest
from pydantic import ValidationError

from deepops.config import EngineSettings, configure, get_settings, reset_settings


def test_defaults() -> None:
    settings = EngineSettings()

    assert settings.hash_seed == 17
    assert settings.hash_multiplier == 23
    assert settings.hash_bits == 64
    assert settings.trace is False
    assert settings.trace_logger == "deepops.trace"
    assert settings.hash_mask == (1 << 64) - 1


def test_environment_variables(monkeypatch) -> None:
    monkeypatch.setenv("DEEPOPS_HASH_SEED", "31")
    monkeypatch.setenv("DEEPOPS_HASH_BITS", "32")
    monkeypatch.setenv("DEEPOPS_TRACE", "true")

    settings = EngineSettings()

    assert settings.hash_seed == 31
    assert settings.hash_bits == 32
    assert settings.trace is True
    assert settings.hash_mask == 0xFFFFFFFF


def test_even_multiplier_rejected() -> None:
    with pytest.raises(ValidationError, match="must be odd"):
        EngineSettings(hash_multiplier=24)


@pytest.mark.parametrize("bits", [0, 7, 129])
def test_hash_bits_range(bits) -> None:
    with pytest.raises(ValidationError, match="between 8 and 128"):
        EngineSettings(hash_bits=bits)


def test_settings_frozen() -> None:
    settings = EngineSettings()

    with pytest.raises(ValidationError):
        settings.hash_seed = 1  # type: ignore[misc]


def test_get_settings_cached() -> None:
    assert get_settings() is get_settings()


def test_configure_replaces_global() -> None:
    configured = configure(hash_seed=5)

    assert get_settings() is configured
    assert get_settings().hash_seed == 5

    reset_settings()
    assert get_settings().hash_seed == 17
