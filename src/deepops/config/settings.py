"""Configuration settings using Pydantic Settings.

Provides typed engine configuration with environment variable support.

Usage:
    from deepops.config import EngineSettings, configure

    # Load from environment variables (DEEPOPS_*)
    settings = EngineSettings()

    # Or override with explicit values
    configure(hash_seed=31, hash_multiplier=37)
"""

from __future__ import annotations

from typing import Any

try:
    from pydantic import field_validator
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for the config module. "
        "Install with: pip install deepops"
    ) from e


class EngineSettings(BaseSettings):  # type: ignore[misc]
    """Configuration shared by the four engines.

    Attributes:
        hash_seed: Starting value of every hash accumulation.
        hash_multiplier: Odd multiplier applied before each contribution.
        hash_bits: Width of the hash result; accumulation wraps modulo 2**bits.
        trace: Log every recursion entry when no diagnostic hook is passed.
        trace_logger: Logger name used by the tracing hook.

    Environment Variables:
        DEEPOPS_HASH_SEED
        DEEPOPS_HASH_MULTIPLIER
        DEEPOPS_HASH_BITS
        DEEPOPS_TRACE
        DEEPOPS_TRACE_LOGGER
    """

    model_config = SettingsConfigDict(
        env_prefix="DEEPOPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    hash_seed: int = 17
    hash_multiplier: int = 23
    hash_bits: int = 64
    trace: bool = False
    trace_logger: str = "deepops.trace"

    @field_validator("hash_multiplier")
    @classmethod
    def _multiplier_is_odd(cls, value: int) -> int:
        if value % 2 == 0:
            raise ValueError(f"hash_multiplier must be odd, got {value}")
        return value

    @field_validator("hash_bits")
    @classmethod
    def _bits_in_range(cls, value: int) -> int:
        if not 8 <= value <= 128:
            raise ValueError(f"hash_bits must be between 8 and 128, got {value}")
        return value

    @property
    def hash_mask(self) -> int:
        """Mask applied after every accumulation step."""
        return (1 << self.hash_bits) - 1


_settings: EngineSettings | None = None


def get_settings() -> EngineSettings:
    """Access the process-wide engine settings.

    Returns:
        The cached EngineSettings, loaded from the environment on first use.
    """
    global _settings
    if _settings is None:
        _settings = EngineSettings()
    return _settings


def configure(**overrides: Any) -> EngineSettings:
    """Replace the process-wide settings.

    Args:
        **overrides: Field values; anything not given is read from the environment.

    Returns:
        The new settings instance.
    """
    global _settings
    _settings = EngineSettings(**overrides)
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next access reloads the environment."""
    global _settings
    _settings = None
