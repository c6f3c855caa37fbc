"""Configuration module using Pydantic Settings.

Usage:
    from deepops.config import EngineSettings, get_settings

    settings = get_settings()
    custom = EngineSettings(hash_seed=31)
"""

from deepops.config.settings import EngineSettings, configure, get_settings, reset_settings

__all__ = [
    "EngineSettings",
    "configure",
    "get_settings",
    "reset_settings",
]
