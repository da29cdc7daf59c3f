"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the
model builder.

Usage:
    from entitygraph.config import MappingSettings

    # Load from environment variables (ENTITYGRAPH_*)
    settings = MappingSettings()

    # Or override with explicit values
    settings = MappingSettings(error_policy="collect")
"""

from __future__ import annotations

from typing import Literal

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install entitygraph"
    ) from e


class MappingSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for mapping declarations.

    Attributes:
        error_policy: "raise" stops at the first rejected declaration,
            "collect" records every rejection and fails at build().
        thread_safe: Guard registry adds with a lock.
        warn_redundant_unique: Warn when a unique set contains a smaller
            set that is already unique.

    Environment Variables:
        ENTITYGRAPH_ERROR_POLICY
        ENTITYGRAPH_THREAD_SAFE
        ENTITYGRAPH_WARN_REDUNDANT_UNIQUE
    """

    model_config = SettingsConfigDict(
        env_prefix="ENTITYGRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    error_policy: Literal["raise", "collect"] = "raise"
    thread_safe: bool = True
    warn_redundant_unique: bool = True
