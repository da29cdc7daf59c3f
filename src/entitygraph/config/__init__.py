"""Configuration module using Pydantic Settings.

Provides typed configuration for the model builder with environment
variable support.

Usage:
    from entitygraph.config import MappingSettings

    settings = MappingSettings(error_policy="collect")
"""

from entitygraph.config.settings import MappingSettings

__all__ = [
    "MappingSettings",
]
