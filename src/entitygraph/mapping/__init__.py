"""Mapping functionality: validators, registry, configuration facade and builder.

Architecture Note:
    Unlike core/, this package holds state: a MappingRegistry accumulates
    validated declarations during one configuration phase.
"""

from entitygraph.mapping.builder import ModelBuilder
from entitygraph.mapping.configuration import EntityConfiguration, FieldHandle
from entitygraph.mapping.models import MappingKind, MappingRecord, PropertiesWithSource, type_name
from entitygraph.mapping.protocol import MappingSource
from entitygraph.mapping.registry import MappingRegistry
from entitygraph.mapping.validators import (
    state_definer_violations,
    unique_violations,
    validate_state_definer,
    validate_unique,
)

__all__ = [
    # Models
    "PropertiesWithSource",
    "MappingRecord",
    "MappingKind",
    "type_name",
    # Registry
    "MappingRegistry",
    "MappingSource",
    # Validators
    "validate_unique",
    "validate_state_definer",
    "unique_violations",
    "state_definer_violations",
    # Facade
    "ModelBuilder",
    "EntityConfiguration",
    "FieldHandle",
]
