"""entitygraph: uniqueness and state-definer mappings for record persistence ordering.

Usage:
    from dataclasses import dataclass
    from entitygraph import ModelBuilder

    @dataclass
    class OrderLine:
        sku: str

    @dataclass
    class Order:
        order_number: str
        customer_id: int
        lines: list[OrderLine]

    builder = ModelBuilder()
    order = builder.entity(Order)
    order.has_unique(lambda o: o.order_number)
    order.has_state_definer(lambda o: o.lines)

    registry = builder.build()  # frozen, read by the graph manager
"""

__version__ = "0.1.0"

# Core primitives
from entitygraph.core import (
    BUILTIN_SCALARS,
    DuplicateConstraintError,
    EmptySelectionError,
    ErrorKind,
    FieldDescriptor,
    FieldKind,
    FieldSet,
    FrozenRegistryError,
    InvalidFieldKindError,
    MappingConfigurationError,
    MappingError,
    MappingResult,
    RedundantConstraintWarning,
    classify,
    element_type_of,
    record_fields,
    resolve_fields,
)

# Configuration
from entitygraph.config import MappingSettings

# Mapping
from entitygraph.mapping import (
    EntityConfiguration,
    FieldHandle,
    MappingRecord,
    MappingRegistry,
    MappingSource,
    ModelBuilder,
    PropertiesWithSource,
    validate_state_definer,
    validate_unique,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "FieldDescriptor",
    "FieldKind",
    "FieldSet",
    "BUILTIN_SCALARS",
    "classify",
    "element_type_of",
    "record_fields",
    "resolve_fields",
    # Errors
    "ErrorKind",
    "MappingError",
    "EmptySelectionError",
    "InvalidFieldKindError",
    "DuplicateConstraintError",
    "FrozenRegistryError",
    "MappingConfigurationError",
    "RedundantConstraintWarning",
    "MappingResult",
    # Config
    "MappingSettings",
    # Mapping
    "ModelBuilder",
    "EntityConfiguration",
    "FieldHandle",
    "MappingRegistry",
    "MappingSource",
    "MappingRecord",
    "PropertiesWithSource",
    "validate_unique",
    "validate_state_definer",
]
