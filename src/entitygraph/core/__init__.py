"""Core functionalities: stateless primitives for mapping declarations.

Architecture Note:
    core/ contains pure, stateless functionality: field descriptors,
    selection, type classification and the error taxonomy.
    For the stateful registry and configuration facade, see mapping/.
"""

from entitygraph.core.errors import (
    DuplicateConstraintError,
    EmptySelectionError,
    ErrorKind,
    FrozenRegistryError,
    InvalidFieldKindError,
    MappingConfigurationError,
    MappingError,
    MappingResult,
    RedundantConstraintWarning,
)
from entitygraph.core.field import (
    BUILTIN_SCALARS,
    FieldDescriptor,
    FieldKind,
    FieldSet,
    Selector,
    classify,
    element_type_of,
    record_fields,
    resolve_fields,
)

__all__ = [
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
    # Field
    "FieldDescriptor",
    "FieldKind",
    "FieldSet",
    "Selector",
    "record_fields",
    "resolve_fields",
    "BUILTIN_SCALARS",
    "classify",
    "element_type_of",
]
