"""Field functionality: descriptors, record introspection, selection and classification."""

from entitygraph.core.field.classifier import BUILTIN_SCALARS, classify, element_type_of
from entitygraph.core.field.introspection import record_fields
from entitygraph.core.field.models import FieldDescriptor, FieldKind, FieldSet
from entitygraph.core.field.selector import Selector, resolve_fields

__all__ = [
    # Models
    "FieldDescriptor",
    "FieldKind",
    "FieldSet",
    # Introspection
    "record_fields",
    # Selection
    "Selector",
    "resolve_fields",
    # Classification
    "BUILTIN_SCALARS",
    "classify",
    "element_type_of",
]
