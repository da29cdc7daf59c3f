"""Record type introspection: which fields does a record type declare?"""

from __future__ import annotations

import dataclasses
import inspect
from typing import Any, ClassVar, get_origin, get_type_hints

from entitygraph.core.field.models import FieldDescriptor


def _is_pydantic_model(cls: type) -> bool:
    """Check if class is a Pydantic model without importing pydantic."""
    for base in cls.__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def _resolve(annotation: Any, module: str, localns: dict[str, Any]) -> Any:
    """Evaluate one annotation in its defining module; unresolvable ones stay strings."""
    namespace = {"__annotations__": {"value": annotation}, "__module__": module}
    holder = type("_AnnotationHolder", (), namespace)
    try:
        return get_type_hints(holder, localns=localns, include_extras=True)["value"]
    except (NameError, TypeError):
        return annotation


def _type_hints(cls: type) -> dict[str, Any]:
    """Annotations across the MRO, base classes first, resolved field by field.

    One unresolvable forward reference only leaves that field as a string.
    """
    localns = {cls.__name__: cls}
    hints: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, annotation in inspect.get_annotations(klass).items():
            hints[name] = _resolve(annotation, klass.__module__, localns)
    return hints


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def record_fields(record_type: type) -> dict[str, FieldDescriptor]:
    """Get the fields declared by a record type, in declaration order.

    Pydantic models use ``model_fields``, dataclasses use
    ``dataclasses.fields``; any other class falls back to its annotations
    (ClassVar annotations excluded).

    Args:
        record_type: Record class to inspect.

    Returns:
        Mapping of field name to FieldDescriptor, in declaration order.
    """
    if _is_pydantic_model(record_type):
        model_fields = record_type.model_fields  # type: ignore[attr-defined]
        return {
            name: FieldDescriptor(name, info.annotation, record_type)
            for name, info in model_fields.items()
        }

    hints = _type_hints(record_type)

    if dataclasses.is_dataclass(record_type):
        return {
            f.name: FieldDescriptor(f.name, hints.get(f.name, f.type), record_type)
            for f in dataclasses.fields(record_type)
        }

    return {
        name: FieldDescriptor(name, annotation, record_type)
        for name, annotation in hints.items()
        if not _is_class_var(annotation)
    }
