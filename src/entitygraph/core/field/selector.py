"""Field selection: turn a selector into the fields of a record type it names.

Usage:
    resolve_fields(Order, lambda o: o.order_number)
    resolve_fields(Order, lambda o: (o.order_number, o.customer_id))
    resolve_fields(Order, "order_number")
    resolve_fields(Order, ("order_number", "customer_id"))
    resolve_fields(Order, order_fields["lines"])  # FieldDescriptor

Callables are evaluated once against a recording stand-in for the record,
never against real data. Only direct field access is recognised: constants,
computed values and nested paths select nothing.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from entitygraph.core.errors import EmptySelectionError, describe_selector
from entitygraph.core.field.introspection import record_fields
from entitygraph.core.field.models import FieldDescriptor, FieldSet

Selector = (
    Callable[[Any], Any] | str | FieldDescriptor | Sequence[str] | Sequence[FieldDescriptor] | None
)


class _FieldAccess:
    """Marker returned for ``record.field`` inside a selector."""

    __slots__ = ("descriptor",)

    def __init__(self, descriptor: FieldDescriptor) -> None:
        self.descriptor = descriptor

    def __getattr__(self, name: str) -> Any:
        raise AttributeError(
            f"Nested access '{self.descriptor.name}.{name}' is not a field of "
            f"{self.descriptor.source_type.__name__}"
        )

    def __repr__(self) -> str:
        return f"<field {self.descriptor}>"


class _RecordProbe:
    """Stand-in for a record instance that answers attribute access with markers."""

    __slots__ = ("__record_type", "__fields")

    def __init__(self, record_type: type, fields: dict[str, FieldDescriptor]) -> None:
        object.__setattr__(self, "_RecordProbe__record_type", record_type)
        object.__setattr__(self, "_RecordProbe__fields", fields)

    def __getattr__(self, name: str) -> _FieldAccess:
        fields = self.__fields
        if name not in fields:
            record_type = self.__record_type
            raise AttributeError(f"{record_type.__name__} has no field '{name}'")
        return _FieldAccess(fields[name])

    def __setattr__(self, name: str, value: Any) -> None:
        raise TypeError("Selectors must not assign to the record")


def _empty(record_type: type, selector: Any, reason: str) -> EmptySelectionError:
    return EmptySelectionError(
        f"Selector '{describe_selector(selector)}' for '{record_type.__name__}' {reason}",
        record_type,
        selector,
    )


def _from_callable(
    record_type: type,
    selector: Callable[[Any], Any],
    fields: dict[str, FieldDescriptor],
) -> list[FieldDescriptor]:
    try:
        selected = selector(_RecordProbe(record_type, fields))
    except (AttributeError, TypeError) as e:
        raise _empty(record_type, selector, f"is not a field access: {e}") from e

    items = list(selected) if isinstance(selected, (tuple, list)) else [selected]
    if not all(isinstance(item, _FieldAccess) for item in items):
        raise _empty(record_type, selector, "selects something other than a field")
    return [item.descriptor for item in items]


def _from_names(
    record_type: type,
    selector: Any,
    names: Sequence[str],
    fields: dict[str, FieldDescriptor],
) -> list[FieldDescriptor]:
    unknown = [n for n in names if n not in fields]
    if unknown:
        raise _empty(record_type, selector, f"names unknown field(s): {', '.join(unknown)}")
    return [fields[n] for n in names]


def _from_descriptors(
    record_type: type,
    selector: Any,
    descriptors: Sequence[FieldDescriptor],
    fields: dict[str, FieldDescriptor],
) -> list[FieldDescriptor]:
    foreign = [str(d) for d in descriptors if d.source_type is not record_type]
    if foreign:
        raise _empty(
            record_type, selector, f"selects field(s) of another type: {', '.join(foreign)}"
        )
    return _from_names(record_type, selector, [d.name for d in descriptors], fields)


def resolve_fields(record_type: type, selector: Selector) -> FieldSet:
    """Resolve a selector into the ordered fields it selects on record_type.

    Args:
        record_type: Record type the selector is evaluated against.
        selector: Callable, field name(s) or FieldDescriptor(s).

    Returns:
        Non-empty FieldSet in selector order (repeats collapsed).

    Raises:
        EmptySelectionError: If the selector is None or selects no field of
            record_type.
    """
    if selector is None:
        raise _empty(record_type, selector, "is missing")

    fields = record_fields(record_type)

    if isinstance(selector, str):
        resolved = _from_names(record_type, selector, [selector], fields)
    elif isinstance(selector, FieldDescriptor):
        resolved = _from_descriptors(record_type, selector, [selector], fields)
    elif callable(selector):
        resolved = _from_callable(record_type, selector, fields)
    elif isinstance(selector, (tuple, list)) and all(isinstance(s, str) for s in selector):
        resolved = _from_names(record_type, selector, selector, fields)
    elif isinstance(selector, (tuple, list)) and all(
        isinstance(s, FieldDescriptor) for s in selector
    ):
        resolved = _from_descriptors(record_type, selector, selector, fields)
    else:
        raise _empty(record_type, selector, "is not a recognised selector")

    field_set = FieldSet(resolved)
    if not field_set:
        raise _empty(record_type, selector, "selects no field")
    return field_set
