"""Declaration validators: shape rules and conflict checks before registration.

Usage:
    registry = MappingRegistry()

    result = validate_unique(registry, Order, lambda o: o.order_number)
    assert result.ok

    result = validate_state_definer(registry, Order, lambda o: o.lines)
    result.unwrap()  # raises the MappingError on failure

Every failure leaves the registry exactly as it was.
"""

from __future__ import annotations

import warnings
from collections.abc import Iterable
from typing import Any

from entitygraph.core.errors import (
    DuplicateConstraintError,
    InvalidFieldKindError,
    MappingError,
    MappingResult,
    RedundantConstraintWarning,
    describe_selector,
)
from entitygraph.core.field.classifier import classify, element_type_of
from entitygraph.core.field.models import FieldDescriptor, FieldKind, FieldSet
from entitygraph.core.field.selector import Selector, resolve_fields
from entitygraph.mapping.models import PropertiesWithSource
from entitygraph.mapping.registry import MappingRegistry


def unique_violations(
    fields: FieldSet, value_types: Iterable[type] = ()
) -> list[FieldDescriptor]:
    """Fields that cannot take part in a unique constraint.

    Only builtin scalars and enum/value types are comparable enough to be
    checked for uniqueness; collections and references are not.
    """
    value_types = tuple(value_types)
    return [f for f in fields if not classify(f.declared_type, value_types=value_types).is_value()]


def state_definer_violations(
    fields: FieldSet, value_types: Iterable[type] = ()
) -> list[FieldDescriptor]:
    """Fields that cannot define the state of their owner.

    Allowed are references to other records and collections whose element
    type is a record reference.
    """
    value_types = tuple(value_types)
    violations = []
    for f in fields:
        kind = classify(f.declared_type, value_types=value_types)
        if kind is FieldKind.REFERENCE:
            continue
        if kind is FieldKind.COLLECTION:
            element = element_type_of(f.declared_type)
            if element is not Any and (
                classify(element, value_types=value_types) is FieldKind.REFERENCE
            ):
                continue
        violations.append(f)
    return violations


def validate_unique(
    registry: MappingRegistry,
    record_type: type,
    selector: Selector,
    *,
    value_types: Iterable[type] = (),
    warn_redundant: bool = True,
) -> MappingResult:
    """Validate and register a set of fields that must be unique together.

    Args:
        registry: Registry receiving the constraint.
        record_type: Record type the fields are selected from.
        selector: Selector naming one or more fields of record_type.
        value_types: Extra types accepted as value types.
        warn_redundant: Warn when a registered subset already makes this
            set unique.

    Returns:
        Success, or failure carrying EmptySelectionError,
        InvalidFieldKindError or DuplicateConstraintError.

    Raises:
        FrozenRegistryError: If the registry is frozen.
    """
    try:
        fields = resolve_fields(record_type, selector)
    except MappingError as e:
        return MappingResult.failure(e)

    violations = unique_violations(fields, value_types)
    if violations:
        names = [f.name for f in violations]
        return MappingResult.failure(
            InvalidFieldKindError(
                f"Selector '{describe_selector(selector)}' for '{record_type.__name__}' selects "
                f"inappropriate fields to set unique: {', '.join(names)}. "
                f"Only builtin scalar or enum/value type fields can be set unique.",
                record_type,
                selector,
                fields=names,
            )
        )

    candidate = PropertiesWithSource(source_type=record_type, fields=list(fields))
    existing = registry.add_unique_constraint(candidate)
    if existing is not None:
        return MappingResult.failure(
            DuplicateConstraintError(
                f"Selector '{describe_selector(selector)}' for '{record_type.__name__}' selects "
                f"already selected fields to set unique: {', '.join(existing.names())}",
                record_type,
                selector,
                fields=existing.names(),
            )
        )

    if warn_redundant:
        for other in registry.unique_constraints_for(record_type):
            if other.name_set() < candidate.name_set():
                warnings.warn(
                    f"Unique set ({', '.join(candidate.names())}) on {record_type.__name__} "
                    f"contains ({', '.join(other.names())}), which is already unique.",
                    RedundantConstraintWarning,
                    stacklevel=3,
                )
                break

    return MappingResult.success()


def validate_state_definer(
    registry: MappingRegistry,
    record_type: type,
    selector: Selector,
    *,
    value_types: Iterable[type] = (),
) -> MappingResult:
    """Validate and register fields whose state must be defined before the owner's.

    Repeated calls for the same record type accumulate into one ordered
    list. A call selecting any already registered field is rejected as a
    whole.

    Args:
        registry: Registry receiving the fields.
        record_type: Record type the fields are selected from.
        selector: Selector naming one or more fields of record_type.
        value_types: Extra types treated as value types (and so rejected).

    Returns:
        Success, or failure carrying EmptySelectionError,
        InvalidFieldKindError or DuplicateConstraintError.

    Raises:
        FrozenRegistryError: If the registry is frozen.
    """
    try:
        fields = resolve_fields(record_type, selector)
    except MappingError as e:
        return MappingResult.failure(e)

    violations = state_definer_violations(fields, value_types)
    if violations:
        names = [f.name for f in violations]
        return MappingResult.failure(
            InvalidFieldKindError(
                f"Selector '{describe_selector(selector)}' for '{record_type.__name__}' selects "
                f"inappropriate fields to define state of: {', '.join(names)}. "
                f"Only fields of record type or collections of record types can define state.",
                record_type,
                selector,
                fields=names,
            )
        )

    overlap = registry.add_state_definers(record_type, fields)
    if overlap:
        return MappingResult.failure(
            DuplicateConstraintError(
                f"Selector '{describe_selector(selector)}' for '{record_type.__name__}' selects "
                f"already selected fields to define state of: {', '.join(overlap)}",
                record_type,
                selector,
                fields=overlap,
            )
        )

    return MappingResult.success()
