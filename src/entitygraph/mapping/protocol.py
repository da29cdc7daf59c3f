"""Read-only protocol for consumers of registered mappings.

The graph manager that orders persistence across related records reads
mappings through this protocol once the configuration phase has ended.

Usage:
    registry = builder.build()
    assert isinstance(registry, MappingSource)

    for props in registry.unique_constraints_for(Order):
        ...
    lines_first = registry.state_definers_for(Order)
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from entitygraph.core.field.models import FieldDescriptor
    from entitygraph.mapping.models import MappingRecord, PropertiesWithSource


@runtime_checkable
class MappingSource(Protocol):
    """Read-only enumeration of unique constraints and state definers.

    Implementations return detached copies, so nothing obtained through
    this protocol can change registered mappings.
    """

    def record_types(self) -> tuple[type, ...]:
        """Record types with at least one registered declaration."""
        ...

    def unique_constraints_for(self, record_type: type) -> tuple[PropertiesWithSource, ...]:
        """Unique-constraint sets of a record type, in registration order."""
        ...

    def state_definers_for(self, record_type: type) -> tuple[FieldDescriptor, ...]:
        """State-definer fields of a record type, in registration order."""
        ...

    def iter_unique_constraints(self) -> Iterator[PropertiesWithSource]:
        """All unique-constraint sets, across record types."""
        ...

    def iter_state_definers(self) -> Iterator[PropertiesWithSource]:
        """One accumulated state-definer entry per record type."""
        ...

    def export(self) -> list[MappingRecord]:
        """Flat records for introspection tooling."""
        ...
