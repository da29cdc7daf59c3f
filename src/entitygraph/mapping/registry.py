"""Mapping registry: unique constraints and state definers per record type.

One registry belongs to one configuration phase (see ModelBuilder).
Adds are the only mutation path; there is no removal. After freeze()
the registry only serves reads.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import AbstractContextManager, nullcontext

from entitygraph.core.errors import FrozenRegistryError
from entitygraph.core.field.models import FieldDescriptor
from entitygraph.mapping.models import MappingRecord, PropertiesWithSource


class MappingRegistry:
    """Registered unique-constraint sets and state-definer lists.

    Invariants:
        - no two unique-constraint sets of a record type share the same
          field names (in any order)
        - a record type has at most one state-definer entry, and a field
          name appears in it at most once

    Both add operations check and insert under one lock, so duplicate
    detection holds under concurrent registration when thread_safe is on.
    """

    def __init__(self, thread_safe: bool = True) -> None:
        """Initialize empty mapping registry.

        Args:
            thread_safe: Guard add operations with a re-entrant lock.
        """
        self._unique: list[PropertiesWithSource] = []
        self._state_definers: dict[type, PropertiesWithSource] = {}
        self._frozen = False
        self._lock: AbstractContextManager[object] = (
            threading.RLock() if thread_safe else nullcontext()
        )

    # ----- lifecycle -----

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """End the configuration phase. Later adds raise FrozenRegistryError."""
        with self._lock:
            self._frozen = True

    def _check_writable(self, record_type: type) -> None:
        if self._frozen:
            raise FrozenRegistryError(
                f"Mapping registry is frozen; cannot add declarations for {record_type.__name__}"
            )

    # ----- add operations -----

    def add_unique_constraint(self, candidate: PropertiesWithSource) -> PropertiesWithSource | None:
        """Register a unique-constraint set unless a set-equal one exists.

        Args:
            candidate: Validated set to register.

        Returns:
            The already registered set-equal entry (nothing added), or None
            if the candidate was added.

        Raises:
            FrozenRegistryError: If the registry is frozen.
        """
        with self._lock:
            self._check_writable(candidate.source_type)
            for existing in self._unique:
                if existing.same_fields_as(candidate):
                    return existing
            self._unique.append(candidate)
            return None

    def add_state_definers(
        self, record_type: type, fields: Iterable[FieldDescriptor]
    ) -> tuple[str, ...]:
        """Append state-definer fields for a record type, all or nothing.

        Args:
            record_type: Record type the fields belong to.
            fields: Validated fields in call order.

        Returns:
            Names already registered for record_type (nothing added), or an
            empty tuple if every field was appended.

        Raises:
            FrozenRegistryError: If the registry is frozen.
        """
        fields = list(fields)
        with self._lock:
            self._check_writable(record_type)
            entry = self._state_definers.get(record_type)
            if entry is None:
                entry = PropertiesWithSource(source_type=record_type)

            overlap = entry.overlapping(f.name for f in fields)
            if overlap:
                return overlap

            entry.fields.extend(fields)
            self._state_definers.setdefault(record_type, entry)
            return ()

    # ----- read access -----

    def record_types(self) -> tuple[type, ...]:
        """Record types with at least one registered declaration.

        Types with unique constraints come first, in registration order.
        """
        seen: dict[type, None] = {}
        for props in self._unique:
            seen.setdefault(props.source_type, None)
        for record_type in self._state_definers:
            seen.setdefault(record_type, None)
        return tuple(seen)

    def unique_constraints_for(self, record_type: type) -> tuple[PropertiesWithSource, ...]:
        """Unique-constraint sets of a record type, in registration order."""
        return tuple(p.snapshot() for p in self._unique if p.source_type is record_type)

    def state_definers_for(self, record_type: type) -> tuple[FieldDescriptor, ...]:
        """State-definer fields of a record type, in registration order."""
        entry = self._state_definers.get(record_type)
        return tuple(entry.fields) if entry is not None else ()

    def iter_unique_constraints(self) -> Iterator[PropertiesWithSource]:
        for props in tuple(self._unique):
            yield props.snapshot()

    def iter_state_definers(self) -> Iterator[PropertiesWithSource]:
        for entry in tuple(self._state_definers.values()):
            yield entry.snapshot()

    def export(self) -> list[MappingRecord]:
        """Flatten every declaration into MappingRecords.

        Unique sets come first in registration order, followed by one
        state-definer record per record type.
        """
        records = [MappingRecord.from_properties("unique", p) for p in self._unique]
        records.extend(
            MappingRecord.from_properties("stateDefiner", entry)
            for entry in self._state_definers.values()
        )
        return records

    def __len__(self) -> int:
        """Number of registered unique sets plus state-definer entries."""
        return len(self._unique) + len(self._state_definers)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return (
            f"MappingRegistry({state}, unique={len(self._unique)}, "
            f"state_definers={len(self._state_definers)})"
        )
