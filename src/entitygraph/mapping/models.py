"""Mapping models: registered field sets and their export records."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Literal

from entitygraph.core.field.models import FieldDescriptor

MappingKind = Literal["unique", "stateDefiner"]


def type_name(cls: type) -> str:
    """Fully qualified name used to identify record types in exports."""
    return f"{cls.__module__}.{cls.__qualname__}"


@dataclass(slots=True)
class PropertiesWithSource:
    """Fields of one record type grouped by a single declaration.

    Attributes:
        source_type: Record type the fields belong to.
        fields: Fields in declaration order.
    """

    source_type: type
    fields: list[FieldDescriptor] = field(default_factory=list)

    def names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def name_set(self) -> frozenset[str]:
        return frozenset(f.name for f in self.fields)

    def same_fields_as(self, other: PropertiesWithSource) -> bool:
        """Check set-equality: same source type, same field names in any order."""
        return self.source_type is other.source_type and self.name_set() == other.name_set()

    def overlapping(self, names: Iterable[str]) -> tuple[str, ...]:
        """Names from `names` that are already part of this set, in given order."""
        existing = self.name_set()
        return tuple(n for n in names if n in existing)

    def snapshot(self) -> PropertiesWithSource:
        """Copy detached from later appends."""
        return PropertiesWithSource(self.source_type, list(self.fields))


@dataclass(frozen=True, slots=True)
class MappingRecord:
    """Flat, serialisable view of one registered declaration.

    Example:
        MappingRecord(
            type_name="shop.models.Order",
            kind="unique",
            field_names=("order_number",),
        )
    """

    type_name: str
    kind: MappingKind
    field_names: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "typeName": self.type_name,
            "kind": self.kind,
            "fieldNames": list(self.field_names),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MappingRecord:
        """Create from dictionary (for deserialization)."""
        kind = data["kind"]
        if kind not in ("unique", "stateDefiner"):
            raise ValueError(f"Unknown mapping kind: {kind!r}")
        return cls(
            type_name=data["typeName"],
            kind=kind,
            field_names=tuple(data.get("fieldNames", ())),
        )

    @classmethod
    def from_properties(cls, kind: MappingKind, props: PropertiesWithSource) -> MappingRecord:
        return cls(type_name=type_name(props.source_type), kind=kind, field_names=props.names())
