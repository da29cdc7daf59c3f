"""Field models: descriptors, ordered field sets and field kinds."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, overload


class FieldKind(Enum):
    """Shape category of a field's declared type."""

    SCALAR_OR_ENUM = auto()
    """Value type: enums, literals and caller-declared value types."""

    BUILTIN_SCALAR = auto()
    """Member of the builtin scalar table (numbers, text, temporal, ids)."""

    COLLECTION = auto()
    """Sequence, set or mapping shaped type with one element type."""

    REFERENCE = auto()
    """Anything else, assumed to be a user-defined record type."""

    def is_value(self) -> bool:
        """Check if this kind holds a simple comparable value."""
        return self in (FieldKind.SCALAR_OR_ENUM, FieldKind.BUILTIN_SCALAR)


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One field of a record type.

    Attributes:
        name: Field name, unique within the declaring type.
        declared_type: Resolved annotation, e.g. ``int`` or ``list[OrderLine]``.
        source_type: Record type declaring the field.
    """

    name: str
    declared_type: Any
    source_type: type

    @property
    def element_type(self) -> Any | None:
        """Generic argument of a collection annotation, None for non-collections."""
        from entitygraph.core.field.classifier import element_type_of

        return element_type_of(self.declared_type)

    def __str__(self) -> str:
        return f"{self.source_type.__name__}.{self.name}"


class FieldSet:
    """Ordered fields produced by a single selector call.

    Order is kept for display and for appending; equality between sets
    of declarations is checked on names only (see name_set()).
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Iterable[FieldDescriptor] = ()) -> None:
        unique: dict[str, FieldDescriptor] = {}
        for f in fields:
            unique.setdefault(f.name, f)  # first occurrence wins
        self._fields: tuple[FieldDescriptor, ...] = tuple(unique.values())

    def names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self._fields)

    def name_set(self) -> frozenset[str]:
        return frozenset(f.name for f in self._fields)

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __bool__(self) -> bool:
        return bool(self._fields)

    @overload
    def __getitem__(self, index: int) -> FieldDescriptor: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[FieldDescriptor, ...]: ...

    def __getitem__(self, index: int | slice) -> FieldDescriptor | tuple[FieldDescriptor, ...]:
        return self._fields[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldSet):
            return NotImplemented
        return self._fields == other._fields

    def __hash__(self) -> int:
        return hash(self._fields)

    def __repr__(self) -> str:
        return f"FieldSet({', '.join(self.names())})"
