"""Per-record-type configuration entry points.

Usage:
    order = builder.entity(Order)
    order.has_unique(lambda o: o.order_number)
    order.has_unique(lambda o: (o.customer_id, o.placed_on))
    order.has_state_definer(lambda o: o.lines)

    number = order.field(lambda o: o.order_number)
    number.kind  # FieldKind.BUILTIN_SCALAR
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Self

from entitygraph.core.field.classifier import classify, element_type_of
from entitygraph.core.field.models import FieldDescriptor, FieldKind
from entitygraph.core.field.selector import Selector, resolve_fields
from entitygraph.mapping.validators import validate_state_definer, validate_unique

if TYPE_CHECKING:
    from entitygraph.mapping.builder import ModelBuilder


@dataclass(frozen=True, slots=True)
class FieldHandle:
    """A single field handed over for further per-field configuration."""

    source_type: type
    descriptor: FieldDescriptor
    value_types: tuple[type, ...] = ()

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def declared_type(self) -> Any:
        return self.descriptor.declared_type

    @property
    def kind(self) -> FieldKind:
        return classify(self.descriptor.declared_type, value_types=self.value_types)

    @property
    def element_type(self) -> Any | None:
        return element_type_of(self.descriptor.declared_type)


class EntityConfiguration[T]:
    """Declarations for one record type, validated against its builder's registry.

    Unique and state-definer declarations are chainable. How a rejected
    declaration is reported depends on the builder's error policy: raised
    immediately ("raise") or collected until build() ("collect").
    """

    def __init__(self, builder: ModelBuilder, record_type: type[T]) -> None:
        self._builder = builder
        self._record_type = record_type

    @property
    def record_type(self) -> type[T]:
        return self._record_type

    def has_unique(self, selector: Selector) -> Self:
        """Mark fields whose combined values must be unique across records.

        Args:
            selector: Field(s) of the record type, e.g. ``lambda o: (o.a, o.b)``.

        Returns:
            This configuration, for chaining.

        Raises:
            EmptySelectionError: If the selector selects no field.
            InvalidFieldKindError: If a field is a collection or a reference.
            DuplicateConstraintError: If the same set (any order) is already unique.
        """
        result = validate_unique(
            self._builder.registry,
            self._record_type,
            selector,
            value_types=self._builder.value_types,
            warn_redundant=self._builder.settings.warn_redundant_unique,
        )
        self._builder.report(result)
        return self

    def has_state_definer(self, selector: Selector) -> Self:
        """Mark fields whose state must be defined before this record's state.

        These are records (or collections of records) this record's identity
        depends on, typically one-to-one dependants. Parents reached through
        many-to-one relationships are ordered without being marked.

        Args:
            selector: Field(s) of the record type, e.g. ``lambda o: o.lines``.

        Returns:
            This configuration, for chaining.

        Raises:
            EmptySelectionError: If the selector selects no field.
            InvalidFieldKindError: If a field holds values or a collection of values.
            DuplicateConstraintError: If any selected field is already a state definer.
        """
        result = validate_state_definer(
            self._builder.registry,
            self._record_type,
            selector,
            value_types=self._builder.value_types,
        )
        self._builder.report(result)
        return self

    def field(self, selector: Selector) -> FieldHandle:
        """Get a handle on one field of the record type.

        Multi-field selectors are accepted; the handle addresses the first
        selected field. Empty selections always raise, whatever the error
        policy, since there is no handle to return.

        Raises:
            EmptySelectionError: If the selector selects no field.
        """
        fields = resolve_fields(self._record_type, selector)
        return FieldHandle(self._record_type, fields[0], self._builder.value_types)

    def __repr__(self) -> str:
        return f"EntityConfiguration({self._record_type.__name__})"

