"""Tests for ModelBuilder, EntityConfiguration and FieldHandle."""

import warnings
from dataclasses import dataclass

import pytest

from entitygraph import (
    DuplicateConstraintError,
    EmptySelectionError,
    EntityConfiguration,
    FieldKind,
    InvalidFieldKindError,
    MappingConfigurationError,
    MappingRegistry,
    MappingSettings,
    ModelBuilder,
)


@dataclass
class Marker:
    pass


def test_entity_returns_same_configuration(builder, order_cls):
    order = builder.entity(order_cls)

    assert isinstance(order, EntityConfiguration)
    assert builder.entity(order_cls) is order
    assert order.record_type is order_cls


def test_entity_requires_class(builder):
    with pytest.raises(TypeError, match="must be a class"):
        builder.entity("Order")  # type: ignore[arg-type]


def test_entity_without_fields_warns(builder):
    with pytest.warns(UserWarning, match="declares no fields"):
        builder.entity(Marker)


def test_declarations_are_chainable(builder, order_cls):
    builder.entity(order_cls).has_unique(lambda o: o.order_number).has_state_definer(
        lambda o: o.lines
    )

    assert len(builder.registry.unique_constraints_for(order_cls)) == 1
    assert [f.name for f in builder.registry.state_definers_for(order_cls)] == ["lines"]


def test_raise_policy_fails_fast(builder, order_cls):
    """Default policy raises the first rejected declaration."""
    order = builder.entity(order_cls)
    order.has_unique(lambda o: o.order_number)

    with pytest.raises(EmptySelectionError):
        order.has_unique(None)
    with pytest.raises(InvalidFieldKindError):
        order.has_unique(lambda o: o.lines)
    with pytest.raises(DuplicateConstraintError):
        order.has_unique(lambda o: o.order_number)

    assert builder.errors == ()


def test_collect_policy_gathers_errors(collecting_builder, order_cls):
    """Every rejected declaration is collected and build() raises them together."""
    order = collecting_builder.entity(order_cls)
    order.has_unique(lambda o: o.order_number)
    order.has_unique(lambda o: o.order_number)
    order.has_state_definer(lambda o: o.customer_id)
    order.has_state_definer(lambda o: o.lines)

    assert [type(e) for e in collecting_builder.errors] == [
        DuplicateConstraintError,
        InvalidFieldKindError,
    ]

    with pytest.raises(MappingConfigurationError) as exc_info:
        collecting_builder.build()

    assert len(exc_info.value.exceptions) == 2
    assert collecting_builder.registry.frozen
    assert [f.name for f in collecting_builder.registry.state_definers_for(order_cls)] == ["lines"]


def test_build_freezes_and_returns_registry(builder, registry, order_cls):
    builder.entity(order_cls).has_unique(lambda o: o.order_number)

    built = builder.build()

    assert built is registry
    assert built.frozen


def test_builder_creates_its_own_registry(settings, order_cls):
    """Builders never share declarations."""
    first = ModelBuilder(settings=settings)
    second = ModelBuilder(settings=settings)

    first.entity(order_cls).has_unique(lambda o: o.order_number)
    second.entity(order_cls).has_unique(lambda o: o.order_number)

    assert first.registry is not second.registry
    assert isinstance(first.registry, MappingRegistry)


def test_redundant_warning_follows_settings(registry, order_cls):
    builder = ModelBuilder(
        registry=registry,
        settings=MappingSettings(_env_file=None, warn_redundant_unique=False),
    )
    order = builder.entity(order_cls).has_unique(lambda o: o.order_number)

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        order.has_unique(lambda o: (o.order_number, o.customer_id))

    assert len(registry.unique_constraints_for(order_cls)) == 2


def test_value_types_apply_to_builder_declarations(settings, order_cls, customer_cls):
    builder = ModelBuilder(settings=settings, value_types=[customer_cls])

    builder.entity(order_cls).has_unique(lambda o: (o.order_number, o.customer))

    with pytest.raises(InvalidFieldKindError):
        builder.entity(order_cls).has_state_definer(lambda o: o.customer)


def test_apply_runs_configuration_function(builder, order_cls):
    def configure_order(order):
        order.has_unique(lambda o: o.order_number)
        order.has_state_definer(lambda o: o.lines)

    assert builder.apply(order_cls, configure_order) is builder
    assert len(builder.registry) == 2


def test_field_handle(builder, order_cls, order_line_cls):
    handle = builder.entity(order_cls).field(lambda o: o.lines)

    assert handle.name == "lines"
    assert handle.source_type is order_cls
    assert handle.kind is FieldKind.COLLECTION
    assert handle.element_type is order_line_cls
    assert handle.declared_type == list[order_line_cls]


def test_field_handle_uses_first_of_many(builder, order_cls):
    handle = builder.entity(order_cls).field(lambda o: (o.status, o.order_number))

    assert handle.name == "status"
    assert handle.kind is FieldKind.SCALAR_OR_ENUM


def test_field_handle_does_not_touch_registry(builder, order_cls):
    builder.entity(order_cls).field("order_number")

    assert len(builder.registry) == 0


def test_field_handle_empty_selection_always_raises(collecting_builder, order_cls):
    with pytest.raises(EmptySelectionError):
        collecting_builder.entity(order_cls).field(None)
    with pytest.raises(EmptySelectionError):
        collecting_builder.entity(order_cls).field(lambda o: "constant")
