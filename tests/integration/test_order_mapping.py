"""End-to-end: configure an order model and read it back like the graph manager does."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

import pytest

from entitygraph import (
    FrozenRegistryError,
    InvalidFieldKindError,
    MappingSource,
    ModelBuilder,
)


class Country(Enum):
    NL = "NL"
    DE = "DE"


@dataclass
class Address:
    street: str
    postcode: str
    country: Country


@dataclass
class Customer:
    email: str
    address: Address


@dataclass
class Product:
    sku: str


@dataclass
class OrderLine:
    line_number: int
    product: Product
    quantity: int


@dataclass
class Order:
    order_number: str
    customer_id: int
    lines: list[OrderLine]
    customer: Customer | None = None
    placed_on: date | None = None
    gift_tags: list[str] = field(default_factory=list)


def test_order_scenario(settings):
    """Unique order number, lines defined first, lines never unique."""
    builder = ModelBuilder(settings=settings)
    order = builder.entity(Order)

    order.has_unique(lambda o: o.order_number)
    assert [p.names() for p in builder.registry.unique_constraints_for(Order)] == [
        ("order_number",)
    ]

    order.has_state_definer(lambda o: o.lines)
    assert [f.name for f in builder.registry.state_definers_for(Order)] == ["lines"]

    with pytest.raises(InvalidFieldKindError, match="inappropriate fields to set unique"):
        order.has_unique(lambda o: o.lines)

    assert len(builder.registry) == 2


def test_full_model_is_readable_after_build(settings):
    builder = ModelBuilder(settings=settings)

    builder.entity(Address).has_unique(lambda a: (a.postcode, a.street, a.country))
    builder.entity(Customer).has_unique(lambda c: c.email).has_state_definer(lambda c: c.address)
    builder.entity(Product).has_unique("sku")
    builder.entity(OrderLine).has_unique(lambda line: line.line_number).has_state_definer(
        lambda line: line.product
    )
    (
        builder.entity(Order)
        .has_unique(lambda o: o.order_number)
        .has_state_definer(lambda o: o.customer)
        .has_state_definer(lambda o: o.lines)
    )

    source = builder.build()

    assert isinstance(source, MappingSource)
    assert source.record_types() == (Address, Customer, Product, OrderLine, Order)
    assert [f.name for f in source.state_definers_for(Order)] == ["customer", "lines"]
    assert [f.name for f in source.state_definers_for(Product)] == []
    assert {r.kind for r in source.export()} == {"unique", "stateDefiner"}
    assert len(source.export()) == 8

    with pytest.raises(FrozenRegistryError):
        builder.entity(Order).has_unique(lambda o: o.customer_id)
