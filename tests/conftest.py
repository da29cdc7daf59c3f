"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from entitygraph import MappingRegistry, MappingSettings, ModelBuilder


class OrderStatus(Enum):
    OPEN = "open"
    SHIPPED = "shipped"


@dataclass
class Customer:
    customer_number: str
    name: str


@dataclass
class OrderLine:
    sku: str
    quantity: int


@dataclass
class Order:
    order_number: str
    customer_id: int
    lines: list[OrderLine]
    placed_on: date | None = None
    status: OrderStatus | None = None
    customer: Customer | None = None
    tags: list[str] = field(default_factory=list)
    notes: dict[str, str] = field(default_factory=dict)


@pytest.fixture
def settings():
    """Default settings, isolated from the environment and any .env file."""
    return MappingSettings(_env_file=None)


@pytest.fixture
def registry():
    """Fresh MappingRegistry."""
    return MappingRegistry()


@pytest.fixture
def builder(registry, settings):
    """ModelBuilder filling the fresh registry with fail-fast policy."""
    return ModelBuilder(registry=registry, settings=settings)


@pytest.fixture
def collecting_builder(registry):
    """ModelBuilder that collects rejected declarations until build()."""
    return ModelBuilder(
        registry=registry,
        settings=MappingSettings(_env_file=None, error_policy="collect"),
    )


@pytest.fixture
def order_cls():
    return Order


@pytest.fixture
def order_line_cls():
    return OrderLine


@pytest.fixture
def customer_cls():
    return Customer
