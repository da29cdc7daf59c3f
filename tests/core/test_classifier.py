"""Tests for field type classification.

Critical Invariants:
- Builtin scalars come from one explicit table
- Nullable values classify like the value itself
- Collections always expose an element type
- Anything unrecognised is a record reference
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum, IntFlag
from typing import Annotated, Any, Literal, NamedTuple, NewType, Optional
from uuid import UUID

import pytest

from entitygraph import BUILTIN_SCALARS, FieldKind, classify, element_type_of


class Color(Enum):
    RED = 1
    BLUE = 2


class Permission(IntFlag):
    READ = 1
    WRITE = 2


@dataclass
class Address:
    street: str


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str


class Point(NamedTuple):
    x: int
    y: int


class Sku(str):
    pass


OrderId = NewType("OrderId", int)

type Addresses = list[Address]


@pytest.mark.parametrize(
    "declared_type",
    [
        int, float, complex, bool, str, bytes, bytearray,
        date, datetime, time, timedelta, Decimal, UUID,
    ],
)
def test_builtin_scalar_table(declared_type):
    """Every member of the explicit table classifies as builtin scalar."""
    assert declared_type in BUILTIN_SCALARS
    assert classify(declared_type) is FieldKind.BUILTIN_SCALAR


def test_builtin_scalar_subclass_and_newtype():
    """Subclasses and NewTypes of builtin scalars stay builtin scalars."""
    assert classify(Sku) is FieldKind.BUILTIN_SCALAR
    assert classify(OrderId) is FieldKind.BUILTIN_SCALAR


def test_optional_builtin_scalar():
    assert classify(int | None) is FieldKind.BUILTIN_SCALAR
    assert classify(Optional[str]) is FieldKind.BUILTIN_SCALAR  # noqa: UP045


def test_enums_are_scalar_or_enum():
    """Enums, including int-based flags, are value types rather than builtins."""
    assert classify(Color) is FieldKind.SCALAR_OR_ENUM
    assert classify(Permission) is FieldKind.SCALAR_OR_ENUM


def test_nullable_enum_is_scalar_or_enum():
    """CRITICAL: Nullable enums classify as enums.

    Why: Optional status fields are common unique-constraint members.
    """
    assert classify(Color | None) is FieldKind.SCALAR_OR_ENUM
    assert classify(Optional[Color]) is FieldKind.SCALAR_OR_ENUM  # noqa: UP045


def test_literal_is_scalar_or_enum():
    assert classify(Literal["a", "b"]) is FieldKind.SCALAR_OR_ENUM


def test_annotated_is_unwrapped():
    assert classify(Annotated[int, "positive"]) is FieldKind.BUILTIN_SCALAR
    assert classify(Annotated[list[Address], "lines"]) is FieldKind.COLLECTION


def test_caller_declared_value_types():
    """Types passed as value_types classify as value types, not references."""
    assert classify(Money) is FieldKind.REFERENCE
    assert classify(Money, value_types=(Money,)) is FieldKind.SCALAR_OR_ENUM
    assert classify(Money | None, value_types=[Money]) is FieldKind.SCALAR_OR_ENUM


@pytest.mark.parametrize(
    "declared_type",
    [
        list[Address],
        set[int],
        frozenset[str],
        tuple[Address, ...],
        Sequence[Address],
        dict[str, Address],
        Mapping[str, int],
        list,
        list[Address] | None,
    ],
)
def test_collections(declared_type):
    assert classify(declared_type) is FieldKind.COLLECTION


def test_strings_are_not_collections():
    """str, bytes and bytearray are iterable but are scalars."""
    assert classify(str) is FieldKind.BUILTIN_SCALAR
    assert classify(bytes) is FieldKind.BUILTIN_SCALAR
    assert classify(bytearray) is FieldKind.BUILTIN_SCALAR


def test_element_types():
    assert element_type_of(list[Address]) is Address
    assert element_type_of(tuple[Address, ...]) is Address
    assert element_type_of(dict[str, Address]) is Address
    assert element_type_of(set[int]) is int
    assert element_type_of(Optional[list[Address]]) is Address  # noqa: UP045
    assert element_type_of(Addresses) is Address


def test_element_type_of_unparameterised_collection_is_any():
    assert element_type_of(list) is Any
    assert element_type_of(dict) is Any


def test_element_type_of_non_collection_is_none():
    assert element_type_of(int) is None
    assert element_type_of(Address) is None


def test_user_classes_are_references():
    assert classify(Address) is FieldKind.REFERENCE
    assert classify(Address | None) is FieldKind.REFERENCE


def test_namedtuple_is_reference_not_collection():
    """NamedTuples are records, even though they subclass tuple."""
    assert classify(Point) is FieldKind.REFERENCE


def test_unresolved_forward_reference_is_reference():
    assert classify("Customer") is FieldKind.REFERENCE


def test_type_alias_is_unwrapped():
    assert classify(Addresses) is FieldKind.COLLECTION


def test_union_classification():
    """Multi-member unions take the common kind, otherwise reference."""
    assert classify(int | str) is FieldKind.BUILTIN_SCALAR
    assert classify(int | Color) is FieldKind.SCALAR_OR_ENUM
    assert classify(list[int] | set[int]) is FieldKind.COLLECTION
    assert classify(Address | int) is FieldKind.REFERENCE


def test_classification_is_deterministic():
    kinds = {classify(list[Address]) for _ in range(10)}
    assert kinds == {FieldKind.COLLECTION}
