"""Type classification for declared field types.

Maps a field annotation onto one FieldKind. Both declaration validators
use this module, so it is the single place deciding what a "value",
a "collection" and a "reference" are.

Usage:
    classify(int)                       # FieldKind.BUILTIN_SCALAR
    classify(Status | None)             # FieldKind.SCALAR_OR_ENUM
    classify(list[OrderLine])           # FieldKind.COLLECTION
    element_type_of(list[OrderLine])    # OrderLine
    classify(Customer)                  # FieldKind.REFERENCE
"""

from __future__ import annotations

import collections.abc
import datetime
import decimal
import enum
import uuid
from collections.abc import Iterable
from types import NoneType, UnionType
from typing import (
    Annotated,
    Any,
    Literal,
    NewType,
    TypeAliasType,
    Union,
    get_args,
    get_origin,
)

from entitygraph.core.field.models import FieldKind

BUILTIN_SCALARS: frozenset[type] = frozenset(
    {
        int,
        float,
        complex,
        bool,
        str,
        bytes,
        bytearray,
        datetime.date,
        datetime.datetime,
        datetime.time,
        datetime.timedelta,
        decimal.Decimal,
        uuid.UUID,
    }
)
"""Types accepted as builtin scalars (subclasses included, enums excluded).

Numbers, text, binary, temporal values, decimals and UUID identifiers.
Anything else that should count as a value must be passed explicitly as
``value_types``.
"""

_SEQUENCE_ORIGINS: frozenset[Any] = frozenset(
    {
        list,
        set,
        frozenset,
        collections.deque,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
        collections.abc.Collection,
        collections.abc.Iterable,
    }
)

_MAPPING_ORIGINS: frozenset[Any] = frozenset(
    {
        dict,
        collections.OrderedDict,
        collections.defaultdict,
        collections.abc.Mapping,
        collections.abc.MutableMapping,
    }
)


def _unwrap(declared_type: Any) -> Any:
    """Strip aliases, Annotated metadata, NewType and Optional wrappers."""
    while True:
        if isinstance(declared_type, TypeAliasType):
            declared_type = declared_type.__value__
        elif isinstance(declared_type, NewType):
            declared_type = declared_type.__supertype__
        elif get_origin(declared_type) is Annotated:
            declared_type = get_args(declared_type)[0]
        elif _is_union(declared_type):
            members = _union_members(declared_type)
            if len(members) != 1:
                return declared_type
            declared_type = members[0]
        else:
            return declared_type


def _is_union(declared_type: Any) -> bool:
    return get_origin(declared_type) in (Union, UnionType)


def _union_members(declared_type: Any) -> tuple[Any, ...]:
    return tuple(arg for arg in get_args(declared_type) if arg is not NoneType)


def _is_builtin_scalar(cls: type) -> bool:
    if issubclass(cls, enum.Enum):
        return False
    return any(issubclass(cls, scalar) for scalar in BUILTIN_SCALARS)


def _collection_origin(declared_type: Any) -> Any | None:
    """Return the collection origin of an annotation, None if not a collection."""
    origin = get_origin(declared_type)
    candidate = origin if origin is not None else declared_type
    if candidate is tuple:
        return tuple
    if candidate in _SEQUENCE_ORIGINS or candidate in _MAPPING_ORIGINS:
        return candidate
    if isinstance(candidate, type) and not issubclass(candidate, (str, bytes, bytearray)):
        if hasattr(candidate, "_fields"):  # namedtuple records
            return None
        if issubclass(candidate, collections.abc.Mapping):
            return collections.abc.Mapping
        if issubclass(candidate, (list, set, frozenset, tuple)):
            return candidate
    return None


def element_type_of(declared_type: Any) -> Any | None:
    """Get the element annotation of a collection type.

    Mappings yield their value type, ``tuple[X, ...]`` yields ``X``.
    Unparameterised collections yield ``Any``.

    Args:
        declared_type: Field annotation.

    Returns:
        Element annotation, or None if the annotation is not a collection.
    """
    declared_type = _unwrap(declared_type)
    if _is_union(declared_type):
        members = [element_type_of(m) for m in _union_members(declared_type)]
        if members and all(m is not None for m in members):
            return members[0]
        return None

    origin = _collection_origin(declared_type)
    if origin is None:
        return None

    args = get_args(declared_type)
    if not args:
        return Any
    if origin is tuple or _issubclass_safe(origin, tuple):
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        distinct = set(args)
        return args[0] if len(distinct) == 1 else Any
    if origin in _MAPPING_ORIGINS or _issubclass_safe(origin, collections.abc.Mapping):
        return args[1] if len(args) > 1 else Any
    return args[0]


def _issubclass_safe(cls: Any, parent: type) -> bool:
    """issubclass that returns False for non-class arguments."""
    try:
        return isinstance(cls, type) and issubclass(cls, parent)
    except TypeError:
        return False


def classify(declared_type: Any, *, value_types: Iterable[type] = ()) -> FieldKind:
    """Classify a field annotation.

    Rules, in order:
    - aliases, ``Annotated``, ``NewType`` and ``X | None`` classify as ``X``
    - ``Literal[...]``, Enum subclasses and ``value_types`` -> SCALAR_OR_ENUM
    - members of BUILTIN_SCALARS (and their subclasses) -> BUILTIN_SCALAR
    - list/set/tuple/sequence/mapping shapes -> COLLECTION
    - unions of several members take the common kind, else REFERENCE
    - everything else -> REFERENCE

    Args:
        declared_type: Field annotation.
        value_types: Extra types to treat as value types.

    Returns:
        The FieldKind of the annotation.
    """
    value_types = tuple(value_types)
    declared_type = _unwrap(declared_type)

    if _is_union(declared_type):
        kinds = {classify(m, value_types=value_types) for m in _union_members(declared_type)}
        if kinds == {FieldKind.BUILTIN_SCALAR}:
            return FieldKind.BUILTIN_SCALAR
        if all(k.is_value() for k in kinds):
            return FieldKind.SCALAR_OR_ENUM
        if kinds == {FieldKind.COLLECTION}:
            return FieldKind.COLLECTION
        return FieldKind.REFERENCE

    if get_origin(declared_type) is Literal:
        return FieldKind.SCALAR_OR_ENUM

    if isinstance(declared_type, type) and get_origin(declared_type) is None:
        if value_types and issubclass(declared_type, value_types):
            return FieldKind.SCALAR_OR_ENUM
        if issubclass(declared_type, enum.Enum):
            return FieldKind.SCALAR_OR_ENUM
        if _is_builtin_scalar(declared_type):
            return FieldKind.BUILTIN_SCALAR

    if _collection_origin(declared_type) is not None:
        return FieldKind.COLLECTION

    # Unresolved forward references and Any land here too
    return FieldKind.REFERENCE
