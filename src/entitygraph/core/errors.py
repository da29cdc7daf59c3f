"""Error taxonomy and result type for mapping declarations.

Usage:
    result = validate_unique(registry, Order, lambda o: o.order_number)
    if not result.ok:
        print(result.error.kind)
    result.unwrap()  # raises the error, if any
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class ErrorKind(Enum):
    """Kind of configuration-time failure."""

    EMPTY_SELECTION = auto()  # Selector absent or resolves to zero fields
    INVALID_FIELD_KIND = auto()  # Field shape not allowed for the declaration
    DUPLICATE_CONSTRAINT = auto()  # Already declared for the record type


def describe_selector(selector: Any) -> str:
    """Human readable rendering of a selector for error messages."""
    if selector is None:
        return "None"
    if callable(selector) and hasattr(selector, "__qualname__"):
        return f"<selector {selector.__qualname__}>"
    return repr(selector)


class MappingError(Exception):
    """Base class for rejected mapping declarations.

    Attributes:
        kind: Which rule the declaration broke.
        source_type: Record type the declaration was made against.
        selector: Selector as passed by the caller.
    """

    kind: ErrorKind

    def __init__(self, message: str, source_type: type, selector: Any = None) -> None:
        super().__init__(message)
        self.source_type = source_type
        self.selector = selector


class EmptySelectionError(MappingError, ValueError):
    """Raised when a selector is missing or selects no field of the record type."""

    kind = ErrorKind.EMPTY_SELECTION


class InvalidFieldKindError(MappingError, TypeError):
    """Raised when selected fields have a shape the declaration does not allow."""

    kind = ErrorKind.INVALID_FIELD_KIND

    def __init__(
        self,
        message: str,
        source_type: type,
        selector: Any = None,
        fields: Sequence[str] = (),
    ) -> None:
        super().__init__(message, source_type, selector)
        self.fields = tuple(fields)


class DuplicateConstraintError(MappingError):
    """Raised when a declaration repeats one already registered for the record type."""

    kind = ErrorKind.DUPLICATE_CONSTRAINT

    def __init__(
        self,
        message: str,
        source_type: type,
        selector: Any = None,
        fields: Sequence[str] = (),
    ) -> None:
        super().__init__(message, source_type, selector)
        self.fields = tuple(fields)


class FrozenRegistryError(RuntimeError):
    """Raised when a frozen registry is asked to accept new declarations."""

    pass


class MappingConfigurationError(ExceptionGroup):
    """All declaration errors collected during one configuration phase."""

    def __new__(cls, errors: Sequence[MappingError]) -> MappingConfigurationError:
        return super().__new__(
            cls, f"{len(errors)} mapping declaration(s) rejected", list(errors)
        )

    def derive(self, excs: Sequence[MappingError]) -> MappingConfigurationError:
        return MappingConfigurationError(excs)


class RedundantConstraintWarning(UserWarning):
    """A unique set contains a smaller set that is already unique."""

    pass


@dataclass(frozen=True, slots=True)
class MappingResult:
    """Outcome of one validated declaration.

    Success carries no payload. Failure carries the MappingError that
    explains why the registry was left unchanged.
    """

    error: MappingError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> None:
        """Raise the carried error, if any."""
        if self.error is not None:
            raise self.error

    @classmethod
    def success(cls) -> MappingResult:
        return cls()

    @classmethod
    def failure(cls, error: MappingError) -> MappingResult:
        return cls(error=error)
