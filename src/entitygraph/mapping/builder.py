"""ModelBuilder: owner of one configuration phase and its mapping registry.

Usage:
    builder = ModelBuilder()

    builder.entity(Order).has_unique(lambda o: o.order_number)
    builder.entity(Order).has_state_definer(lambda o: o.lines)

    # End of configuration: freeze and hand over to the graph manager
    registry = builder.build()
    registry.state_definers_for(Order)

    # Collect every rejected declaration instead of stopping at the first
    builder = ModelBuilder(settings=MappingSettings(error_policy="collect"))
"""

from __future__ import annotations

import warnings
from collections.abc import Callable, Iterable
from typing import Any

from entitygraph.config import MappingSettings
from entitygraph.core.errors import MappingConfigurationError, MappingError, MappingResult
from entitygraph.core.field.introspection import record_fields
from entitygraph.mapping.configuration import EntityConfiguration
from entitygraph.mapping.registry import MappingRegistry


class ModelBuilder:
    """Creates per-type configurations sharing one registry.

    The registry lives as long as the builder; build() freezes it and
    returns it for read-only use. Each builder is independent, so tests
    and separate models never share declarations.
    """

    def __init__(
        self,
        registry: MappingRegistry | None = None,
        settings: MappingSettings | None = None,
        value_types: Iterable[type] = (),
    ) -> None:
        """Initialize builder.

        Args:
            registry: Registry to fill. A new one is created if None.
            settings: Error policy and registry options. Loaded from the
                environment if None.
            value_types: Extra types treated as value types by both
                validators (e.g. a frozen Money dataclass).
        """
        self._settings = settings if settings is not None else MappingSettings()
        self._registry = (
            registry if registry is not None else MappingRegistry(self._settings.thread_safe)
        )
        self._value_types = tuple(value_types)
        self._entities: dict[type, EntityConfiguration[Any]] = {}
        self._errors: list[MappingError] = []

    @property
    def registry(self) -> MappingRegistry:
        return self._registry

    @property
    def settings(self) -> MappingSettings:
        return self._settings

    @property
    def value_types(self) -> tuple[type, ...]:
        return self._value_types

    @property
    def errors(self) -> tuple[MappingError, ...]:
        """Rejected declarations collected under the "collect" policy."""
        return tuple(self._errors)

    def entity[T](self, record_type: type[T]) -> EntityConfiguration[T]:
        """Get the configuration for a record type.

        Args:
            record_type: Record class (dataclass, Pydantic model or annotated class).

        Returns:
            The record type's configuration; the same object on repeated calls.

        Raises:
            TypeError: If record_type is not a class.
        """
        if not isinstance(record_type, type):
            raise TypeError(f"Record type must be a class, got {record_type!r}")

        if record_type not in self._entities:
            if not record_fields(record_type):
                warnings.warn(
                    f"entity() received {record_type.__name__}, which declares no fields. "
                    f"Every selector on it will be rejected.",
                    stacklevel=2,
                )
            self._entities[record_type] = EntityConfiguration(self, record_type)
        return self._entities[record_type]

    def apply[T](
        self, record_type: type[T], configure: Callable[[EntityConfiguration[T]], Any]
    ) -> ModelBuilder:
        """Run a configuration function against a record type's configuration.

        Usage:
            def configure_order(order: EntityConfiguration[Order]) -> None:
                order.has_unique(lambda o: o.order_number)

            builder.apply(Order, configure_order)
        """
        configure(self.entity(record_type))
        return self

    def report(self, result: MappingResult) -> None:
        """Apply the error policy to a validation result.

        Raises:
            MappingError: The carried error, under the "raise" policy.
        """
        if result.ok:
            return
        if self._settings.error_policy == "collect":
            self._errors.append(result.error)  # type: ignore[arg-type]
            return
        result.unwrap()

    def build(self) -> MappingRegistry:
        """End the configuration phase.

        Freezes the registry, even when declarations were rejected.

        Returns:
            The frozen registry.

        Raises:
            MappingConfigurationError: If declarations were collected as
                rejected under the "collect" policy.
        """
        self._registry.freeze()
        if self._errors:
            raise MappingConfigurationError(self._errors)
        return self._registry
