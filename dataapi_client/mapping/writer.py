"""Row writers.

A row writer turns one result row (a list of wire fields aligned with the
column identifiers) into an instance of the target class. create_writer()
picks the strategy:

1. ConstructorRowWriter, when ``__init__`` takes exactly the columns
2. FieldRowWriter, for Population.FIELDS
3. PropertyRowWriter, otherwise (setters first, then fields)

Strategies 2 and 3 need a class callable without arguments.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Sequence
from typing import Any, Generic, Protocol, TypeVar

from dataapi_client.core.config import DEFAULT_MAPPING_OPTIONS, MappingOptions
from dataapi_client.core.converter import from_wire
from dataapi_client.core.enums import Population
from dataapi_client.core.exceptions import CannotCreateInstanceError, NoArgsConstructorError
from dataapi_client.core.wire import WireField
from dataapi_client.mapping.resolver import (
    ConstructorPlan,
    WriteAccessor,
    accepts_no_arguments,
    find_all_args_constructor,
    resolve_writer,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Row = Sequence[WireField]


class RowWriter(Protocol[T]):
    """Base row writer protocol."""

    def map_one(self, row: Row) -> T:
        """Map a single row to a target object."""
        ...

    def map_many(self, rows: Sequence[Row]) -> list[T]:
        """Map multiple rows to a list of target objects."""
        ...


class ConstructorRowWriter(Generic[T]):
    """Calls ``__init__`` with every column as a keyword argument."""

    def __init__(self, plan: ConstructorPlan, column_names: Sequence[str]) -> None:
        self._plan = plan
        self._index: dict[str, int] = {}
        for position, name in enumerate(column_names):
            self._index.setdefault(name, position)

    def map_one(self, row: Row) -> T:
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter in self._plan.parameters:
            value = from_wire(
                row[self._index[parameter.name]],
                self._plan.declared_types[parameter.name],
            )
            if parameter.kind is inspect.Parameter.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[parameter.name] = value

        try:
            return self._plan.target_class(*args, **kwargs)  # type: ignore[no-any-return]
        except Exception as e:
            raise CannotCreateInstanceError(self._plan.target_class) from e

    def map_many(self, rows: Sequence[Row]) -> list[T]:
        return [self.map_one(row) for row in rows]


class _AccessorRowWriter(Generic[T]):
    """Creates an empty instance and writes each column through an accessor.

    Accessors are resolved against the first instance created and reused
    for every later row handled by this writer.
    """

    population: Population

    def __init__(
        self,
        target_class: type[T],
        column_names: Sequence[str],
        options: MappingOptions = DEFAULT_MAPPING_OPTIONS,
    ) -> None:
        self._target_class = target_class
        self._column_names = list(column_names)
        self._options = options
        self._accessors: list[WriteAccessor | None] | None = None

    def _new_instance(self) -> T:
        if not accepts_no_arguments(self._target_class):
            raise NoArgsConstructorError(self._target_class)
        try:
            return self._target_class()
        except Exception as e:
            raise CannotCreateInstanceError(self._target_class) from e

    def _resolve(self, instance: T) -> list[WriteAccessor | None]:
        if self._accessors is None:
            self._accessors = [
                resolve_writer(instance, name, self._options, self.population)
                for name in self._column_names
            ]
        return self._accessors

    def map_one(self, row: Row) -> T:
        instance = self._new_instance()
        for accessor, field in zip(self._resolve(instance), row, strict=False):
            if accessor is None:
                continue
            accessor.write(instance, from_wire(field, accessor.declared_type))
        return instance

    def map_many(self, rows: Sequence[Row]) -> list[T]:
        return [self.map_one(row) for row in rows]


class FieldRowWriter(_AccessorRowWriter[T]):
    """Writes fields directly; setters are never consulted."""

    population = Population.FIELDS


class PropertyRowWriter(_AccessorRowWriter[T]):
    """Writes through setters, falling back to fields."""

    population = Population.PROPERTIES


def create_writer(
    target_class: type[T],
    column_names: Sequence[str],
    options: MappingOptions = DEFAULT_MAPPING_OPTIONS,
    population: Population = Population.PROPERTIES,
) -> RowWriter[T]:
    """Pick the row writer for *target_class* and the given columns."""
    plan = find_all_args_constructor(target_class, list(column_names))
    if plan is not None:
        logger.debug("Mapping %s through its constructor", target_class.__name__)
        return ConstructorRowWriter(plan, column_names)

    writer_class = FieldRowWriter if population is Population.FIELDS else PropertyRowWriter
    logger.debug("Mapping %s by %s", target_class.__name__, population.value)
    return writer_class(target_class, column_names, options)
