"""Result set.

An immutable view over one statement result: column metadata, rows of wire
fields and the updated-record count. Mapping methods build a fresh row
writer on every call, so nothing is cached between calls.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from dataapi_client.core.config import DEFAULT_MAPPING_OPTIONS, MappingOptions
from dataapi_client.core.converter import from_wire
from dataapi_client.core.enums import Population
from dataapi_client.core.exceptions import EmptyResultSetError, NoResultError
from dataapi_client.core.wire import ColumnMetadata, WireField
from dataapi_client.mapping.writer import create_writer

T = TypeVar("T")


class ResultSet:
    """Rows returned by a statement, ready to be mapped.

    Attributes:
        columns: Column metadata in result order.
        rows: One list of wire fields per record.
        number_of_records_updated: Count reported by the Data API.
        options: Mapping options used by the mapping methods.
    """

    __slots__ = ("_columns", "_rows", "_updated", "_options")

    def __init__(
        self,
        columns: Sequence[ColumnMetadata],
        rows: Sequence[Sequence[WireField]],
        number_of_records_updated: int = 0,
        options: MappingOptions = DEFAULT_MAPPING_OPTIONS,
    ) -> None:
        self._columns = tuple(columns)
        self._rows = tuple(tuple(row) for row in rows)
        self._updated = number_of_records_updated
        self._options = options

    @classmethod
    def empty(cls, number_of_records_updated: int = 0) -> ResultSet:
        return cls((), (), number_of_records_updated)

    @classmethod
    def from_response(
        cls,
        response: Mapping[str, Any],
        options: MappingOptions = DEFAULT_MAPPING_OPTIONS,
    ) -> ResultSet:
        """Build a result set from an ``execute_statement`` response dict."""
        columns = [ColumnMetadata.model_validate(c) for c in response.get("columnMetadata", [])]
        rows = [
            [WireField.model_validate(f) for f in record]
            for record in response.get("records", [])
        ]
        return cls(columns, rows, int(response.get("numberOfRecordsUpdated", 0)), options)

    @property
    def columns(self) -> tuple[ColumnMetadata, ...]:
        return self._columns

    @property
    def rows(self) -> tuple[tuple[WireField, ...], ...]:
        return self._rows

    @property
    def options(self) -> MappingOptions:
        return self._options

    @property
    def number_of_records_updated(self) -> int:
        return self._updated

    @property
    def field_names(self) -> list[str]:
        """Column identifiers: labels or names, per ``use_label_for_mapping``."""
        use_label = self._options.use_label_for_mapping
        return [column.identifier(use_label) for column in self._columns]

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return (
            f"ResultSet(columns={self.field_names!r}, rows={len(self._rows)}, "
            f"number_of_records_updated={self._updated})"
        )

    def map_to_single(
        self, target_class: type[T], population: Population = Population.PROPERTIES
    ) -> T:
        """Map the first row to *target_class*.

        Raises:
            EmptyResultSetError: If there are no rows.
        """
        if not self._rows:
            raise EmptyResultSetError()
        writer = create_writer(target_class, self.field_names, self._options, population)
        return writer.map_one(self._rows[0])

    def map_to_list(
        self, target_class: type[T], population: Population = Population.PROPERTIES
    ) -> list[T]:
        """Map every row to *target_class*, in row order."""
        if not self._rows:
            return []
        writer = create_writer(target_class, self.field_names, self._options, population)
        return writer.map_many(self._rows)

    def single_value(self, target_type: Any = Any) -> Any:
        """Convert column 0 of row 0 to *target_type*.

        Raises:
            NoResultError: If there are no rows or the first row is empty.
        """
        if not self._rows or not self._rows[0]:
            raise NoResultError()
        return from_wire(self._rows[0][0], target_type)

    def to_dicts(self) -> list[dict[str, Any]]:
        """Rows as ``{column: natural value}`` dicts."""
        names = self.field_names
        return [
            {name: field.natural_value() for name, field in zip(names, row, strict=False)}
            for row in self._rows
        ]


def build_result_set(
    columns: Sequence[ColumnMetadata | str],
    rows: Sequence[Sequence[WireField]],
    number_of_records_updated: int = 0,
    options: MappingOptions = DEFAULT_MAPPING_OPTIONS,
) -> ResultSet:
    """Build a ResultSet; plain strings are taken as column names."""
    metadata = [
        column if isinstance(column, ColumnMetadata) else ColumnMetadata(name=column)
        for column in columns
    ]
    return ResultSet(metadata, rows, number_of_records_updated, options)
