"""Object reader.

Pulls the values a statement needs out of a parameter object, one per
``:name`` placeholder in the SQL.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from dataapi_client.core.converter import to_parameter
from dataapi_client.core.placeholders import find_placeholders
from dataapi_client.core.wire import SqlParameter
from dataapi_client.mapping.resolver import read_value


class ObjectReader:
    """Reads placeholder values from objects for one SQL statement."""

    def __init__(self, sql: str) -> None:
        self._placeholder_names = sorted(find_placeholders(sql))

    @property
    def placeholder_names(self) -> list[str]:
        return list(self._placeholder_names)

    def read(self, obj: Any) -> dict[str, Any]:
        """Return ``{placeholder: value}`` for every placeholder in the SQL."""
        return read_values(obj, self._placeholder_names)

    def read_parameters(self, obj: Any) -> dict[str, SqlParameter]:
        return read_parameters(obj, self._placeholder_names)


def read_values(obj: Any, placeholder_names: Iterable[str]) -> dict[str, Any]:
    """Read each name from *obj*.

    A mapping is taken verbatim, every key becoming a parameter. Any other
    object goes through the getter/attribute resolution.

    Raises:
        FieldNotFoundError: If a name cannot be found on *obj*.
    """
    if isinstance(obj, Mapping):
        return {str(name): value for name, value in obj.items()}
    return {name: read_value(obj, name) for name in placeholder_names}


def read_parameters(obj: Any, placeholder_names: Iterable[str]) -> dict[str, SqlParameter]:
    """Read each name from *obj* and encode it as a SqlParameter."""
    return {
        name: to_parameter(name, value)
        for name, value in read_values(obj, placeholder_names).items()
    }
