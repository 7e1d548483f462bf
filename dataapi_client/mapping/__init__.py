"""Mapping layer - read parameter objects and write result rows into objects."""

from __future__ import annotations

from dataapi_client.mapping.reader import ObjectReader, read_parameters, read_values
from dataapi_client.mapping.resolver import (
    ConstructorPlan,
    FieldAccessor,
    SetterAccessor,
    find_all_args_constructor,
    read_value,
    resolve_writer,
)
from dataapi_client.mapping.writer import (
    ConstructorRowWriter,
    FieldRowWriter,
    PropertyRowWriter,
    RowWriter,
    create_writer,
)

__all__ = [
    "ObjectReader",
    "read_parameters",
    "read_values",
    "ConstructorPlan",
    "FieldAccessor",
    "SetterAccessor",
    "find_all_args_constructor",
    "read_value",
    "resolve_writer",
    "RowWriter",
    "ConstructorRowWriter",
    "FieldRowWriter",
    "PropertyRowWriter",
    "create_writer",
]
