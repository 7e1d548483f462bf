"""dataapi-client - object mapping over the RDS Data API."""

from __future__ import annotations

from dataapi_client.adapters.protocol import Transport
from dataapi_client.adapters.rds_data import RdsDataTransport
from dataapi_client.core.client import DataApiClient
from dataapi_client.core.config import DEFAULT_MAPPING_OPTIONS, ClientConfig, MappingOptions
from dataapi_client.core.converter import from_wire, to_parameter, to_wire
from dataapi_client.core.enums import Population, TypeHint
from dataapi_client.core.exceptions import (
    AmbiguousSetterError,
    ArgumentError,
    CannotAccessFieldError,
    CannotConvertError,
    CannotCreateInstanceError,
    CannotSetValueError,
    DataApiError,
    EmptyResultSetError,
    ExecutionError,
    FieldNotFoundError,
    MappingError,
    NoArgsConstructorError,
    NoFieldOrSetterError,
    NoResultError,
    StaticFieldError,
    TransactionError,
    TransactionStateError,
    TransportError,
    UnsupportedParameterTypeError,
    UnsupportedResultTypeError,
    VoidReturnTypeError,
)
from dataapi_client.core.executor import Executor
from dataapi_client.core.result import ResultSet, build_result_set
from dataapi_client.core.transaction import Transaction
from dataapi_client.core.wire import ColumnMetadata, SqlParameter, WireField
from dataapi_client.mapping.reader import ObjectReader, read_parameters

__all__ = [
    # Client
    "DataApiClient",
    "Executor",
    "Transaction",
    # Config
    "ClientConfig",
    "MappingOptions",
    "DEFAULT_MAPPING_OPTIONS",
    # Transport
    "Transport",
    "RdsDataTransport",
    # Wire model
    "WireField",
    "ColumnMetadata",
    "SqlParameter",
    # Conversion and mapping
    "to_wire",
    "to_parameter",
    "from_wire",
    "ObjectReader",
    "read_parameters",
    "ResultSet",
    "build_result_set",
    # Enums
    "TypeHint",
    "Population",
    # Exceptions
    "DataApiError",
    "ArgumentError",
    "MappingError",
    "UnsupportedParameterTypeError",
    "UnsupportedResultTypeError",
    "CannotConvertError",
    "NoFieldOrSetterError",
    "StaticFieldError",
    "CannotAccessFieldError",
    "CannotSetValueError",
    "AmbiguousSetterError",
    "CannotCreateInstanceError",
    "NoArgsConstructorError",
    "VoidReturnTypeError",
    "FieldNotFoundError",
    "EmptyResultSetError",
    "ExecutionError",
    "NoResultError",
    "TransportError",
    "TransactionError",
    "TransactionStateError",
]
