"""Statement executor.

An Executor collects everything needed to run one SQL statement: parameter
sets, transaction id and flags. Nothing is sent until execute() is called.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from dataapi_client.core.exceptions import ArgumentError
from dataapi_client.core.result import ResultSet
from dataapi_client.core.wire import SqlParameter
from dataapi_client.mapping.reader import ObjectReader

if TYPE_CHECKING:
    from dataapi_client.core.client import DataApiClient

logger = logging.getLogger(__name__)

ERROR_PARAMETERS_ALREADY_SUPPLIED = "Parameters are already supplied"
ERROR_NAMED_PARAMETERS_ALREADY_SUPPLIED = "Named parameters are already supplied"


class Executor:
    """Builder for a single statement execution.

    One parameter set (or none) runs through ``execute_statement``; more
    than one runs through ``batch_execute_statement``.
    """

    def __init__(self, sql: str, client: DataApiClient) -> None:
        self._sql = sql
        self._client = client
        self._param_sets: list[Any] = []
        self._named: dict[str, Any] | None = None
        self._transaction_id: str | None = None
        self._continue_after_timeout = False

    @property
    def sql(self) -> str:
        return self._sql

    @property
    def transaction_id(self) -> str | None:
        return self._transaction_id

    def with_parameter(self, param: Any) -> Executor:
        """Use *param* as the single parameter set.

        Placeholder values are read from its getters or attributes; a
        mapping is used as-is.
        """
        if self._named is not None:
            raise ArgumentError(ERROR_NAMED_PARAMETERS_ALREADY_SUPPLIED)
        self._param_sets = [param]
        return self

    def with_param_sets(self, *params: Any) -> Executor:
        """Use several parameter sets, given as arguments or as one list."""
        if self._named is not None:
            raise ArgumentError(ERROR_NAMED_PARAMETERS_ALREADY_SUPPLIED)
        if len(params) == 1 and type(params[0]) in (list, tuple):
            params = tuple(params[0])
        self._param_sets = list(params)
        return self

    def with_named_parameter(self, name: str, value: Any) -> Executor:
        """Add one named parameter. Cannot be combined with parameter objects."""
        if self._named is None:
            if self._param_sets:
                raise ArgumentError(ERROR_PARAMETERS_ALREADY_SUPPLIED)
            self._named = {}
            self._param_sets = [self._named]
        self._named[name] = value
        return self

    def with_transaction_id(self, transaction_id: str) -> Executor:
        self._transaction_id = transaction_id
        return self

    def with_continue_after_timeout(self) -> Executor:
        self._continue_after_timeout = True
        return self

    def _to_parameters(self, reader: ObjectReader, param_set: Any) -> list[SqlParameter]:
        return list(reader.read_parameters(param_set).values())

    def execute(self) -> ResultSet:
        """Run the statement and return its result set.

        A batch returns an empty result set with zero records updated.
        """
        reader = ObjectReader(self._sql)
        parameter_sets = [self._to_parameters(reader, p) for p in self._param_sets]

        if len(parameter_sets) > 1:
            logger.debug("Executing batch of %d parameter sets", len(parameter_sets))
            self._client.batch_execute_statement(
                self._sql, parameter_sets, transaction_id=self._transaction_id
            )
            return ResultSet((), (), 0, self._client.mapping_options)

        parameters = parameter_sets[0] if parameter_sets else []
        logger.debug("Executing statement with %d parameters", len(parameters))
        return self._client.execute_statement(
            self._sql,
            parameters,
            transaction_id=self._transaction_id,
            continue_after_timeout=self._continue_after_timeout,
        )
