"""Data API client.

DataApiClient is the entry point: it holds the cluster and secret ARNs,
builds requests for the transport and wraps responses into result sets.
"""

from __future__ import annotations

import logging
from typing import Any

from dataapi_client.adapters.protocol import Transport
from dataapi_client.adapters.rds_data import RdsDataTransport
from dataapi_client.core.config import ClientConfig, MappingOptions
from dataapi_client.core.exceptions import ArgumentError
from dataapi_client.core.executor import Executor
from dataapi_client.core.placeholders import convert_positional
from dataapi_client.core.result import ResultSet
from dataapi_client.core.transaction import Transaction
from dataapi_client.core.wire import SqlParameter

logger = logging.getLogger(__name__)

ERROR_EMPTY_OR_NULL_SQL = "SQL parameter is null or empty"


class DataApiClient:
    """Client for the RDS Data API.

    Args:
        config: ARNs, database and mapping options.
        transport: Anything implementing Transport. Defaults to a boto3
            ``rds-data`` client built from *config*.

    Example::

        client = DataApiClient.from_config()
        users = client.for_sql("SELECT * FROM users WHERE id = ?", 7).execute().map_to_list(User)
    """

    def __init__(self, config: ClientConfig, transport: Transport | None = None) -> None:
        self._config = config
        self._transport: Transport = (
            transport if transport is not None else RdsDataTransport(config=config)
        )

    @classmethod
    def from_config(cls, config: ClientConfig | None = None, **overrides: Any) -> DataApiClient:
        """Build a client, reading ``DATA_API_*`` variables when *config* is omitted."""
        if config is None:
            config = ClientConfig(**overrides)
        elif overrides:
            config = config.model_copy(update=overrides)
        return cls(config, RdsDataTransport(config=config))

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def mapping_options(self) -> MappingOptions:
        return self._config.mapping_options

    def with_mapping_options(self, options: MappingOptions) -> DataApiClient:
        """Return a client sharing this transport but mapping with *options*."""
        config = self._config.model_copy(update={"mapping_options": options})
        return DataApiClient(config, self._transport)

    # -- Statements ---------------------------------------------------------

    def for_sql(self, sql: str | None, *params: Any) -> Executor:
        """Prepare *sql* for execution.

        Positional *params* fill ``?`` markers, which are rewritten to
        ``:1, :2, ...``.

        Raises:
            ArgumentError: If *sql* is empty, or the marker count differs
                from the number of *params*.
        """
        if not sql:
            raise ArgumentError(ERROR_EMPTY_OR_NULL_SQL)
        if not params:
            return Executor(sql, self)

        converted, named = convert_positional(sql, params)
        return Executor(converted, self).with_param_sets([named])

    def transaction(self) -> Transaction:
        """Return a context manager running statements in one transaction."""
        return Transaction(self)

    def _base_request(self, *, include_database: bool = True) -> dict[str, Any]:
        request: dict[str, Any] = {
            "resourceArn": self._config.resource_arn,
            "secretArn": self._config.secret_arn,
        }
        if include_database and self._config.database:
            request["database"] = self._config.database
        return request

    def execute_statement(
        self,
        sql: str,
        parameters: list[SqlParameter],
        *,
        transaction_id: str | None = None,
        continue_after_timeout: bool = False,
    ) -> ResultSet:
        """Call ``ExecuteStatement`` and wrap the response."""
        request = self._base_request()
        request.update(
            sql=sql,
            parameters=[p.to_api() for p in parameters],
            continueAfterTimeout=continue_after_timeout,
            includeResultMetadata=True,
            resultSetOptions={"decimalReturnType": "STRING"},
        )
        if transaction_id:
            request["transactionId"] = transaction_id

        response = self._transport.execute_statement(**request)
        result = ResultSet.from_response(response, self.mapping_options)
        logger.debug(
            "Statement returned %d records, %d updated",
            len(result),
            result.number_of_records_updated,
        )
        return result

    def batch_execute_statement(
        self,
        sql: str,
        parameter_sets: list[list[SqlParameter]],
        *,
        transaction_id: str | None = None,
    ) -> None:
        """Call ``BatchExecuteStatement``; the response carries no rows."""
        request = self._base_request()
        request.update(
            sql=sql,
            parameterSets=[[p.to_api() for p in params] for params in parameter_sets],
        )
        if transaction_id:
            request["transactionId"] = transaction_id
        self._transport.batch_execute_statement(**request)

    # -- Transactions -------------------------------------------------------

    def begin_transaction(self) -> str:
        response = self._transport.begin_transaction(**self._base_request())
        return str(response["transactionId"])

    def commit_transaction(self, transaction_id: str) -> str:
        request = self._base_request(include_database=False)
        response = self._transport.commit_transaction(transactionId=transaction_id, **request)
        return str(response.get("transactionStatus", ""))

    def rollback_transaction(self, transaction_id: str) -> str:
        request = self._base_request(include_database=False)
        response = self._transport.rollback_transaction(transactionId=transaction_id, **request)
        return str(response.get("transactionStatus", ""))
