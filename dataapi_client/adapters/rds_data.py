"""RDS Data API transport over boto3."""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from dataapi_client.core.config import ClientConfig
from dataapi_client.core.exceptions import TransportError

logger = logging.getLogger(__name__)


class RdsDataTransport:
    """Transport backed by a boto3 ``rds-data`` client.

    Args:
        client: A ready boto3 client. Built from *config* when omitted.
        config: Supplies ``region_name`` and ``endpoint_url`` for the client.
    """

    def __init__(self, client: Any = None, config: ClientConfig | None = None) -> None:
        if client is None:
            kwargs: dict[str, Any] = {}
            if config is not None and config.region_name:
                kwargs["region_name"] = config.region_name
            if config is not None and config.endpoint_url:
                kwargs["endpoint_url"] = config.endpoint_url
            client = boto3.client("rds-data", **kwargs)
        self._client = client

    @property
    def client(self) -> Any:
        return self._client

    def _call(self, operation: str, request: dict[str, Any]) -> dict[str, Any]:
        logger.debug("Calling rds-data %s", operation)
        try:
            response: dict[str, Any] = getattr(self._client, operation)(**request)
        except ClientError as exc:
            error = exc.response.get("Error", {})
            detail = f"{error.get('Code', 'Unknown')}: {error.get('Message', exc)}"
            raise TransportError(operation, detail) from exc
        except BotoCoreError as exc:
            raise TransportError(operation, str(exc)) from exc
        return response

    def execute_statement(self, **request: Any) -> dict[str, Any]:
        return self._call("execute_statement", request)

    def batch_execute_statement(self, **request: Any) -> dict[str, Any]:
        return self._call("batch_execute_statement", request)

    def begin_transaction(self, **request: Any) -> dict[str, Any]:
        return self._call("begin_transaction", request)

    def commit_transaction(self, **request: Any) -> dict[str, Any]:
        return self._call("commit_transaction", request)

    def rollback_transaction(self, **request: Any) -> dict[str, Any]:
        return self._call("rollback_transaction", request)
