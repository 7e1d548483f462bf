"""Transport protocol.

A transport carries requests to the RDS Data API. Request and response
dicts use the Data API's own camelCase shapes, exactly as boto3 takes and
returns them, so a boto3 ``rds-data`` client satisfies this protocol
directly.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Synchronous Data API transport protocol."""

    def execute_statement(self, **request: Any) -> dict[str, Any]:
        """Run one statement and return the raw response."""
        ...

    def batch_execute_statement(self, **request: Any) -> dict[str, Any]:
        """Run one statement once per parameter set."""
        ...

    def begin_transaction(self, **request: Any) -> dict[str, Any]:
        """Start a transaction; the response carries ``transactionId``."""
        ...

    def commit_transaction(self, **request: Any) -> dict[str, Any]:
        """Commit the transaction named in the request."""
        ...

    def rollback_transaction(self, **request: Any) -> dict[str, Any]:
        """Roll back the transaction named in the request."""
        ...
