"""Transaction management.

Provides a context manager that runs several statements in one Data API
transaction. Commits on success, rolls back on exception.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from dataapi_client.core.exceptions import TransactionStateError

if TYPE_CHECKING:
    from dataapi_client.core.client import DataApiClient
    from dataapi_client.core.executor import Executor

logger = logging.getLogger(__name__)


class _TxState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class Transaction:
    """Data API transaction context manager.

    Example::

        with client.transaction() as tx:
            tx.for_sql("INSERT INTO t VALUES (:id)").with_parameter(row).execute()
    """

    def __init__(self, client: DataApiClient) -> None:
        self._client = client
        self._transaction_id = ""
        self._state = _TxState.IDLE

    @property
    def transaction_id(self) -> str | None:
        return self._transaction_id or None

    @property
    def state(self) -> str:
        return self._state.value

    def __enter__(self) -> Transaction:
        if self._state != _TxState.IDLE:
            raise TransactionStateError(self._state.value, "begin")
        self._transaction_id = self._client.begin_transaction()
        self._state = _TxState.ACTIVE
        logger.debug("Transaction %s started", self._transaction_id)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if self._state == _TxState.ACTIVE:
            if exc_type is not None:
                self.rollback()
            else:
                self.commit()

    def for_sql(self, sql: str | None, *params: Any) -> Executor:
        """Prepare a statement bound to this transaction."""
        self._check_active()
        return self._client.for_sql(sql, *params).with_transaction_id(self._transaction_id)

    def commit(self) -> None:
        """Explicitly commit the transaction."""
        self._check_active("commit")
        self._client.commit_transaction(self._transaction_id)
        self._state = _TxState.COMMITTED
        logger.debug("Transaction %s committed", self._transaction_id)

    def rollback(self) -> None:
        """Explicitly roll back the transaction."""
        self._check_active("rollback")
        self._client.rollback_transaction(self._transaction_id)
        self._state = _TxState.ROLLED_BACK
        logger.debug("Transaction %s rolled back", self._transaction_id)

    def _check_active(self, action: str = "execute") -> None:
        if self._state != _TxState.ACTIVE:
            raise TransactionStateError(self._state.value, action)
