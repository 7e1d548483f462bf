"""Unit tests for DataApiClient and Executor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import pytest

from dataapi_client.core.client import DataApiClient
from dataapi_client.core.config import MappingOptions
from dataapi_client.core.exceptions import ArgumentError
from tests.fakes import RESOURCE_ARN, SECRET_ARN, FakeTransport, response


@dataclass
class User:
    id: int
    name: str


class Coordinates(NamedTuple):
    x: int
    y: int


class TestForSql:
    @pytest.mark.parametrize("sql", [None, ""])
    def test_empty_sql(self, client: DataApiClient, sql: str | None) -> None:
        with pytest.raises(ArgumentError, match="SQL parameter is null or empty"):
            client.for_sql(sql)

    def test_positional_params(self, client: DataApiClient, transport: FakeTransport) -> None:
        client.for_sql("SELECT * FROM users WHERE id = ? AND name = ?", 1, "Alice").execute()

        request = transport.requests("execute_statement")[0]
        assert request["sql"] == "SELECT * FROM users WHERE id = :1 AND name = :2"
        assert request["parameters"] == [
            {"name": "1", "value": {"longValue": 1}},
            {"name": "2", "value": {"stringValue": "Alice"}},
        ]

    def test_single_none_param(self, client: DataApiClient, transport: FakeTransport) -> None:
        client.for_sql("UPDATE t SET a = ?", None).execute()
        request = transport.requests("execute_statement")[0]
        assert request["parameters"] == [{"name": "1", "value": {"isNull": True}}]

    def test_param_count_mismatch(self, client: DataApiClient) -> None:
        with pytest.raises(ArgumentError, match="Number of placeholders"):
            client.for_sql("SELECT ?, ?", 1)


class TestExecute:
    def test_request_shape(self, client: DataApiClient, transport: FakeTransport) -> None:
        client.for_sql("SELECT 1").execute()

        request = transport.requests("execute_statement")[0]
        assert request == {
            "resourceArn": RESOURCE_ARN,
            "secretArn": SECRET_ARN,
            "database": "testdb",
            "sql": "SELECT 1",
            "parameters": [],
            "continueAfterTimeout": False,
            "includeResultMetadata": True,
            "resultSetOptions": {"decimalReturnType": "STRING"},
        }

    def test_transaction_and_timeout_flags(
        self, client: DataApiClient, transport: FakeTransport
    ) -> None:
        (
            client.for_sql("SELECT 1")
            .with_transaction_id("tx-9")
            .with_continue_after_timeout()
            .execute()
        )

        request = transport.requests("execute_statement")[0]
        assert request["transactionId"] == "tx-9"
        assert request["continueAfterTimeout"] is True

    def test_object_parameter(self, client: DataApiClient, transport: FakeTransport) -> None:
        client.for_sql("INSERT INTO users VALUES (:id, :name)").with_parameter(
            User(1, "Alice")
        ).execute()

        params = transport.requests("execute_statement")[0]["parameters"]
        assert {p["name"]: p["value"] for p in params} == {
            "id": {"longValue": 1},
            "name": {"stringValue": "Alice"},
        }

    def test_named_parameters(self, client: DataApiClient, transport: FakeTransport) -> None:
        (
            client.for_sql("SELECT * FROM users WHERE id = :id AND name = :name")
            .with_named_parameter("id", 1)
            .with_named_parameter("name", "Alice")
            .execute()
        )

        params = transport.requests("execute_statement")[0]["parameters"]
        assert [p["name"] for p in params] == ["id", "name"]

    def test_named_after_object_fails(self, client: DataApiClient) -> None:
        executor = client.for_sql("SELECT :id").with_parameter(User(1, "Alice"))
        with pytest.raises(ArgumentError, match="Parameters are already supplied"):
            executor.with_named_parameter("id", 2)

    def test_object_after_named_fails(self, client: DataApiClient) -> None:
        executor = client.for_sql("SELECT :id").with_named_parameter("id", 2)
        with pytest.raises(ArgumentError, match="Named parameters are already supplied"):
            executor.with_parameter(User(1, "Alice"))

    def test_maps_response(self, client: DataApiClient, transport: FakeTransport) -> None:
        transport.responses.append(
            response(["id", "name"], [[{"longValue": 1}, {"stringValue": "Alice"}]])
        )
        users = client.for_sql("SELECT id, name FROM users").execute().map_to_list(User)
        assert users == [User(1, "Alice")]

    def test_mapping_options_reach_result(
        self, client: DataApiClient, transport: FakeTransport
    ) -> None:
        transport.responses.append(
            response(
                ["user_id", "user_name"],
                [[{"longValue": 1}, {"stringValue": "Alice"}]],
                labels=["id", "name"],
            )
        )
        labelled = client.with_mapping_options(MappingOptions(use_label_for_mapping=True))
        assert labelled.for_sql("SELECT 1").execute().map_to_single(User) == User(1, "Alice")
        assert client.mapping_options.use_label_for_mapping is False


class TestBatch:
    def test_multiple_param_sets_use_batch(
        self, client: DataApiClient, transport: FakeTransport
    ) -> None:
        result = (
            client.for_sql("INSERT INTO users VALUES (:id, :name)")
            .with_param_sets(User(1, "Alice"), User(2, "Bob"))
            .execute()
        )

        assert transport.requests("execute_statement") == []
        request = transport.requests("batch_execute_statement")[0]
        assert len(request["parameterSets"]) == 2
        assert "includeResultMetadata" not in request
        assert result.number_of_records_updated == 0
        assert len(result) == 0

    def test_param_sets_as_list(self, client: DataApiClient, transport: FakeTransport) -> None:
        client.for_sql("INSERT INTO t VALUES (:a)").with_param_sets([{"a": 1}, {"a": 2}]).execute()
        request = transport.requests("batch_execute_statement")[0]
        assert request["parameterSets"] == [
            [{"name": "a", "value": {"longValue": 1}}],
            [{"name": "a", "value": {"longValue": 2}}],
        ]

    def test_single_param_set_is_not_a_batch(
        self, client: DataApiClient, transport: FakeTransport
    ) -> None:
        client.for_sql("INSERT INTO t VALUES (:a)").with_param_sets({"a": 1}).execute()
        assert len(transport.requests("execute_statement")) == 1
        assert transport.requests("batch_execute_statement") == []

    def test_single_named_tuple_is_one_param_set(
        self, client: DataApiClient, transport: FakeTransport
    ) -> None:
        executor = client.for_sql("INSERT INTO p VALUES (:x, :y)")
        executor.with_param_sets(Coordinates(1, 2)).execute()

        assert transport.requests("batch_execute_statement") == []
        params = transport.requests("execute_statement")[0]["parameters"]
        assert {p["name"]: p["value"] for p in params} == {
            "x": {"longValue": 1},
            "y": {"longValue": 2},
        }


class TestTransactions:
    def test_begin_commit_rollback(self, client: DataApiClient, transport: FakeTransport) -> None:
        assert client.begin_transaction() == "tx-1"
        client.commit_transaction("tx-1")
        client.rollback_transaction("tx-1")

        assert transport.requests("begin_transaction")[0]["database"] == "testdb"
        assert transport.requests("commit_transaction")[0] == {
            "resourceArn": RESOURCE_ARN,
            "secretArn": SECRET_ARN,
            "transactionId": "tx-1",
        }
        assert transport.requests("rollback_transaction")[0]["transactionId"] == "tx-1"
