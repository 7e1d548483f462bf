"""Shared test fixtures."""

from __future__ import annotations

import pytest

from dataapi_client.core.client import DataApiClient
from dataapi_client.core.config import ClientConfig
from tests.fakes import RESOURCE_ARN, SECRET_ARN, FakeTransport


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(resource_arn=RESOURCE_ARN, secret_arn=SECRET_ARN, database="testdb")


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(client_config: ClientConfig, transport: FakeTransport) -> DataApiClient:
    return DataApiClient(client_config, transport)
