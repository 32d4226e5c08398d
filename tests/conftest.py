"""Shared test fixtures for the servicekit test suite."""

from __future__ import annotations

import copy
from typing import Any

import pytest

BASE_RAW_CONFIG: dict[str, Any] = {
    "envType": "prod",
    "envName": "prod1",
    "initializationTimeoutMs": 5000,
    "serviceName": "x",
    "logger": {"logLevel": "info", "logFilePath": None},
}


@pytest.fixture
def raw_config() -> dict[str, Any]:
    """A minimal valid composite configuration, safe to mutate."""
    return copy.deepcopy(BASE_RAW_CONFIG)


@pytest.fixture
def web_config() -> dict[str, Any]:
    return {"listeners": [[8080], [8443, "0.0.0.0"], {"port": 9000, "host": "localhost"}]}


@pytest.fixture
def mq_config() -> dict[str, Any]:
    return {
        "protocol": "amqp",
        "hostname": "rabbitmq.internal",
        "port": 5672,
        "username": "svc",
        "password": "s3cret",
        "locale": "en_US",
        "vhost": "/",
        "heartbeat": 30,
    }


@pytest.fixture
def database_config() -> dict[str, Any]:
    return {
        "host": "db.internal",
        "port": 3306,
        "user": "svc",
        "password": "s3cret",
        "database": "orders",
    }
