"""Shared test fixtures."""
import json
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from claimledger.api.endpoints import get_dispatcher
from claimledger.config.settings import Settings
from claimledger.core.errors import WriteError
from claimledger.dispatcher import OperationDispatcher, Response, create_dispatcher
from claimledger.ledger.stub import InMemoryLedger, Transaction
from claimledger.main import app


def call(dispatcher: OperationDispatcher, operation: str, payload: Optional[Any] = None) -> Response:
    """Invoke an operation with its payload JSON-encoded as the single argument."""
    args = [] if payload is None else [json.dumps(payload)]
    return dispatcher.invoke(operation, args)


ITEM = {
    "id": 1,
    "brand": "Canyon",
    "model": "Endurace",
    "price": 1800.0,
    "description": "Road bike",
    "serial_no": "CY-123",
}


@pytest.fixture
def ledger() -> InMemoryLedger:
    return InMemoryLedger()


@pytest.fixture
def dispatcher(ledger: InMemoryLedger) -> OperationDispatcher:
    return create_dispatcher(ledger, Settings(strict_contract_types=False))


@pytest.fixture
def strict_dispatcher(ledger: InMemoryLedger) -> OperationDispatcher:
    return create_dispatcher(ledger, Settings(strict_contract_types=True))


@pytest.fixture
def contract(dispatcher: OperationDispatcher) -> dict:
    """A contract k1 owned by a freshly onboarded user alice."""
    response = call(dispatcher, "contract_create", {
        "uuid": "k1",
        "contract_type_uuid": "ct1",
        "username": "alice",
        "password": "secret",
        "first_name": "Alice",
        "last_name": "Smith",
        "item": ITEM,
        "start_date": "2024-01-01T00:00:00Z",
        "end_date": "2025-01-01T00:00:00Z",
    })
    assert response.ok, response.message
    return {"uuid": "k1", "username": "alice"}


@pytest.fixture
def test_client(dispatcher: OperationDispatcher):
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


class FailingWriteTransaction(Transaction):
    def put_state(self, key: str, value: bytes) -> None:
        raise WriteError("disk full")


class FailingWriteLedger(InMemoryLedger):
    """Ledger whose every write fails."""
    transaction_class = FailingWriteTransaction
