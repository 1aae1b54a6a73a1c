"""
Test Configuration and Fixtures

Every test gets a fresh in-memory SQLite ledger; API tests wrap it in the
FastAPI app so HTTP calls and direct engine calls observe the same state.
"""

import pytest
from fastapi.testclient import TestClient

from reservation_ledger.database import build_engine, build_sessionmaker, init_db
from reservation_ledger.ledger import Ledger
from reservation_ledger.main import create_app


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def ledger(engine):
    return Ledger(build_sessionmaker(engine))


@pytest.fixture
def express_train(ledger):
    """'Express 101' with 3 seats"""
    return ledger.create_train("Express 101", 3)


@pytest.fixture
def client(ledger):
    with TestClient(create_app(ledger)) as test_client:
        yield test_client


@pytest.fixture
def events(ledger):
    received = []
    unsubscribe = ledger.bus.subscribe(received.append)
    yield received
    unsubscribe()
