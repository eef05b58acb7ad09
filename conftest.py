import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.pool import StaticPool

from main import create_app


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def app():
    # One shared in-memory connection so every request sees the same tables
    test_app = create_app("sqlite://", poolclass=StaticPool)
    # SQLite only enforces REFERENCES when asked to, PostgreSQL always does
    event.listen(test_app.state.engine, "connect", _enable_foreign_keys)
    return test_app


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def widget():
    return {
        "name": "Widget",
        "unit": "ea",
        "category": "Hardware",
        "brand": "Acme",
        "stock": 10,
        "status": "active",
        "image": None
    }


@pytest.fixture
def create_product(client):
    def _create(**fields):
        body = {"unit": None, "category": None, "brand": None, "status": None, "image": None}
        body.update(fields)
        response = client.post("/api/product/new", json=body)
        assert response.status_code == 200, response.text
        return response.json()["productId"]
    return _create
