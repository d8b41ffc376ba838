import os
import tempfile

import pytest

# must be set before beer_backend.database creates its engine
_db_dir = tempfile.mkdtemp(prefix="beer_reviews_test_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"

from fastapi.testclient import TestClient
from sqlalchemy import text

from beer_backend.database import engine, init_db
from beer_backend.main import app
from beer_client.api_client import make_login_hash


@pytest.fixture
def client():
    init_db()
    with TestClient(app) as test_client:
        yield test_client
    with engine.begin() as conn:
        for table in ("reviews", "beers", "users"):
            conn.execute(text(f"DELETE FROM {table}"))


def _auth_header(username, password):
    return {"Authorization": f"Basic {make_login_hash(username, password)}"}


@pytest.fixture
def user(client):
    """A registered user plus a ready-made auth header."""
    body = {
        "username": "hopsfan",
        "password": "citra-mosaic",
        "firstName": "Ada",
        "lastName": "Lovelace",
    }
    res = client.post("/users", json=body)
    assert res.status_code == 201
    created = res.json()
    created["headers"] = _auth_header(body["username"], body["password"])
    return created


@pytest.fixture
def beer(client, user):
    res = client.post("/beers", json={
        "name": "Lager77",
        "style": "Helles",
        "abv": 4.8,
        "ibu": 18,
        "description": "Crisp and bready.",
        "brewery": "Seventy Seven",
    }, headers=user["headers"])
    assert res.status_code == 201
    return res.json()


@pytest.fixture
def auth_header():
    return _auth_header
