from __future__ import annotations

import pytest

from api import create_app
from api.state import get_state

PASSWORD = "04234"


@pytest.fixture()
def app():
    app = create_app("testing")
    yield app
    with app.app_context():
        state = get_state()
        state.storage.close()
        state.storage.drop_all()
        state.storage.dispose()


@pytest.fixture()
def client(app):
    return app.test_client()


def register(client, email: str, password: str = PASSWORD) -> dict:
    resp = client.post("/api/users", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def login(client, email: str, password: str = PASSWORD) -> dict:
    resp = client.post("/api/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice(client) -> dict:
    register(client, "alice@example.com")
    return login(client, "alice@example.com")


@pytest.fixture()
def bob(client) -> dict:
    register(client, "bob@example.com")
    return login(client, "bob@example.com")
