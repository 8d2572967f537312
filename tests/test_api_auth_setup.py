from __future__ import annotations

from printqueue.store.base import COLORS, PRESSES

SETUP = {"email": "owner@shop.test", "password": "first-admin", "firstName": "Olive", "lastName": "Owner"}


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/api/v1/health").status_code == 200


def test_setup_flow(client, store):
    assert client.get("/api/v1/setup").json() == {"setupRequired": True}

    response = client.post("/api/v1/setup", json=SETUP)
    assert response.status_code == 201
    assert response.json()["admin"]["role"] == "admin"

    assert sorted(c["name"] for c in store.list(COLORS)) == [
        "Black", "Blue", "Green", "Red", "White", "Yellow",
    ]
    assert sorted(p["name"] for p in store.list(PRESSES)) == ["Press 1", "Press 2"]

    assert client.get("/api/v1/setup").json() == {"setupRequired": False}
    assert client.post("/api/v1/setup", json=SETUP).status_code == 409


def test_login_logout(client):
    client.post("/api/v1/setup", json=SETUP)

    bad = client.post("/api/v1/auth/login", json={"email": SETUP["email"], "password": "wrong"})
    assert bad.status_code == 401

    login = client.post("/api/v1/auth/login", json={"email": SETUP["email"], "password": SETUP["password"]})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    me = client.get("/api/v1/auth/me", headers=headers).json()
    assert me["email"] == SETUP["email"]
    assert me["isAdmin"] is True

    assert client.post("/api/v1/auth/logout", headers=headers).status_code == 204
    assert client.get("/api/v1/auth/me", headers=headers).status_code == 401


def test_login_without_profile(client, identity):
    identity.create_user("orphan@shop.test", "secret-pass")
    response = client.post("/api/v1/auth/login", json={"email": "orphan@shop.test", "password": "secret-pass"})
    assert response.status_code == 403


def test_backends_not_configured():
    from fastapi.testclient import TestClient

    from printqueue import deps
    from printqueue.main import app

    deps.configure(None, None, None)
    response = TestClient(app).get("/api/v1/setup")
    assert response.status_code == 503
