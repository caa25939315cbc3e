"""
Smoke tests for the system endpoints.
"""
from conftest import auth_headers


def test_db_status_for_admin(client, world):
    response = client.get("/system/db-status", headers=auth_headers(world.admin))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["dialect"] == "sqlite"
    assert data["currentHealth"] is True


def test_db_status_is_admin_only(client, world):
    assert client.get("/system/db-status", headers=auth_headers(world.seeker)).status_code == 403
    assert client.get("/system/db-status").status_code == 401


def test_root(client):
    assert client.get("/").json() == {"status": "Job Portal API running"}
