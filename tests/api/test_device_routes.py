"""Device Routes - HTTP outcomes for owner, stranger and anonymous callers.

Invariants:
    - Anonymous -> 401 on every device endpoint
    - List answers device references in ascending id order
    - Stranger's view of a device equals the view of a nonexistent id (404)
"""

import dataclasses

import pytest
from httpx import ASGITransport, AsyncClient

from tests.mock_persona import MockPersona
from tests.registry_data import OTHER, TEST_DEVICES


@pytest.mark.parametrize("url", ["/api/v1/devices", "/api/v1/devices/1"])
async def test_unauthorized_access(app, client, url):
    app.state.authenticator = MockPersona(logged_in=False)
    res = await client.get(url)
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


async def test_serve_devices_by_user(client):
    res = await client.get("/api/v1/devices")
    assert res.status_code == 200
    assert res.json() == ["/api/v1/devices/1", "/api/v1/devices/2"]


async def test_serve_device(client):
    res = await client.get("/api/v1/devices/1")
    assert res.status_code == 200
    assert res.json() == dataclasses.asdict(TEST_DEVICES[0])


async def test_foreign_device_indistinguishable_from_missing(app, client):
    app.state.authenticator = MockPersona(email=OTHER)

    foreign = await client.get("/api/v1/devices/1")
    missing = await client.get("/api/v1/devices/1000")

    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == {
        "error": {
            **missing.json()["error"],
            "message": missing.json()["error"]["message"].replace("1000", "1"),
        },
    }


async def test_register_device(client):
    res = await client.post(
        "/api/v1/devices",
        json={"name": "laptop", "endpoint": "http://push.example/laptop"},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["id"] == 4
    assert body["user"] == TEST_DEVICES[0].user
    assert body["timestamp"] == ""


async def test_register_device_rejects_blank_name(client):
    res = await client.post(
        "/api/v1/devices", json={"name": "   ", "endpoint": "http://push.example/x"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert res.json()["error"]["category"] == "validation"


async def test_update_location(client):
    res = await client.put(
        "/api/v1/devices/2/location",
        json={"latitude": 37.38835, "longitude": -122.082724},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["latitude"] == 37.38835
    assert body["longitude"] == -122.082724
    assert body["timestamp"] != ""


async def test_update_location_out_of_range(client):
    res = await client.put(
        "/api/v1/devices/2/location", json={"latitude": 91, "longitude": 0},
    )
    assert res.status_code == 400


async def test_list_device_commands(client):
    res = await client.get("/api/v1/devices/2/commands")
    assert res.status_code == 200
    assert [c["name"] for c in res.json()] == ["Track", "Untrack"]


async def test_add_device_command(client):
    res = await client.post("/api/v1/devices/1/commands", json={"command_id": 3})
    assert res.status_code == 200
    assert [c["id"] for c in res.json()] == [1, 3]


async def test_replace_device_commands(client):
    res = await client.put(
        "/api/v1/devices/1/commands", json={"command_ids": [3, 2, 3]},
    )
    assert res.status_code == 200
    assert [c["id"] for c in res.json()] == [2, 3]


async def test_replace_commands_with_unknown_command_keeps_old_set(client):
    res = await client.put(
        "/api/v1/devices/2/commands", json={"command_ids": [1, 99]},
    )
    assert res.status_code == 503
    assert res.json()["error"]["code"] == "DATABASE_ERROR"

    after = await client.get("/api/v1/devices/2/commands")
    assert [c["id"] for c in after.json()] == [1, 2]


async def test_replace_foreign_device_commands_is_not_found(app, client):
    app.state.authenticator = MockPersona(email=OTHER)
    res = await client.put("/api/v1/devices/1/commands", json={"command_ids": []})
    assert res.status_code == 404


async def test_unexpected_failure_is_opaque_500(app):
    @app.get("/boom")
    async def broken():
        raise RuntimeError("secret connection string")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        res = await c.get("/boom")

    assert res.status_code == 500
    assert res.json()["error"] == {
        "code": "INTERNAL_ERROR",
        "message": "An unexpected error occurred",
        "category": "internal",
        "severity": "critical",
    }
