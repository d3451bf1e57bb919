"""Device API Tests - ownership enforcement on top of the registry store.

Invariants:
    - Anonymous callers are rejected before the store is consulted
    - Another user's device is reported as not found (ForbiddenError)
    - Authorized calls delegate and return what the store now holds
"""

import pytest

from whereismyfox.core.domain_types import CommandId, DeviceId
from whereismyfox.core.errors import (
    ForbiddenError, ResourceNotFoundError, UnauthorizedError,
)
from whereismyfox.services.device_api import DeviceAPI
from tests.registry_data import OTHER, OWNER, TEST_DEVICES


class _UntouchableStore:
    """Fails the test on any store access."""

    def __getattr__(self, name):
        raise AssertionError(f"store.{name} consulted for anonymous caller")


@pytest.fixture
def api(seeded_store):
    return DeviceAPI(seeded_store)


# -- Unauthenticated -----------------------------------------------------------


@pytest.mark.parametrize("caller", ["", None])
async def test_anonymous_caller_never_reaches_store(caller):
    api = DeviceAPI(_UntouchableStore())
    with pytest.raises(UnauthorizedError):
        await api.list_my_devices(caller)
    with pytest.raises(UnauthorizedError):
        await api.get_my_device(caller, DeviceId(1))
    with pytest.raises(UnauthorizedError):
        await api.update_my_device_commands(caller, DeviceId(1), [CommandId(1)])
    with pytest.raises(UnauthorizedError):
        await api.update_my_device_location(caller, DeviceId(1), 1.0, 2.0)


# -- Identified ----------------------------------------------------------------


async def test_list_my_devices_returns_only_callers_devices(api):
    assert [d.id for d in await api.list_my_devices(OWNER)] == [1, 2]
    assert [d.id for d in await api.list_my_devices(OTHER)] == [3]
    assert await api.list_my_devices("stranger@example.com") == []


async def test_register_my_device_owned_by_caller(api):
    device = await api.register_my_device(OTHER, "tablet", "http://push.example/t")
    assert device.user == OTHER
    assert device.id == 4


# -- Authorized / Forbidden ----------------------------------------------------


async def test_get_my_device_when_owner(api):
    assert await api.get_my_device(OWNER, DeviceId(1)) == TEST_DEVICES[0]


async def test_get_other_users_device_is_forbidden(api):
    with pytest.raises(ForbiddenError):
        await api.get_my_device(OTHER, DeviceId(1))


async def test_forbidden_looks_like_not_found(api):
    with pytest.raises(ResourceNotFoundError) as forbidden:
        await api.get_my_device(OTHER, DeviceId(1))
    with pytest.raises(ResourceNotFoundError) as missing:
        await api.get_my_device(OTHER, DeviceId(42))

    assert forbidden.value.http_status == missing.value.http_status == 404
    assert forbidden.value.code == missing.value.code
    assert forbidden.value.to_response()["error"]["message"] == "Device '1' not found"


async def test_update_my_device_commands_replaces_set(api):
    commands = await api.update_my_device_commands(
        OWNER, DeviceId(1), [CommandId(3), CommandId(2)],
    )
    assert [c.id for c in commands] == [2, 3]


async def test_update_other_users_commands_leaves_set_untouched(api, seeded_store):
    with pytest.raises(ForbiddenError):
        await api.update_my_device_commands(OWNER, DeviceId(3), [])
    commands = await seeded_store.list_commands_for_device(TEST_DEVICES[2])
    assert len(commands) == 3


async def test_update_my_device_location_returns_refreshed_device(api):
    device = await api.update_my_device_location(OTHER, DeviceId(3), 48.85, 2.35)
    assert (device.latitude, device.longitude) == (48.85, 2.35)
    assert device.has_reported


async def test_add_my_device_command_is_idempotent(api):
    first = await api.add_my_device_command(OWNER, DeviceId(1), CommandId(3))
    second = await api.add_my_device_command(OWNER, DeviceId(1), CommandId(3))
    assert [c.id for c in first] == [c.id for c in second] == [1, 3]


async def test_list_my_device_commands_for_missing_device(api):
    with pytest.raises(ResourceNotFoundError):
        await api.list_my_device_commands(OWNER, DeviceId(42))
