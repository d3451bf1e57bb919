"""Root conftest - shared test configuration and registry fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database (foreign keys on)
    - seeded_store holds the reference data set: 3 commands, 3 devices,
      device N has commands 1..N queued
"""

import os

import pytest

# Ensure tests never touch a real database or a real secret
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("LOG_FORMAT", "text")

from whereismyfox.db.session import create_engine_for_url  # noqa: E402
from whereismyfox.infrastructure.database import DatabaseSessionManager  # noqa: E402
from whereismyfox.services.registry_store import RegistryStore  # noqa: E402
from tests.registry_data import TEST_COMMANDS, TEST_DEVICES  # noqa: E402


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager(
        create_engine_for_url("sqlite+aiosqlite:///:memory:"),
    )
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
def store(db_manager):
    return RegistryStore(db_manager)


@pytest.fixture
async def seeded_store(store):
    await store.seed_command_catalog(TEST_COMMANDS)
    for i, device in enumerate(TEST_DEVICES):
        added = await store.add_device(device.user, device.name, device.endpoint)
        assert added == device
        for command in TEST_COMMANDS[: i + 1]:
            await store.add_command_for_device(added.id, command.id)
    return store
