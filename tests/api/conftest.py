"""Route test fixtures - app built with injected collaborators + httpx test client.

Invariants:
    - App shares the seeded in-memory database of the store fixtures
    - Authenticator is MockPersona unless a test overrides the fixture
    - ASGITransport does not run lifespan: everything is injected up front
"""

import pytest
from httpx import ASGITransport, AsyncClient

from whereismyfox.config import Settings
from whereismyfox.main import create_app
from tests.mock_persona import MockPersona


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        session_secret="test-session-secret",
        database_create_schema=False,
        seed_commands=False,
        log_format="text",
    )


@pytest.fixture
def authenticator():
    return MockPersona(logged_in=True)


@pytest.fixture
def app(settings, db_manager, seeded_store, authenticator):
    return create_app(settings, db_manager=db_manager, authenticator=authenticator)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
