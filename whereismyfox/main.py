"""whereismyfox API - FastAPI application factory and entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery: ExMA anti-pattern)
    - Collaborators (db manager, authenticator, verifier) live on app.state;
      nothing is a module-level singleton
    - Command catalog seeded on startup (idempotent)
    - Session cookie signed with settings.session_secret

Design Decisions:
    - create_app() takes optional collaborators: tests inject an in-memory
      database and a fake authenticator without patching modules
    - Lifespan only builds what was not injected, and only disposes what it built
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from whereismyfox.api.auth import SessionAuthenticator
from whereismyfox.api.error_handlers import register_error_handlers
from whereismyfox.api.routes import auth, devices, health
from whereismyfox.config import Settings, get_settings
from whereismyfox.core.repository_protocols import Authenticator
from whereismyfox.infrastructure.database import DatabaseSessionManager
from whereismyfox.infrastructure.observability import setup_logging
from whereismyfox.infrastructure.persona import PersonaVerifier
from whereismyfox.services.registry_store import RegistryStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)

    owns_db = app.state.db_manager is None
    if owns_db:
        app.state.db_manager = DatabaseSessionManager.from_url(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
    if settings.database_create_schema:
        await app.state.db_manager.create_schema()
    if settings.seed_commands:
        await RegistryStore(app.state.db_manager).seed_command_catalog()

    logger.info("whereismyfox API started")
    yield
    logger.info("whereismyfox API shutting down")
    if owns_db:
        await app.state.db_manager.dispose()
        app.state.db_manager = None


def create_app(
    settings: Settings | None = None,
    *,
    db_manager: DatabaseSessionManager | None = None,
    authenticator: Authenticator | None = None,
    persona_verifier: PersonaVerifier | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="whereismyfox API", version="1.0.0", lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db_manager = db_manager
    app.state.authenticator = authenticator or SessionAuthenticator()
    app.state.persona_verifier = persona_verifier or PersonaVerifier(
        audience=settings.persona_audience,
        verifier_url=settings.persona_verifier_url,
        app_verifier_url=settings.persona_app_verifier_url,
        timeout_seconds=settings.persona_timeout_seconds,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie_name,
        max_age=settings.session_max_age_seconds,
        https_only=settings.session_https_only,
    )

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(devices.router)

    register_error_handlers(app)
    return app


app = create_app()
