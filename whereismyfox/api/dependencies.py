"""FastAPI Dependencies - hand app-scoped collaborators to each request.

Invariants:
    - Collaborators live on app.state, built once by main.create_app
    - No module-level store, session or authenticator handles
    - get_caller returns "" for anonymous requests; DeviceAPI rejects it

Design Decisions:
    - Overridable via app.dependency_overrides: tests swap the authenticator
      (ADR: interface-based swapping instead of patching globals)
"""

from fastapi import Depends, Request

from whereismyfox.core.repository_protocols import Authenticator
from whereismyfox.infrastructure.database import DatabaseSessionManager
from whereismyfox.infrastructure.persona import PersonaVerifier
from whereismyfox.services.device_api import DeviceAPI
from whereismyfox.services.registry_store import RegistryStore


def get_db_manager(request: Request) -> DatabaseSessionManager:
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        raise RuntimeError("Database not initialized")
    return manager


def get_registry_store(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
) -> RegistryStore:
    return RegistryStore(db_manager)


def get_device_api(
    store: RegistryStore = Depends(get_registry_store),
) -> DeviceAPI:
    return DeviceAPI(store)


def get_authenticator(request: Request) -> Authenticator:
    return request.app.state.authenticator


def get_persona_verifier(request: Request) -> PersonaVerifier:
    return request.app.state.persona_verifier


def get_caller(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
) -> str:
    """Caller identity for this request, "" when not logged in."""
    if not authenticator.is_authenticated(request):
        return ""
    return authenticator.caller_identity(request)
