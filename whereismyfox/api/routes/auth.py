"""Auth Routes - identity-assertion login, logout and login check.

Invariants:
    - Session identity is written only after the verifier answered "okay"
    - /login uses the web verifier, /app-login the app verifier
    - Logout always succeeds, even without a session

Design Decisions:
    - Verification delegated to PersonaVerifier; these handlers only hand the
      verified email to the app's Authenticator, the same one get_caller reads
"""

import logging

from fastapi import APIRouter, Depends, Request

from whereismyfox.api.dependencies import (
    get_authenticator, get_caller, get_persona_verifier,
)
from whereismyfox.core.repository_protocols import Authenticator
from whereismyfox.infrastructure.persona import PersonaVerifier
from whereismyfox.schemas.auth import LoginRequest, LoginStatus, PersonaResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


async def _login(
    request: Request, body: LoginRequest,
    verifier: PersonaVerifier, authenticator: Authenticator, app: bool,
) -> PersonaResponse:
    reply = await verifier.verify(body.assertion, app=app)
    authenticator.login(request, reply.email)
    logger.info("User logged in", extra={"user": reply.email})
    return reply


@router.post("/login", response_model=PersonaResponse)
async def login(
    request: Request,
    body: LoginRequest,
    verifier: PersonaVerifier = Depends(get_persona_verifier),
    authenticator: Authenticator = Depends(get_authenticator),
):
    return await _login(request, body, verifier, authenticator, app=False)


@router.post("/app-login", response_model=PersonaResponse)
async def app_login(
    request: Request,
    body: LoginRequest,
    verifier: PersonaVerifier = Depends(get_persona_verifier),
    authenticator: Authenticator = Depends(get_authenticator),
):
    return await _login(request, body, verifier, authenticator, app=True)


@router.post("/logout")
async def logout(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
):
    authenticator.logout(request)
    return {"status": "ok"}


@router.get("/me", response_model=LoginStatus)
async def login_check(caller: str = Depends(get_caller)):
    return LoginStatus(email=caller)
