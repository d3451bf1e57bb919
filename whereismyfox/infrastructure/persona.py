"""Persona Verifier Client - exchanges an identity assertion for a verified email.

Invariants:
    - One POST per verification, form-encoded {assertion, audience}
    - Reply status "okay" is the only success; anything else -> IdentityVerificationError
    - Transport errors, timeouts, non-JSON replies -> VerifierUnavailableError
    - Never retried: the caller decides whether to try again

Design Decisions:
    - httpx.AsyncClient per call with explicit timeout: verification is rare,
      pooling buys nothing and the timeout is the only cancellation surface
    - transport injectable: tests pass httpx.MockTransport, no network
"""

import logging

import httpx
from pydantic import ValidationError

from whereismyfox.core.errors import (
    IdentityVerificationError, VerifierUnavailableError,
)
from whereismyfox.schemas.auth import PersonaResponse

logger = logging.getLogger(__name__)


class PersonaVerifier:
    """Verifies identity assertions against a Persona-compatible verifier."""

    def __init__(
        self,
        audience: str,
        verifier_url: str,
        app_verifier_url: str | None = None,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.audience = audience
        self.verifier_url = verifier_url
        self.app_verifier_url = app_verifier_url or verifier_url
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def verify(self, assertion: str, app: bool = False) -> PersonaResponse:
        """Verify assertion and return the verifier reply (status == "okay").

        app=True targets the verifier for assertions issued to the device app.
        """
        url = self.app_verifier_url if app else self.verifier_url
        reply = await self._post(assertion, url)
        if reply.status != "okay":
            reason = reply.reason or "unknown reason"
            logger.warning(f"Persona failed to verify: {reason}")
            raise IdentityVerificationError(reason)
        if not reply.email:
            raise IdentityVerificationError("verifier returned no email")
        logger.info("Persona assertion verified", extra={"user": reply.email})
        return reply

    async def _post(self, assertion: str, verifier_url: str) -> PersonaResponse:
        data = {"assertion": assertion, "audience": self.audience}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport,
            ) as client:
                response = await client.post(verifier_url, data=data)
                response.raise_for_status()
        except httpx.TimeoutException:
            raise VerifierUnavailableError("timeout")
        except httpx.HTTPStatusError as e:
            raise VerifierUnavailableError(
                f"HTTP {e.response.status_code}",
            )
        except httpx.HTTPError as e:
            logger.error(f"Persona verifier request failed: {e}")
            raise VerifierUnavailableError("connection error")

        try:
            return PersonaResponse.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(f"Persona verifier sent an invalid reply: {e}")
            raise VerifierUnavailableError("invalid reply")
