"""Auth Schemas - login request and identity-verifier reply.

Invariants:
    - LoginRequest.assertion is non-empty after stripping
    - PersonaResponse tolerates missing optional fields (failure replies carry only status/reason)
"""

from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    """Identity assertion obtained by the client from the identity provider."""
    assertion: str = Field(min_length=1, max_length=20_000)

    @field_validator("assertion")
    @classmethod
    def strip_assertion(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("assertion cannot be empty or whitespace")
        return v


class PersonaResponse(BaseModel):
    """Verifier reply body."""
    status: str
    email: str = ""
    audience: str = ""
    expires: int = 0
    issuer: str = ""
    reason: str | None = None


class LoginStatus(BaseModel):
    email: str = ""
