"""Session Authenticator - caller identity from the signed session cookie.

Invariants:
    - Identity is request.session["email"]; absent or non-string -> ""
    - Requires Starlette SessionMiddleware (installed by main.create_app)
    - Only the login route writes the identity; logout removes it
"""

from starlette.requests import Request

_EMAIL_KEY = "email"


class SessionAuthenticator:
    """Real Authenticator: reads the identity stored at login."""

    def is_authenticated(self, request: Request) -> bool:
        return bool(self.caller_identity(request))

    def caller_identity(self, request: Request) -> str:
        email = request.session.get(_EMAIL_KEY)
        return email if isinstance(email, str) else ""

    def login(self, request: Request, email: str) -> None:
        request.session[_EMAIL_KEY] = email

    def logout(self, request: Request) -> None:
        request.session.pop(_EMAIL_KEY, None)
