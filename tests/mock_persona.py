"""Mock Authenticator - fixed caller identity for route and API tests.

Invariants:
    - logged_in=False behaves exactly like an anonymous request
    - Satisfies the Authenticator Protocol structurally (no inheritance)
    - login/logout flip the fixed identity, so route tests can observe them
"""

from tests.registry_data import OWNER


class MockPersona:
    """Authenticator that ignores the request and reports a configured user."""

    def __init__(self, logged_in: bool = True, email: str = OWNER):
        self.logged_in = logged_in
        self.email = email

    def is_authenticated(self, request) -> bool:
        return self.logged_in

    def caller_identity(self, request) -> str:
        return self.email if self.logged_in else ""

    def login(self, request, email: str) -> None:
        self.logged_in = True
        self.email = email

    def logout(self, request) -> None:
        self.logged_in = False
