"""Tests for the error hierarchy - codes, statuses and wire shapes."""

from whereismyfox.core.errors import (
    DatabaseError, ErrorCategory, ForbiddenError, IdentityVerificationError,
    ResourceNotFoundError, UnauthorizedError, VerifierUnavailableError,
    WhereIsMyFoxError,
)


def test_forbidden_renders_identically_to_not_found():
    forbidden = ForbiddenError("Device", "7")
    missing = ResourceNotFoundError("Device", "7")
    assert forbidden.to_response() == missing.to_response()
    assert forbidden.http_status == missing.http_status == 404


def test_unauthorized_is_401():
    exc = UnauthorizedError()
    assert exc.http_status == 401
    assert exc.to_response()["error"]["code"] == "UNAUTHORIZED"


def test_database_error_is_503_with_operation():
    exc = DatabaseError("Integrity constraint violated", "commit")
    assert exc.http_status == 503
    assert exc.operation == "commit"
    assert exc.category is ErrorCategory.DATABASE
    assert exc.message == "Database commit failed: Integrity constraint violated"


def test_verifier_errors_are_distinct():
    rejected = IdentityVerificationError("assertion has expired")
    down = VerifierUnavailableError("timeout")
    assert rejected.http_status == 401
    assert down.http_status == 503
    assert rejected.reason == "assertion has expired"


def test_all_errors_share_base():
    for exc in (
        UnauthorizedError(), ResourceNotFoundError("Device", "1"),
        DatabaseError("x", "query"), VerifierUnavailableError("x"),
    ):
        assert isinstance(exc, WhereIsMyFoxError)
        assert set(exc.to_response()["error"]) == {
            "code", "message", "category", "severity",
        }
