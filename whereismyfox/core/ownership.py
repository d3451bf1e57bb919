"""Ownership Rules - pure access decisions for device-scoped operations.

Invariants:
    - Empty caller identity is Unauthenticated: rejected before any lookup
    - A missing device and another user's device raise the same shape of error
    - No IO: the shell loads the device, these functions only decide
"""

from whereismyfox.core.domain_types import DeviceId, DeviceRecord
from whereismyfox.core.errors import (
    ErrorContext, ForbiddenError, ResourceNotFoundError, UnauthorizedError,
)


def require_identity(caller: str | None) -> str:
    """Return the caller identity or raise UnauthorizedError."""
    if not caller:
        raise UnauthorizedError()
    return caller


def check_ownership(
    caller: str, device_id: DeviceId, device: DeviceRecord | None,
) -> DeviceRecord:
    """Return the device when the caller owns it.

    Raises ResourceNotFoundError when absent, ForbiddenError when owned by
    someone else. Both render identically to clients.
    """
    if device is None:
        raise ResourceNotFoundError("Device", str(device_id))
    if device.user != caller:
        raise ForbiddenError(
            "Device", str(device_id),
            ErrorContext(device_id=device_id, user=caller),
        )
    return device
