"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - DeviceAPI depends on these Protocols, never on concrete classes
    - Authenticator.caller_identity returns "" when nobody is logged in
    - Authenticator.login/logout are the only writers of the caller identity

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
      (ADR: ExMA anti-pattern)
    - Authenticator is sync: it only reads and writes request state decoded by middleware
"""

from typing import TYPE_CHECKING, Protocol, Sequence

from whereismyfox.core.domain_types import (
    CommandId, CommandRecord, DeviceId, DeviceRecord,
)

if TYPE_CHECKING:
    from starlette.requests import Request


class Authenticator(Protocol):
    """Resolves the caller of a request. Real and fake implementations swap freely."""
    def is_authenticated(self, request: "Request") -> bool: ...
    def caller_identity(self, request: "Request") -> str: ...
    def login(self, request: "Request", email: str) -> None: ...
    def logout(self, request: "Request") -> None: ...


class DeviceStore(Protocol):
    """Contract for device/command persistence - implemented by RegistryStore."""
    async def add_device(
        self, user: str, name: str, endpoint: str,
    ) -> DeviceRecord: ...
    async def get_device_by_id(self, device_id: DeviceId) -> DeviceRecord | None: ...
    async def list_devices_for_user(self, user: str) -> list[DeviceRecord]: ...
    async def update_device_location(
        self, device: DeviceRecord, latitude: float, longitude: float,
    ) -> None: ...
    async def add_command_for_device(
        self, device_id: DeviceId, command_id: CommandId,
    ) -> None: ...
    async def list_commands_for_device(
        self, device: DeviceRecord,
    ) -> list[CommandRecord]: ...
    async def update_commands_for_device(
        self, device_id: DeviceId, command_ids: Sequence[CommandId],
    ) -> None: ...
