"""Access-Controlled Device API - per-user ownership enforced before every store call.

Invariants:
    - Empty caller -> UnauthorizedError, raised before the store is touched
    - Device-scoped calls load the device and check ownership first
    - Another user's device -> ForbiddenError, rendered exactly like not-found
    - Stateless: nothing survives between calls except what the store persists

Design Decisions:
    - Depends on the DeviceStore Protocol, not RegistryStore: tests may pass fakes
    - Ownership decision lives in core/ownership.py (pure); this module only orchestrates IO
"""

import logging
from typing import Sequence

from whereismyfox.core.domain_types import (
    CommandId, CommandRecord, DeviceId, DeviceRecord,
)
from whereismyfox.core.errors import ForbiddenError
from whereismyfox.core.ownership import check_ownership, require_identity
from whereismyfox.core.repository_protocols import DeviceStore

logger = logging.getLogger(__name__)


class DeviceAPI:
    """Device operations on behalf of an identified caller."""

    def __init__(self, store: DeviceStore):
        self.store = store

    async def list_my_devices(self, caller: str | None) -> list[DeviceRecord]:
        user = require_identity(caller)
        return await self.store.list_devices_for_user(user)

    async def get_my_device(
        self, caller: str | None, device_id: DeviceId,
    ) -> DeviceRecord:
        user = require_identity(caller)
        return await self._load_owned(user, device_id)

    async def register_my_device(
        self, caller: str | None, name: str, endpoint: str,
    ) -> DeviceRecord:
        user = require_identity(caller)
        return await self.store.add_device(user, name, endpoint)

    async def update_my_device_location(
        self, caller: str | None, device_id: DeviceId,
        latitude: float, longitude: float,
    ) -> DeviceRecord:
        """Record a location report and return the refreshed device."""
        user = require_identity(caller)
        device = await self._load_owned(user, device_id)
        await self.store.update_device_location(device, latitude, longitude)
        return await self._load_owned(user, device_id)

    async def list_my_device_commands(
        self, caller: str | None, device_id: DeviceId,
    ) -> list[CommandRecord]:
        user = require_identity(caller)
        device = await self._load_owned(user, device_id)
        return await self.store.list_commands_for_device(device)

    async def add_my_device_command(
        self, caller: str | None, device_id: DeviceId, command_id: CommandId,
    ) -> list[CommandRecord]:
        user = require_identity(caller)
        device = await self._load_owned(user, device_id)
        await self.store.add_command_for_device(device.id, command_id)
        return await self.store.list_commands_for_device(device)

    async def update_my_device_commands(
        self, caller: str | None, device_id: DeviceId,
        command_ids: Sequence[CommandId],
    ) -> list[CommandRecord]:
        """Replace the pending-command set; returns the set now stored."""
        user = require_identity(caller)
        device = await self._load_owned(user, device_id)
        await self.store.update_commands_for_device(device.id, command_ids)
        return await self.store.list_commands_for_device(device)

    async def _load_owned(self, user: str, device_id: DeviceId) -> DeviceRecord:
        device = await self.store.get_device_by_id(device_id)
        try:
            return check_ownership(user, device_id, device)
        except ForbiddenError:
            logger.warning(
                f"Device {device_id} requested by non-owner",
                extra={"device_id": device_id, "user": user},
            )
            raise
