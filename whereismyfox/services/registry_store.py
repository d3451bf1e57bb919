"""Registry Store - durable persistence of devices, commands and pending-command sets.

Invariants:
    - One session per call, one transaction per mutating call (all or nothing)
    - Reads of absent keys return None / empty lists, never raise
    - Storage failures surface as DatabaseError immediately (no retries)
    - Only frozen records leave this module, never ORM rows
    - update_commands_for_device: row lock + delete + insert in ONE transaction;
      a failure at any step leaves the previous set untouched
    - add_command and add_command_for_device are idempotent, including under
      concurrent inserts of the same entry

Design Decisions:
    - Session manager injected at construction: no module-level engine or session
    - Core-level insert() for association rows: no identity-map interplay with
      the bulk delete issued in the same transaction
    - with_for_update on the device row: PostgreSQL serializes replacements per
      device, SQLite ignores it and serializes writers database-wide
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from whereismyfox.core.domain_types import (
    DEFAULT_COMMANDS, NEVER_REPORTED, TIMESTAMP_FORMAT,
    CommandId, CommandRecord, DeviceId, DeviceRecord,
)
from whereismyfox.core.errors import DatabaseError, ResourceNotFoundError
from whereismyfox.infrastructure.database import DatabaseSessionManager
from whereismyfox.models.command import Command
from whereismyfox.models.device import Device
from whereismyfox.models.device_command import DeviceCommand

logger = logging.getLogger(__name__)


def _now_timestamp() -> str:
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


class RegistryStore:
    """Devices, command catalog and device-command associations."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    # ─── Devices ─────────────────────────────────────────────────

    async def add_device(self, user: str, name: str, endpoint: str) -> DeviceRecord:
        """Register a new device. Duplicate (user, name, endpoint) is allowed."""
        async with self._db.session() as db:
            async with db.begin():
                device = Device(
                    user=user, name=name, endpoint=endpoint,
                    latitude=0.0, longitude=0.0, timestamp=NEVER_REPORTED,
                )
                db.add(device)
                await db.flush()
                record = device.to_record()
        logger.info(
            f"Device {record.id} registered",
            extra={"device_id": record.id, "user": user},
        )
        return record

    async def get_device_by_id(self, device_id: DeviceId) -> DeviceRecord | None:
        async with self._db.session() as db:
            device = await db.get(Device, device_id)
            return device.to_record() if device else None

    async def list_devices_for_user(self, user: str) -> list[DeviceRecord]:
        """All devices owned by user, ascending id."""
        async with self._db.session() as db:
            result = await db.execute(
                select(Device).where(Device.user == user).order_by(Device.id),
            )
            return [d.to_record() for d in result.scalars().all()]

    async def update_device_location(
        self, device: DeviceRecord, latitude: float, longitude: float,
    ) -> None:
        """Overwrite coordinates and stamp the current UTC time."""
        stamp = _now_timestamp()
        async with self._db.session() as db:
            async with db.begin():
                result = await db.execute(
                    update(Device)
                    .where(Device.id == device.id)
                    .values(latitude=latitude, longitude=longitude, timestamp=stamp),
                )
                if result.rowcount != 1:
                    raise ResourceNotFoundError("Device", str(device.id))
        logger.info(
            f"Device {device.id} location updated",
            extra={"device_id": device.id},
        )

    # ─── Command catalog ─────────────────────────────────────────

    async def add_command(
        self, command_id: CommandId, name: str, description: str,
    ) -> CommandRecord:
        """Insert a catalog entry; no-op when an identical entry exists."""
        try:
            async with self._db.session() as db:
                async with db.begin():
                    existing = await db.get(Command, command_id)
                    if existing is None:
                        command = Command(id=command_id, name=name, description=description)
                        db.add(command)
                        return command.to_record()
                    _check_same_command(existing, name, description)
                    return existing.to_record()
        except DatabaseError:
            # a concurrent seeder may have inserted the same entry first
            async with self._db.session() as db:
                existing = await db.get(Command, command_id)
                if existing is None:
                    raise
                _check_same_command(existing, name, description)
                return existing.to_record()

    async def seed_command_catalog(
        self, commands: Iterable[CommandRecord] = DEFAULT_COMMANDS,
    ) -> list[CommandRecord]:
        seeded = [
            await self.add_command(c.id, c.name, c.description) for c in commands
        ]
        logger.info(f"Command catalog seeded ({len(seeded)} entries)")
        return seeded

    # ─── Associations ────────────────────────────────────────────

    async def add_command_for_device(
        self, device_id: DeviceId, command_id: CommandId,
    ) -> None:
        """Queue command for device. Re-adding an existing pair is a success."""
        try:
            async with self._db.session() as db:
                async with db.begin():
                    if await _association_exists(db, device_id, command_id):
                        return
                    await db.execute(
                        insert(DeviceCommand),
                        [{"device_id": device_id, "command_id": command_id}],
                    )
        except DatabaseError:
            # a concurrent writer may have inserted the same pair first
            async with self._db.session() as db:
                if await _association_exists(db, device_id, command_id):
                    return
            raise

    async def list_commands_for_device(
        self, device: DeviceRecord,
    ) -> list[CommandRecord]:
        """Pending commands for device, ascending command id."""
        async with self._db.session() as db:
            result = await db.execute(
                select(Command)
                .join(DeviceCommand, DeviceCommand.command_id == Command.id)
                .where(DeviceCommand.device_id == device.id)
                .order_by(Command.id),
            )
            return [c.to_record() for c in result.scalars().all()]

    async def update_commands_for_device(
        self, device_id: DeviceId, command_ids: Sequence[CommandId],
    ) -> None:
        """Atomically replace the device's pending-command set with command_ids."""
        wanted = list(dict.fromkeys(command_ids))
        async with self._db.session() as db:
            async with db.begin():
                locked = await db.execute(
                    select(Device.id).where(Device.id == device_id).with_for_update(),
                )
                if locked.scalar_one_or_none() is None:
                    raise ResourceNotFoundError("Device", str(device_id))
                await db.execute(
                    delete(DeviceCommand).where(DeviceCommand.device_id == device_id),
                )
                if wanted:
                    await db.execute(
                        insert(DeviceCommand),
                        [{"device_id": device_id, "command_id": c} for c in wanted],
                    )
        logger.info(
            f"Device {device_id} commands replaced",
            extra={"device_id": device_id, "command_ids": wanted},
        )


async def _association_exists(
    db: AsyncSession, device_id: DeviceId, command_id: CommandId,
) -> bool:
    result = await db.execute(
        select(DeviceCommand.device_id).where(
            DeviceCommand.device_id == device_id,
            DeviceCommand.command_id == command_id,
        ),
    )
    return result.first() is not None


def _check_same_command(existing: Command, name: str, description: str) -> None:
    if (existing.name, existing.description) != (name, description):
        raise DatabaseError(
            f"command {existing.id} exists with different content", "insert",
        )
