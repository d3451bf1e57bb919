"""DeviceCommand ORM - pending-command association between devices and commands.

Invariants:
    - (device_id, command_id) is the primary key: a pair exists at most once
    - The set of rows for a device IS its pending-command set
    - Both sides are foreign keys; deleting a device drops its associations
"""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from whereismyfox.db.base import Base


class DeviceCommand(Base):
    """Command currently queued for a device."""
    __tablename__ = "device_commands"

    device_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("devices.id", ondelete="CASCADE"),
        primary_key=True,
    )
    command_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("commands.id", ondelete="CASCADE"),
        primary_key=True,
    )
