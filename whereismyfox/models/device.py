"""Device ORM - one registered device and its last known location.

Invariants:
    - id is an autoincrement integer primary key, never reassigned
    - (user, name, endpoint) is NOT unique: duplicate registrations are allowed
    - timestamp == "" until the first location update

Design Decisions:
    - timestamp stored as formatted text, not DateTime: the wire value is the
      stored value, "" is a legal sentinel (ADR: never-reported devices)
    - No relationship() to commands: associations are looked up by key on demand
"""

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from whereismyfox.core.domain_types import (
    NEVER_REPORTED, DeviceId, DeviceRecord, UserId,
)
from whereismyfox.db.base import Base


class Device(Base):
    """Registered device owned by exactly one user."""
    __tablename__ = "devices"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    user: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    endpoint: Mapped[str] = mapped_column(Text, nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    longitude: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    timestamp: Mapped[str] = mapped_column(
        String(32), nullable=False, default=NEVER_REPORTED,
    )

    def to_record(self) -> DeviceRecord:
        return DeviceRecord(
            id=DeviceId(self.id),
            user=UserId(self.user),
            name=self.name,
            endpoint=self.endpoint,
            latitude=self.latitude,
            longitude=self.longitude,
            timestamp=self.timestamp,
        )
