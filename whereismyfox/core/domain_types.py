"""Domain Types - identity types and immutable records passed between layers.

Invariants:
    - DeviceId, CommandId wrap ints: ids are assigned by the store and never change
    - DeviceRecord / CommandRecord are frozen: compared by value, never live ORM rows
    - DeviceRecord.timestamp == NEVER_REPORTED until the first location update
    - TIMESTAMP_FORMAT is fixed and round-trips through datetime.strptime

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - Frozen dataclasses over dicts: equality is what "the record we created" means
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

DeviceId = NewType("DeviceId", int)
CommandId = NewType("CommandId", int)
UserId = NewType("UserId", str)     # opaque, usually an email address


# ─── Values ──────────────────────────────────────────────────────

NEVER_REPORTED = ""
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


@dataclass(frozen=True)
class DeviceRecord:
    """A registered device as last persisted."""
    id: DeviceId
    user: UserId
    name: str
    endpoint: str
    latitude: float = 0.0
    longitude: float = 0.0
    timestamp: str = NEVER_REPORTED

    @property
    def has_reported(self) -> bool:
        return self.timestamp != NEVER_REPORTED


@dataclass(frozen=True)
class CommandRecord:
    """A catalog entry describing a remote action."""
    id: CommandId
    name: str
    description: str


# ─── Enums ───────────────────────────────────────────────────────

class CommandName(str, Enum):
    """Remote actions a device can be asked to perform."""
    TRACK = "Track"
    UNTRACK = "Untrack"
    WIPE = "Wipe"


DEFAULT_COMMANDS: tuple[CommandRecord, ...] = (
    CommandRecord(CommandId(1), CommandName.TRACK.value, "Start tracking a device"),
    CommandRecord(CommandId(2), CommandName.UNTRACK.value, "Stop tracking a device"),
    CommandRecord(CommandId(3), CommandName.WIPE.value, "Wipe a device's personal information"),
)
