"""Device Schemas - Pydantic models with field-level validation for API boundaries.

Invariants:
    - Latitude within [-90, 90], longitude within [-180, 180]
    - Command id lists are deduplicated, order preserved
    - DeviceResponse mirrors DeviceRecord field-for-field

Design Decisions:
    - from_attributes: responses built straight from frozen records
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeviceCreate(BaseModel):
    """Device registration for the calling user."""
    name: str = Field(min_length=1, max_length=200)
    endpoint: str = Field(min_length=1, max_length=2000)

    @field_validator("name", "endpoint")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class LocationUpdate(BaseModel):
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class CommandAdd(BaseModel):
    command_id: int = Field(ge=1)


class CommandSetUpdate(BaseModel):
    """Full replacement of a device's pending-command set."""
    command_ids: list[int] = Field(default_factory=list, max_length=100)

    @field_validator("command_ids")
    @classmethod
    def dedupe(cls, v: list[int]) -> list[int]:
        return list(dict.fromkeys(v))


class DeviceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user: str
    name: str
    endpoint: str
    latitude: float
    longitude: float
    timestamp: str


class CommandResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
