"""Device Routes - owner-scoped device and pending-command endpoints.

Invariants:
    - Every handler passes the caller identity to DeviceAPI; none talks to the store
    - Anonymous callers get 401 before any lookup
    - Another user's device answers exactly like a missing one (404)
    - List endpoint returns references ("/api/v1/devices/{id}"), not full records
"""

import logging

from fastapi import APIRouter, Depends, status

from whereismyfox.api.dependencies import get_caller, get_device_api
from whereismyfox.core.domain_types import CommandId, DeviceId
from whereismyfox.schemas.device import (
    CommandAdd, CommandResponse, CommandSetUpdate, DeviceCreate,
    DeviceResponse, LocationUpdate,
)
from whereismyfox.services.device_api import DeviceAPI

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/devices", tags=["devices"])


def device_reference(device_id: int) -> str:
    return f"{router.prefix}/{device_id}"


@router.get("", response_model=list[str])
async def list_devices(
    caller: str = Depends(get_caller), api: DeviceAPI = Depends(get_device_api),
):
    """References to every device the caller owns, ascending id."""
    devices = await api.list_my_devices(caller)
    return [device_reference(d.id) for d in devices]


@router.post(
    "", response_model=DeviceResponse, status_code=status.HTTP_201_CREATED,
)
async def register_device(
    body: DeviceCreate,
    caller: str = Depends(get_caller),
    api: DeviceAPI = Depends(get_device_api),
):
    device = await api.register_my_device(caller, body.name, body.endpoint)
    return DeviceResponse.model_validate(device)


@router.get("/{device_id}", response_model=DeviceResponse)
async def get_device(
    device_id: int,
    caller: str = Depends(get_caller),
    api: DeviceAPI = Depends(get_device_api),
):
    device = await api.get_my_device(caller, DeviceId(device_id))
    return DeviceResponse.model_validate(device)


@router.put("/{device_id}/location", response_model=DeviceResponse)
async def update_location(
    device_id: int,
    body: LocationUpdate,
    caller: str = Depends(get_caller),
    api: DeviceAPI = Depends(get_device_api),
):
    """Device reports its position; timestamp is stamped server-side."""
    device = await api.update_my_device_location(
        caller, DeviceId(device_id), body.latitude, body.longitude,
    )
    return DeviceResponse.model_validate(device)


@router.get("/{device_id}/commands", response_model=list[CommandResponse])
async def list_commands(
    device_id: int,
    caller: str = Depends(get_caller),
    api: DeviceAPI = Depends(get_device_api),
):
    commands = await api.list_my_device_commands(caller, DeviceId(device_id))
    return [CommandResponse.model_validate(c) for c in commands]


@router.post("/{device_id}/commands", response_model=list[CommandResponse])
async def add_command(
    device_id: int,
    body: CommandAdd,
    caller: str = Depends(get_caller),
    api: DeviceAPI = Depends(get_device_api),
):
    """Queue one command. Queuing an already pending command is a no-op."""
    commands = await api.add_my_device_command(
        caller, DeviceId(device_id), CommandId(body.command_id),
    )
    return [CommandResponse.model_validate(c) for c in commands]


@router.put("/{device_id}/commands", response_model=list[CommandResponse])
async def replace_commands(
    device_id: int,
    body: CommandSetUpdate,
    caller: str = Depends(get_caller),
    api: DeviceAPI = Depends(get_device_api),
):
    """Replace the whole pending-command set atomically."""
    commands = await api.update_my_device_commands(
        caller, DeviceId(device_id), [CommandId(c) for c in body.command_ids],
    )
    return [CommandResponse.model_validate(c) for c in commands]
