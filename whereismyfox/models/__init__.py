"""ORM Models - SQLAlchemy declarative models for devices, commands and associations.

Invariants:
    - All models inherit from Base (db/base.py)
    - Models never leave services/: callers receive frozen records (core/domain_types.py)

Design Decisions:
    - One file per entity for locality (ADR: ExMA max 3-4 files to understand a feature)
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from whereismyfox.models.device import Device  # noqa: F401
from whereismyfox.models.command import Command  # noqa: F401
from whereismyfox.models.device_command import DeviceCommand  # noqa: F401
