"""Command ORM - static catalog of remote actions (Track, Untrack, Wipe).

Invariants:
    - id is caller-assigned (seeded), not autoincrement
    - Rows are reference data: inserted once, never updated
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from whereismyfox.core.domain_types import CommandId, CommandRecord
from whereismyfox.db.base import Base


class Command(Base):
    """Catalog entry for a remote action."""
    __tablename__ = "commands"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False,
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def to_record(self) -> CommandRecord:
        return CommandRecord(
            id=CommandId(self.id), name=self.name, description=self.description,
        )
