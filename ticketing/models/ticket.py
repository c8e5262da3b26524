"""Ticket ORM: persists the aggregate root of a posted work request.

Invariants:
    - id is an autoincrement bigint primary key
    - price is nullable; quantity, name, description are not
    - Tag associations and attachments reference tickets.id with ON DELETE CASCADE

Design Decisions:
    - No ORM relationships to children: the repository reads them in a second pass per ticket,
      avoiding row multiplication from one-to-many joins (ADR: explicit child loading)
    - updated_at maintained by onupdate and touched explicitly on child-only updates
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, Float, Integer, String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from ticketing.db.base import Base, BigIntId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Ticket(Base):
    """Ticket aggregate root: owns tag associations and attachments."""
    __tablename__ = "tickets"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    category_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
