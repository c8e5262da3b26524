"""Respond ORM: a master's offer against a ticket.

Invariants:
    - Always belongs to a Ticket (ticket_id FK, ON DELETE CASCADE)
    - master_id references the taxonomy service, so it carries no FK
    - comment is nullable; price is not

Design Decisions:
    - No unique constraint on (ticket_id, master_id): duplicates are rejected by a
      check-then-act read in the use case (ADR: known race, kept deliberately)
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Float, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from ticketing.db.base import Base, BigIntId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Respond(Base):
    """Respond entity: an offer by a master."""
    __tablename__ = "responds"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    ticket_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("tickets.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    master_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
