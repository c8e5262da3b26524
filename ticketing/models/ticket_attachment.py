"""TicketAttachment ORM: an opaque storage link attached to a ticket.

Invariants:
    - Always belongs to a Ticket (ticket_id FK, ON DELETE CASCADE)
    - link is non-nullable and never updated in place (changes are delete + insert)
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from ticketing.db.base import Base, BigIntId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TicketAttachment(Base):
    """Attachment row owned by a ticket."""
    __tablename__ = "tickets_attachments"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    ticket_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("tickets.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    link: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
