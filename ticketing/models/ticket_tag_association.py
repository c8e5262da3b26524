"""TicketTagAssociation ORM: links a ticket to a taxonomy tag id.

Invariants:
    - Always belongs to a Ticket (ticket_id FK, ON DELETE CASCADE)
    - tag_id references the taxonomy service, so it carries no FK
"""

from sqlalchemy import BigInteger, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from ticketing.db.base import Base, BigIntId


class TicketTagAssociation(Base):
    """Ticket-to-tag association row."""
    __tablename__ = "tickets_tags_associations"
    __table_args__ = (
        Index("ix_tickets_tags_associations_ticket_tag", "ticket_id", "tag_id"),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    ticket_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False,
    )
    tag_id: Mapped[int] = mapped_column(Integer, nullable=False)
