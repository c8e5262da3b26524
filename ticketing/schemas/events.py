"""Event Schemas: payloads published to the broker on ticket changes.

Invariants:
    - Payloads are JSON-encoded UTF-8 bytes
    - TicketDeletedEvent carries everything consumers need, since the ticket row is gone
"""

from pydantic import BaseModel


class TicketUpdatedEvent(BaseModel):
    """Published after a ticket update commits."""
    ticket_id: int


class TicketDeletedEvent(BaseModel):
    """Published after a ticket delete commits."""
    ticket_owner_id: int
    name: str
    description: str
    price: float | None = None
    quantity: int
    responded_masters_ids: list[int]
