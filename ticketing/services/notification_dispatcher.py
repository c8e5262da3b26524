"""Notification Dispatcher: best-effort ticket event publication.

Invariants:
    - Never raises: encoding and publish failures are logged and discarded
    - Called only after the store mutation committed; its outcome never reaches the use case result
    - No retries

Design Decisions:
    - Synchronous await from the caller's perspective, result intentionally dropped
      (ADR: notifications are a newsletter side channel, not part of the transaction)
"""

import logging

from pydantic import BaseModel

from ticketing.core.entities import Respond, Ticket
from ticketing.core.repository_protocols import NotificationPublisher
from ticketing.core.ticket_rules import collect_master_ids
from ticketing.schemas.events import TicketDeletedEvent, TicketUpdatedEvent

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Publishes ticket events through a NotificationPublisher."""

    def __init__(
        self,
        publisher: NotificationPublisher,
        update_ticket_subject: str,
        delete_ticket_subject: str,
    ):
        self.publisher = publisher
        self.update_ticket_subject = update_ticket_subject
        self.delete_ticket_subject = delete_ticket_subject

    async def notify_ticket_updated(self, ticket: Ticket) -> bool:
        event = TicketUpdatedEvent(ticket_id=ticket.id)
        return await self._dispatch(self.update_ticket_subject, event, ticket.id)

    async def notify_ticket_deleted(
        self, ticket: Ticket, responds: list[Respond],
    ) -> bool:
        event = TicketDeletedEvent(
            ticket_owner_id=ticket.user_id,
            name=ticket.name,
            description=ticket.description,
            price=ticket.price,
            quantity=ticket.quantity,
            responded_masters_ids=collect_master_ids(responds),
        )
        return await self._dispatch(self.delete_ticket_subject, event, ticket.id)

    async def _dispatch(self, subject: str, event: BaseModel, ticket_id: int) -> bool:
        """Encode and publish. Returns False on failure instead of raising."""
        try:
            payload = event.model_dump_json().encode("utf-8")
            await self.publisher.publish(subject, payload)
        except Exception as e:
            logger.error(
                f"Failed to publish {subject} for ticket {ticket_id}: {e}",
                extra={"subject": subject, "ticket_id": ticket_id},
                exc_info=True,
            )
            return False
        return True
