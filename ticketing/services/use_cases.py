"""Use Cases: business rules around the ticket and respond stores.

Invariants:
    - create_ticket: category exists -> every tag exists -> no identical ticket of the user -> store
    - respond_to_ticket: ticket exists -> responder is not the owner -> master resolves
      -> master has not responded yet -> store
    - update_ticket: ticket exists -> supplied category exists -> supplied tags exist
      -> diff against stored children -> store -> best-effort notification
    - delete_ticket: ticket exists -> collect responds -> store -> best-effort notification
    - A failed precondition issues zero writes
    - Taxonomy errors (e.g. MasterNotFoundError) propagate unchanged

Design Decisions:
    - Depends on protocols only: in-memory fakes substitute every collaborator in tests
    - Duplicate checks are check-then-act reads with no lock or unique constraint
      (ADR: concurrent identical submissions can both commit; known gap, kept as-is)
"""

import logging

from ticketing.core.child_diff import diff_attachments, diff_tag_ids
from ticketing.core.entities import (
    CategoryId, CreateTicketDTO, MasterId, Pagination, RawRespondToTicketDTO,
    RawUpdateTicketDTO, Respond, RespondId, RespondToTicketDTO, TagId, Ticket,
    TicketId, TicketsFilters, UpdateRespondDTO, UpdateTicketDTO, UserId,
)
from ticketing.core.errors import (
    CategoryNotFoundError, RespondAlreadyExistsError, RespondToOwnTicketError,
    TagNotFoundError, TicketAlreadyExistsError,
)
from ticketing.core.repository_protocols import (
    RespondsRepository, TaxonomyClient, TicketsRepository,
)
from ticketing.core.ticket_rules import (
    category_exists, find_first_missing_tag, has_duplicate_respond,
    has_duplicate_ticket,
)
from ticketing.services.notification_dispatcher import NotificationDispatcher

logger = logging.getLogger(__name__)


class UseCases:
    """Entry point for every ticket and respond operation."""

    def __init__(
        self,
        tickets_repository: TicketsRepository,
        responds_repository: RespondsRepository,
        taxonomy_client: TaxonomyClient,
        notifications: NotificationDispatcher,
    ):
        self.tickets_repository = tickets_repository
        self.responds_repository = responds_repository
        self.taxonomy_client = taxonomy_client
        self.notifications = notifications

    # ─── Tickets ─────────────────────────────────────────────────

    async def create_ticket(self, ticket_data: CreateTicketDTO) -> TicketId:
        await self._validate_category(ticket_data.category_id)
        await self._validate_tags(ticket_data.tag_ids)

        user_tickets = await self.tickets_repository.get_user_tickets(ticket_data.user_id)
        if has_duplicate_ticket(user_tickets, ticket_data):
            logger.warning(
                f"Duplicate ticket rejected for user {ticket_data.user_id}",
                extra={"user_id": ticket_data.user_id},
            )
            raise TicketAlreadyExistsError()

        return await self.tickets_repository.create_ticket(ticket_data)

    async def get_ticket_by_id(self, ticket_id: TicketId) -> Ticket:
        return await self.tickets_repository.get_ticket_by_id(ticket_id)

    async def get_tickets(
        self,
        pagination: Pagination | None = None,
        filters: TicketsFilters | None = None,
    ) -> list[Ticket]:
        return await self.tickets_repository.get_tickets(pagination, filters)

    async def count_tickets(self, filters: TicketsFilters | None = None) -> int:
        return await self.tickets_repository.count_tickets(filters)

    async def get_user_tickets(
        self,
        user_id: UserId,
        pagination: Pagination | None = None,
        filters: TicketsFilters | None = None,
    ) -> list[Ticket]:
        return await self.tickets_repository.get_user_tickets(user_id, pagination, filters)

    async def count_user_tickets(
        self, user_id: UserId, filters: TicketsFilters | None = None,
    ) -> int:
        return await self.tickets_repository.count_user_tickets(user_id, filters)

    async def update_ticket(self, raw_ticket_data: RawUpdateTicketDTO) -> None:
        ticket = await self.get_ticket_by_id(raw_ticket_data.id)

        if raw_ticket_data.category_id is not None:
            await self._validate_category(raw_ticket_data.category_id)
        await self._validate_tags(raw_ticket_data.tag_ids)

        tag_diff = diff_tag_ids(ticket.tag_ids, raw_ticket_data.tag_ids)
        attachment_diff = diff_attachments(ticket.attachments, raw_ticket_data.attachments)

        await self.tickets_repository.update_ticket(
            UpdateTicketDTO(
                id=raw_ticket_data.id,
                category_id=raw_ticket_data.category_id,
                name=raw_ticket_data.name,
                description=raw_ticket_data.description,
                price=raw_ticket_data.price,
                quantity=raw_ticket_data.quantity,
                tag_ids_to_add=tag_diff.to_add,
                tag_ids_to_delete=tag_diff.to_delete,
                attachments_to_add=attachment_diff.links_to_add,
                attachment_ids_to_delete=attachment_diff.ids_to_delete,
            ),
        )
        await self.notifications.notify_ticket_updated(ticket)

    async def delete_ticket(self, ticket_id: TicketId) -> None:
        ticket = await self.get_ticket_by_id(ticket_id)
        responds = await self.get_ticket_responds(ticket.id)
        await self.tickets_repository.delete_ticket(ticket_id)
        await self.notifications.notify_ticket_deleted(ticket, responds)

    # ─── Responds ────────────────────────────────────────────────

    async def respond_to_ticket(self, raw_respond_data: RawRespondToTicketDTO) -> RespondId:
        ticket = await self.get_ticket_by_id(raw_respond_data.ticket_id)
        if ticket.user_id == raw_respond_data.user_id:
            raise RespondToOwnTicketError()

        master = await self.taxonomy_client.get_master_by_user_id(raw_respond_data.user_id)
        respond_data = RespondToTicketDTO(
            ticket_id=raw_respond_data.ticket_id,
            master_id=master.id,
            price=raw_respond_data.price,
            comment=raw_respond_data.comment,
        )

        master_responds = await self.responds_repository.get_master_responds(master.id)
        if has_duplicate_respond(master_responds, respond_data.ticket_id):
            logger.warning(
                f"Duplicate respond rejected for ticket {respond_data.ticket_id}",
                extra={"ticket_id": respond_data.ticket_id, "master_id": master.id},
            )
            raise RespondAlreadyExistsError()

        return await self.responds_repository.respond_to_ticket(respond_data)

    async def get_respond_by_id(self, respond_id: RespondId) -> Respond:
        return await self.responds_repository.get_respond_by_id(respond_id)

    async def get_ticket_responds(self, ticket_id: TicketId) -> list[Respond]:
        return await self.responds_repository.get_ticket_responds(ticket_id)

    async def get_master_responds(self, master_id: MasterId) -> list[Respond]:
        return await self.responds_repository.get_master_responds(master_id)

    async def get_user_responds(self, user_id: UserId) -> list[Respond]:
        master = await self.taxonomy_client.get_master_by_user_id(user_id)
        return await self.responds_repository.get_master_responds(master.id)

    async def update_respond(self, respond_data: UpdateRespondDTO) -> None:
        await self.get_respond_by_id(respond_data.id)
        await self.responds_repository.update_respond(respond_data)

    async def delete_respond(self, respond_id: RespondId) -> None:
        await self.get_respond_by_id(respond_id)
        await self.responds_repository.delete_respond(respond_id)

    # ─── Validation ──────────────────────────────────────────────

    async def _validate_category(self, category_id: CategoryId) -> None:
        categories = await self.taxonomy_client.get_all_categories()
        if not category_exists(categories, category_id):
            raise CategoryNotFoundError(category_id)

    async def _validate_tags(self, tag_ids: list[TagId]) -> None:
        if not tag_ids:
            return
        tags = await self.taxonomy_client.get_all_tags()
        missing = find_first_missing_tag(tags, tag_ids)
        if missing is not None:
            raise TagNotFoundError(missing)
