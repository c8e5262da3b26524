"""Boundary Protocols: contracts between the use cases and the shell.

Invariants:
    - Services NEVER import concrete repositories or clients; they depend on these protocols
    - Implementations provided by main.py via dependency injection
    - By-id getters raise the matching NotFound error; list getters return [] when empty

Design Decisions:
    - Protocol over ABC: structural subtyping, in-memory fakes need no inheritance
      (ADR: substitutable stores for tests)
    - Async in Protocol: every implementation does IO
"""

from typing import Protocol

from ticketing.core.entities import (
    Category, CreateTicketDTO, Master, MasterId, Pagination, Respond, RespondId,
    RespondToTicketDTO, Tag, Ticket, TicketId, TicketsFilters, UpdateRespondDTO,
    UpdateTicketDTO, UserId,
)


class TicketsRepository(Protocol):
    """Contract for ticket aggregate persistence."""
    async def create_ticket(self, ticket_data: CreateTicketDTO) -> TicketId: ...
    async def get_ticket_by_id(self, ticket_id: TicketId) -> Ticket: ...
    async def get_tickets(
        self,
        pagination: Pagination | None = None,
        filters: TicketsFilters | None = None,
    ) -> list[Ticket]: ...
    async def count_tickets(self, filters: TicketsFilters | None = None) -> int: ...
    async def get_user_tickets(
        self,
        user_id: UserId,
        pagination: Pagination | None = None,
        filters: TicketsFilters | None = None,
    ) -> list[Ticket]: ...
    async def count_user_tickets(
        self, user_id: UserId, filters: TicketsFilters | None = None,
    ) -> int: ...
    async def update_ticket(self, ticket_data: UpdateTicketDTO) -> None: ...
    async def delete_ticket(self, ticket_id: TicketId) -> None: ...


class RespondsRepository(Protocol):
    """Contract for respond persistence."""
    async def respond_to_ticket(self, respond_data: RespondToTicketDTO) -> RespondId: ...
    async def get_respond_by_id(self, respond_id: RespondId) -> Respond: ...
    async def get_ticket_responds(self, ticket_id: TicketId) -> list[Respond]: ...
    async def get_master_responds(self, master_id: MasterId) -> list[Respond]: ...
    async def update_respond(self, respond_data: UpdateRespondDTO) -> None: ...
    async def delete_respond(self, respond_id: RespondId) -> None: ...


class TaxonomyClient(Protocol):
    """Contract for the external categories/tags/masters service."""
    async def get_all_categories(self) -> list[Category]: ...
    async def get_all_tags(self) -> list[Tag]: ...
    async def get_master_by_user_id(self, user_id: UserId) -> Master: ...


class NotificationPublisher(Protocol):
    """Contract for the message broker used for ticket events."""
    async def publish(self, subject: str, payload: bytes) -> None: ...
