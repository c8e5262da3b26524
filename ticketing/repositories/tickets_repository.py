"""Tickets Repository: transactional persistence of tickets, tag associations and attachments.

Invariants:
    - create_ticket writes ticket + associations + attachments in ONE transaction;
      any failure rolls back all three (no partial ticket is ever visible)
    - update_ticket applies scalar changes and child deltas in ONE transaction
    - price is always rewritten on update (None clears it); other scalars only when supplied
    - Child rows are read in a second pass per ticket, never through a join
    - get_ticket_by_id raises TicketNotFoundError for a missing row
    - delete_ticket relies on ON DELETE CASCADE for child rows

Design Decisions:
    - Bulk INSERT/DELETE statements for child deltas (ADR: one round-trip per delta kind)
    - Child reads share the read session: one connection per call
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ticketing.core.entities import (
    Attachment, CreateTicketDTO, Pagination, Ticket, TicketsFilters, UpdateTicketDTO,
)
from ticketing.core.errors import TicketNotFoundError
from ticketing.infrastructure.database import DatabaseSessionManager
from ticketing.models.ticket import Ticket as TicketModel
from ticketing.models.ticket_attachment import TicketAttachment
from ticketing.models.ticket_tag_association import TicketTagAssociation
from ticketing.repositories import ticket_predicates

logger = logging.getLogger(__name__)


class SqlTicketsRepository:
    """SQL implementation of core.repository_protocols.TicketsRepository."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    # ─── Writes ──────────────────────────────────────────────────

    async def create_ticket(self, ticket_data: CreateTicketDTO) -> int:
        async with self.db.transaction() as session:
            ticket = TicketModel(
                user_id=ticket_data.user_id,
                category_id=ticket_data.category_id,
                name=ticket_data.name,
                description=ticket_data.description,
                price=ticket_data.price,
                quantity=ticket_data.quantity,
            )
            session.add(ticket)
            await session.flush()
            ticket_id = ticket.id

            await self._insert_tags(session, ticket_id, list(dict.fromkeys(ticket_data.tag_ids)))
            await self._insert_attachments(session, ticket_id, ticket_data.attachments)

        logger.info(
            f"Ticket {ticket_id} created",
            extra={"ticket_id": ticket_id, "user_id": ticket_data.user_id},
        )
        return ticket_id

    async def update_ticket(self, ticket_data: UpdateTicketDTO) -> None:
        values: dict = {
            "price": ticket_data.price,
            "updated_at": datetime.now(timezone.utc),
        }
        if ticket_data.category_id is not None:
            values["category_id"] = ticket_data.category_id
        if ticket_data.name is not None:
            values["name"] = ticket_data.name
        if ticket_data.description is not None:
            values["description"] = ticket_data.description
        if ticket_data.quantity is not None:
            values["quantity"] = ticket_data.quantity

        async with self.db.transaction() as session:
            await session.execute(
                update(TicketModel)
                .where(TicketModel.id == ticket_data.id)
                .values(**values),
            )
            await self._insert_tags(session, ticket_data.id, ticket_data.tag_ids_to_add)
            if ticket_data.tag_ids_to_delete:
                await session.execute(
                    delete(TicketTagAssociation).where(
                        TicketTagAssociation.ticket_id == ticket_data.id,
                        TicketTagAssociation.tag_id.in_(ticket_data.tag_ids_to_delete),
                    ),
                )
            await self._insert_attachments(
                session, ticket_data.id, ticket_data.attachments_to_add,
            )
            if ticket_data.attachment_ids_to_delete:
                await session.execute(
                    delete(TicketAttachment).where(
                        TicketAttachment.ticket_id == ticket_data.id,
                        TicketAttachment.id.in_(ticket_data.attachment_ids_to_delete),
                    ),
                )

        logger.info(f"Ticket {ticket_data.id} updated", extra={"ticket_id": ticket_data.id})

    async def delete_ticket(self, ticket_id: int) -> None:
        async with self.db.transaction() as session:
            await session.execute(
                delete(TicketModel).where(TicketModel.id == ticket_id),
            )
        logger.info(f"Ticket {ticket_id} deleted", extra={"ticket_id": ticket_id})

    async def _insert_tags(
        self, session: AsyncSession, ticket_id: int, tag_ids: list[int],
    ) -> None:
        if not tag_ids:
            return
        await session.execute(
            insert(TicketTagAssociation),
            [{"ticket_id": ticket_id, "tag_id": tag_id} for tag_id in tag_ids],
        )

    async def _insert_attachments(
        self, session: AsyncSession, ticket_id: int, links: list[str],
    ) -> None:
        if not links:
            return
        await session.execute(
            insert(TicketAttachment),
            [{"ticket_id": ticket_id, "link": link} for link in links],
        )

    # ─── Reads ───────────────────────────────────────────────────

    async def get_ticket_by_id(self, ticket_id: int) -> Ticket:
        async with self.db.session() as session:
            result = await session.execute(
                select(TicketModel).where(TicketModel.id == ticket_id),
            )
            row = result.scalar_one_or_none()
            if row is None:
                raise TicketNotFoundError(ticket_id)
            return await self._load_children(session, row)

    async def get_tickets(
        self,
        pagination: Pagination | None = None,
        filters: TicketsFilters | None = None,
    ) -> list[Ticket]:
        return await self._list(ticket_predicates.select_tickets(filters, pagination))

    async def get_user_tickets(
        self,
        user_id: int,
        pagination: Pagination | None = None,
        filters: TicketsFilters | None = None,
    ) -> list[Ticket]:
        return await self._list(
            ticket_predicates.select_tickets(filters, pagination, user_id=user_id),
        )

    async def count_tickets(self, filters: TicketsFilters | None = None) -> int:
        return await self._count(ticket_predicates.count_tickets(filters))

    async def count_user_tickets(
        self, user_id: int, filters: TicketsFilters | None = None,
    ) -> int:
        return await self._count(
            ticket_predicates.count_tickets(filters, user_id=user_id),
        )

    async def _list(self, query) -> list[Ticket]:
        async with self.db.session() as session:
            result = await session.execute(query)
            rows = result.scalars().all()
            # Children fetched per ticket after the ticket rows are fully read
            return [await self._load_children(session, row) for row in rows]

    async def _count(self, query) -> int:
        async with self.db.session() as session:
            result = await session.execute(query)
            return result.scalar_one()

    async def _load_children(self, session: AsyncSession, row: TicketModel) -> Ticket:
        tags_result = await session.execute(
            select(TicketTagAssociation.tag_id)
            .where(TicketTagAssociation.ticket_id == row.id)
            .order_by(TicketTagAssociation.id),
        )
        attachments_result = await session.execute(
            select(TicketAttachment)
            .where(TicketAttachment.ticket_id == row.id)
            .order_by(TicketAttachment.id),
        )
        return Ticket(
            id=row.id,
            user_id=row.user_id,
            category_id=row.category_id,
            name=row.name,
            description=row.description,
            price=row.price,
            quantity=row.quantity,
            created_at=row.created_at,
            updated_at=row.updated_at,
            tag_ids=list(tags_result.scalars().all()),
            attachments=[
                Attachment(
                    id=attachment.id,
                    ticket_id=attachment.ticket_id,
                    link=attachment.link,
                    created_at=attachment.created_at,
                    updated_at=attachment.updated_at,
                )
                for attachment in attachments_result.scalars().all()
            ],
        )
