"""Responds Repository: persistence of masters' offers against tickets.

Invariants:
    - get_respond_by_id raises RespondNotFoundError for a missing row
    - get_ticket_responds / get_master_responds return [] when nothing matches
    - update_respond always rewrites comment (None clears it); price only when supplied
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select, update

from ticketing.core.entities import Respond, RespondToTicketDTO, UpdateRespondDTO
from ticketing.core.errors import RespondNotFoundError
from ticketing.infrastructure.database import DatabaseSessionManager
from ticketing.models.respond import Respond as RespondModel

logger = logging.getLogger(__name__)


def _to_entity(row: RespondModel) -> Respond:
    return Respond(
        id=row.id,
        ticket_id=row.ticket_id,
        master_id=row.master_id,
        price=row.price,
        comment=row.comment,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlRespondsRepository:
    """SQL implementation of core.repository_protocols.RespondsRepository."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def respond_to_ticket(self, respond_data: RespondToTicketDTO) -> int:
        async with self.db.transaction() as session:
            respond = RespondModel(
                ticket_id=respond_data.ticket_id,
                master_id=respond_data.master_id,
                price=respond_data.price,
                comment=respond_data.comment,
            )
            session.add(respond)
            await session.flush()
            respond_id = respond.id

        logger.info(
            f"Respond {respond_id} created for ticket {respond_data.ticket_id}",
            extra={
                "respond_id": respond_id,
                "ticket_id": respond_data.ticket_id,
                "master_id": respond_data.master_id,
            },
        )
        return respond_id

    async def get_respond_by_id(self, respond_id: int) -> Respond:
        async with self.db.session() as session:
            result = await session.execute(
                select(RespondModel).where(RespondModel.id == respond_id),
            )
            row = result.scalar_one_or_none()
            if row is None:
                raise RespondNotFoundError(respond_id)
            return _to_entity(row)

    async def get_ticket_responds(self, ticket_id: int) -> list[Respond]:
        async with self.db.session() as session:
            result = await session.execute(
                select(RespondModel)
                .where(RespondModel.ticket_id == ticket_id)
                .order_by(RespondModel.id),
            )
            return [_to_entity(row) for row in result.scalars().all()]

    async def get_master_responds(self, master_id: int) -> list[Respond]:
        async with self.db.session() as session:
            result = await session.execute(
                select(RespondModel)
                .where(RespondModel.master_id == master_id)
                .order_by(RespondModel.id),
            )
            return [_to_entity(row) for row in result.scalars().all()]

    async def update_respond(self, respond_data: UpdateRespondDTO) -> None:
        values: dict = {
            "comment": respond_data.comment,
            "updated_at": datetime.now(timezone.utc),
        }
        if respond_data.price is not None:
            values["price"] = respond_data.price

        async with self.db.transaction() as session:
            await session.execute(
                update(RespondModel)
                .where(RespondModel.id == respond_data.id)
                .values(**values),
            )
        logger.info(
            f"Respond {respond_data.id} updated", extra={"respond_id": respond_data.id},
        )

    async def delete_respond(self, respond_id: int) -> None:
        async with self.db.transaction() as session:
            await session.execute(
                delete(RespondModel).where(RespondModel.id == respond_id),
            )
        logger.info(f"Respond {respond_id} deleted", extra={"respond_id": respond_id})
