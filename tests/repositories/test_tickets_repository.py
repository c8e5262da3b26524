"""Tickets Repository: transactional create/update/delete against in-memory SQLite.

Tests cover:
    - create_ticket -> get_ticket_by_id round-trip including tags and attachments
    - a failing child insert rolls back the whole aggregate (zero rows anywhere)
    - update_ticket applies scalar changes and child deltas in one step
    - price is always rewritten on update (None clears it)
    - delete_ticket cascades to tags, attachments and responds
    - missing ids raise TicketNotFoundError
"""

import pytest
from sqlalchemy import func, select

from ticketing.core.entities import CreateTicketDTO, RespondToTicketDTO, UpdateTicketDTO
from ticketing.core.errors import DatabaseError, TicketNotFoundError
from ticketing.models.respond import Respond as RespondModel
from ticketing.models.ticket import Ticket as TicketModel
from ticketing.models.ticket_attachment import TicketAttachment
from ticketing.models.ticket_tag_association import TicketTagAssociation


async def _count_rows(db_manager, model) -> int:
    async with db_manager.session() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


def _create_dto(**overrides) -> CreateTicketDTO:
    data = dict(
        user_id=1, category_id=2, name="Fix sink", description="Kitchen sink leaks",
        quantity=1, price=150.0, tag_ids=[1, 2], attachments=["a", "b"],
    )
    data.update(overrides)
    return CreateTicketDTO(**data)


# ─── Create ──────────────────────────────────────────────────────

async def test_create_then_get_returns_full_aggregate(tickets_repository):
    ticket_id = await tickets_repository.create_ticket(_create_dto())

    ticket = await tickets_repository.get_ticket_by_id(ticket_id)
    assert ticket.id == ticket_id
    assert ticket.user_id == 1
    assert ticket.category_id == 2
    assert ticket.name == "Fix sink"
    assert ticket.price == 150.0
    assert set(ticket.tag_ids) == {1, 2}
    assert {a.link for a in ticket.attachments} == {"a", "b"}
    assert all(a.ticket_id == ticket_id for a in ticket.attachments)


async def test_create_without_children(tickets_repository):
    ticket_id = await tickets_repository.create_ticket(
        _create_dto(price=None, tag_ids=[], attachments=[]),
    )
    ticket = await tickets_repository.get_ticket_by_id(ticket_id)
    assert ticket.price is None
    assert ticket.tag_ids == []
    assert ticket.attachments == []


async def test_create_collapses_duplicate_tag_ids(tickets_repository):
    ticket_id = await tickets_repository.create_ticket(_create_dto(tag_ids=[3, 3, 1]))
    ticket = await tickets_repository.get_ticket_by_id(ticket_id)
    assert sorted(ticket.tag_ids) == [1, 3]


async def test_create_assigns_increasing_ids(tickets_repository):
    first = await tickets_repository.create_ticket(_create_dto(name="one"))
    second = await tickets_repository.create_ticket(_create_dto(name="two"))
    assert second > first


async def test_failed_attachment_insert_rolls_back_everything(tickets_repository, db_manager):
    with pytest.raises(DatabaseError):
        await tickets_repository.create_ticket(_create_dto(attachments=["a", None]))

    assert await _count_rows(db_manager, TicketModel) == 0
    assert await _count_rows(db_manager, TicketTagAssociation) == 0
    assert await _count_rows(db_manager, TicketAttachment) == 0


# ─── Read ────────────────────────────────────────────────────────

async def test_get_missing_ticket_raises_not_found(tickets_repository):
    with pytest.raises(TicketNotFoundError) as exc_info:
        await tickets_repository.get_ticket_by_id(404)
    assert exc_info.value.context.ticket_id == 404


async def test_listing_attaches_children_to_each_ticket(tickets_repository):
    first = await tickets_repository.create_ticket(_create_dto(name="one", tag_ids=[1]))
    second = await tickets_repository.create_ticket(
        _create_dto(name="two", tag_ids=[2, 3], attachments=["c"]),
    )

    tickets = {t.id: t for t in await tickets_repository.get_tickets()}
    assert tickets[first].tag_ids == [1]
    assert sorted(tickets[second].tag_ids) == [2, 3]
    assert [a.link for a in tickets[second].attachments] == ["c"]


async def test_user_tickets_scoped_to_owner(tickets_repository):
    await tickets_repository.create_ticket(_create_dto(user_id=1))
    await tickets_repository.create_ticket(_create_dto(user_id=2))
    await tickets_repository.create_ticket(_create_dto(user_id=2, name="other"))

    assert len(await tickets_repository.get_user_tickets(2)) == 2
    assert await tickets_repository.count_user_tickets(2) == 2
    assert await tickets_repository.get_user_tickets(99) == []
    assert await tickets_repository.count_tickets() == 3


# ─── Update ──────────────────────────────────────────────────────

async def test_update_applies_scalars_and_child_deltas(tickets_repository):
    ticket_id = await tickets_repository.create_ticket(_create_dto())
    before = await tickets_repository.get_ticket_by_id(ticket_id)
    attachment_a = next(a for a in before.attachments if a.link == "a")

    await tickets_repository.update_ticket(UpdateTicketDTO(
        id=ticket_id,
        name="Fix tap",
        price=200.0,
        quantity=3,
        tag_ids_to_add=[3],
        tag_ids_to_delete=[1],
        attachments_to_add=["c"],
        attachment_ids_to_delete=[attachment_a.id],
    ))

    after = await tickets_repository.get_ticket_by_id(ticket_id)
    assert after.name == "Fix tap"
    assert after.description == "Kitchen sink leaks"
    assert after.category_id == 2
    assert after.price == 200.0
    assert after.quantity == 3
    assert set(after.tag_ids) == {2, 3}
    assert {a.link for a in after.attachments} == {"b", "c"}


async def test_update_keeps_untouched_attachment_rows(tickets_repository):
    ticket_id = await tickets_repository.create_ticket(_create_dto())
    before = await tickets_repository.get_ticket_by_id(ticket_id)
    attachment_b = next(a for a in before.attachments if a.link == "b")

    await tickets_repository.update_ticket(UpdateTicketDTO(
        id=ticket_id, price=150.0, attachments_to_add=["c"],
    ))

    after = await tickets_repository.get_ticket_by_id(ticket_id)
    kept = next(a for a in after.attachments if a.link == "b")
    assert kept.id == attachment_b.id


async def test_update_with_none_price_clears_it(tickets_repository):
    ticket_id = await tickets_repository.create_ticket(_create_dto(price=99.0))

    await tickets_repository.update_ticket(UpdateTicketDTO(id=ticket_id, price=None))

    ticket = await tickets_repository.get_ticket_by_id(ticket_id)
    assert ticket.price is None
    assert ticket.name == "Fix sink"


# ─── Delete ──────────────────────────────────────────────────────

async def test_delete_cascades_to_children_and_responds(
    tickets_repository, responds_repository, db_manager,
):
    ticket_id = await tickets_repository.create_ticket(_create_dto())
    await responds_repository.respond_to_ticket(
        RespondToTicketDTO(ticket_id=ticket_id, master_id=5, price=100.0),
    )

    await tickets_repository.delete_ticket(ticket_id)

    with pytest.raises(TicketNotFoundError):
        await tickets_repository.get_ticket_by_id(ticket_id)
    assert await _count_rows(db_manager, TicketTagAssociation) == 0
    assert await _count_rows(db_manager, TicketAttachment) == 0
    assert await _count_rows(db_manager, RespondModel) == 0


async def test_delete_leaves_other_tickets_alone(tickets_repository):
    doomed = await tickets_repository.create_ticket(_create_dto(name="doomed"))
    kept = await tickets_repository.create_ticket(_create_dto(name="kept"))

    await tickets_repository.delete_ticket(doomed)

    ticket = await tickets_repository.get_ticket_by_id(kept)
    assert set(ticket.tag_ids) == {1, 2}
    assert len(ticket.attachments) == 2
