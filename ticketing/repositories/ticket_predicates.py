"""Ticket Query Predicates: filters and pagination turned into SQLAlchemy clauses.

Invariants:
    - select_tickets() and count_tickets() share build_ticket_conditions(): a filter
      combination never lists more or fewer rows than it counts
    - Conditions are conjunctive; absent/empty filter fields add nothing
    - Tag filter requires EVERY requested tag (one EXISTS per tag), not any of them
    - Ordering is by created_at, descending unless created_at_order_by_asc is True
    - Count queries carry no ordering, LIMIT or OFFSET

Design Decisions:
    - Pure statement builders: no session, no IO (ADR: testable by compiling the statement)
    - id used as a secondary sort key in the same direction: stable pages when timestamps tie
"""

from sqlalchemy import ColumnElement, Select, exists, func, or_, select

from ticketing.core.entities import Pagination, TicketsFilters
from ticketing.models.ticket import Ticket
from ticketing.models.ticket_tag_association import TicketTagAssociation


def build_ticket_conditions(
    filters: TicketsFilters | None = None, user_id: int | None = None,
) -> list[ColumnElement[bool]]:
    """Translate optional filters (and an optional owner scope) into WHERE clauses."""
    conditions: list[ColumnElement[bool]] = []
    if user_id is not None:
        conditions.append(Ticket.user_id == user_id)
    if filters is None:
        return conditions

    if filters.search:
        pattern = f"%{filters.search}%"
        conditions.append(
            or_(Ticket.name.ilike(pattern), Ticket.description.ilike(pattern)),
        )
    if filters.price_floor is not None:
        conditions.append(Ticket.price >= filters.price_floor)
    if filters.price_ceil is not None:
        conditions.append(Ticket.price <= filters.price_ceil)
    if filters.quantity_floor is not None:
        conditions.append(Ticket.quantity >= filters.quantity_floor)
    if filters.category_ids:
        conditions.append(Ticket.category_id.in_(filters.category_ids))
    if filters.tag_ids:
        for tag_id in dict.fromkeys(filters.tag_ids):
            conditions.append(
                exists().where(
                    TicketTagAssociation.ticket_id == Ticket.id,
                    TicketTagAssociation.tag_id == tag_id,
                ),
            )
    return conditions


def is_ascending(filters: TicketsFilters | None) -> bool:
    return bool(filters and filters.created_at_order_by_asc)


def apply_pagination(query: Select, pagination: Pagination | None) -> Select:
    if pagination is None:
        return query
    if pagination.limit is not None:
        query = query.limit(pagination.limit)
    if pagination.offset is not None:
        query = query.offset(pagination.offset)
    return query


def select_tickets(
    filters: TicketsFilters | None = None,
    pagination: Pagination | None = None,
    user_id: int | None = None,
) -> Select:
    """Row-selecting statement: conditions, created_at ordering, then pagination."""
    query = select(Ticket).where(*build_ticket_conditions(filters, user_id))
    if is_ascending(filters):
        query = query.order_by(Ticket.created_at.asc(), Ticket.id.asc())
    else:
        query = query.order_by(Ticket.created_at.desc(), Ticket.id.desc())
    return apply_pagination(query, pagination)


def count_tickets(
    filters: TicketsFilters | None = None, user_id: int | None = None,
) -> Select:
    """Row-counting statement with the exact conditions of select_tickets()."""
    return (
        select(func.count())
        .select_from(Ticket)
        .where(*build_ticket_conditions(filters, user_id))
    )
