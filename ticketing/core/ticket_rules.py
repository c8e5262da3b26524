"""Ticket Rules: pure checks behind the use-case state machines.

Invariants:
    - Category/tag checks compare against the taxonomy snapshot passed in (no caching)
    - find_first_missing_tag reports the first missing id in request order
    - A duplicate ticket is an exact (name, category_id, description) match among the user's tickets
    - A duplicate respond is any respond of the master on the same ticket

Design Decisions:
    - Pure functions return values instead of raising: services decide which error to raise
      (ADR: functional core, imperative shell)
"""

from collections.abc import Iterable

from ticketing.core.entities import (
    Category, CreateTicketDTO, Respond, Tag, Ticket,
)


def category_exists(categories: Iterable[Category], category_id: int) -> bool:
    return any(category.id == category_id for category in categories)


def find_first_missing_tag(tags: Iterable[Tag], tag_ids: Iterable[int]) -> int | None:
    """Return the first requested tag id absent from the taxonomy, or None."""
    known = {tag.id for tag in tags}
    for tag_id in tag_ids:
        if tag_id not in known:
            return tag_id
    return None


def has_duplicate_ticket(tickets: Iterable[Ticket], ticket_data: CreateTicketDTO) -> bool:
    return any(
        ticket.name == ticket_data.name
        and ticket.category_id == ticket_data.category_id
        and ticket.description == ticket_data.description
        for ticket in tickets
    )


def has_duplicate_respond(responds: Iterable[Respond], ticket_id: int) -> bool:
    return any(respond.ticket_id == ticket_id for respond in responds)


def collect_master_ids(responds: Iterable[Respond]) -> list[int]:
    """Masters who responded, in respond order, without repeats."""
    return list(dict.fromkeys(respond.master_id for respond in responds))
