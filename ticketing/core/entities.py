"""Domain Entities: tickets, responds, taxonomy values and the DTOs passed between layers.

Invariants:
    - Entities are plain dataclasses: no ORM, no IO
    - Ticket.tag_ids holds unique ids; Ticket.attachments keeps insertion order
    - Raw* DTOs carry what the caller sent; the matching non-raw DTOs carry what the store writes

Design Decisions:
    - NewType ids over bare int: zero runtime cost, type-checker support
    - TicketsFilters/Pagination are value objects with no identity (ADR: query shaping only)
    - Empty strings/collections in filters are treated as absent by the predicate builder
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TicketId = NewType("TicketId", int)
RespondId = NewType("RespondId", int)
AttachmentId = NewType("AttachmentId", int)
UserId = NewType("UserId", int)
MasterId = NewType("MasterId", int)
CategoryId = NewType("CategoryId", int)
TagId = NewType("TagId", int)


# ─── Taxonomy (borrowed from the taxonomy service) ───────────────

@dataclass(frozen=True)
class Category:
    id: CategoryId
    name: str


@dataclass(frozen=True)
class Tag:
    id: TagId
    name: str


@dataclass(frozen=True)
class Master:
    id: MasterId
    user_id: UserId
    info: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ─── Tickets ─────────────────────────────────────────────────────

@dataclass
class Attachment:
    id: AttachmentId
    ticket_id: TicketId
    link: str
    created_at: datetime
    updated_at: datetime


@dataclass
class Ticket:
    id: TicketId
    user_id: UserId
    category_id: CategoryId
    name: str
    description: str
    price: float | None
    quantity: int
    created_at: datetime
    updated_at: datetime
    tag_ids: list[TagId] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)


@dataclass
class CreateTicketDTO:
    user_id: UserId
    category_id: CategoryId
    name: str
    description: str
    quantity: int
    price: float | None = None
    tag_ids: list[TagId] = field(default_factory=list)
    attachments: list[str] = field(default_factory=list)


@dataclass
class RawUpdateTicketDTO:
    """Desired ticket state as sent by the caller.

    None on category/name/description/quantity means "leave unchanged".
    price is always written, so None clears it. tag_ids and attachments are
    the full desired collections.
    """
    id: TicketId
    category_id: CategoryId | None = None
    name: str | None = None
    description: str | None = None
    price: float | None = None
    quantity: int | None = None
    tag_ids: list[TagId] = field(default_factory=list)
    attachments: list[str] = field(default_factory=list)


@dataclass
class UpdateTicketDTO:
    """Scalar changes plus the child-collection deltas handed to the store."""
    id: TicketId
    category_id: CategoryId | None = None
    name: str | None = None
    description: str | None = None
    price: float | None = None
    quantity: int | None = None
    tag_ids_to_add: list[TagId] = field(default_factory=list)
    tag_ids_to_delete: list[TagId] = field(default_factory=list)
    attachments_to_add: list[str] = field(default_factory=list)
    attachment_ids_to_delete: list[AttachmentId] = field(default_factory=list)


# ─── Responds ────────────────────────────────────────────────────

@dataclass
class Respond:
    id: RespondId
    ticket_id: TicketId
    master_id: MasterId
    price: float
    comment: str | None
    created_at: datetime
    updated_at: datetime


@dataclass
class RawRespondToTicketDTO:
    ticket_id: TicketId
    user_id: UserId
    price: float
    comment: str | None = None


@dataclass
class RespondToTicketDTO:
    ticket_id: TicketId
    master_id: MasterId
    price: float
    comment: str | None = None


@dataclass
class UpdateRespondDTO:
    """price None means unchanged; comment is always written."""
    id: RespondId
    price: float | None = None
    comment: str | None = None


# ─── Query shaping ───────────────────────────────────────────────

@dataclass
class TicketsFilters:
    search: str | None = None
    price_floor: float | None = None
    price_ceil: float | None = None
    quantity_floor: int | None = None
    category_ids: list[CategoryId] | None = None
    tag_ids: list[TagId] | None = None
    created_at_order_by_asc: bool | None = None


@dataclass
class Pagination:
    limit: int | None = None
    offset: int | None = None
