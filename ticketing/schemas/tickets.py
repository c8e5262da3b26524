"""Ticket Schemas: request/response models for the ticket endpoints.

Invariants:
    - name/description stripped and non-empty; quantity >= 1; price >= 0 when present
    - TicketUpdate.tag_ids / attachments are the FULL desired collections
    - TicketUpdate.price is always applied: omitting it clears the stored price

Design Decisions:
    - from_attributes on responses: built straight from core entities (dataclasses)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TicketCreate(BaseModel):
    """Ticket creation: owner, taxonomy references, shape and children."""
    user_id: int = Field(ge=1)
    category_id: int = Field(ge=1)
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=10_000)
    price: float | None = Field(None, ge=0)
    quantity: int = Field(ge=1)
    tag_ids: list[int] = Field(default_factory=list)
    attachments: list[str] = Field(default_factory=list)

    @field_validator("name", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class TicketUpdate(BaseModel):
    """Ticket update: None scalars stay unchanged, except price which is always written."""
    category_id: int | None = Field(None, ge=1)
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1, max_length=10_000)
    price: float | None = Field(None, ge=0)
    quantity: int | None = Field(None, ge=1)
    tag_ids: list[int] = Field(default_factory=list)
    attachments: list[str] = Field(default_factory=list)

    @field_validator("name", "description")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class TicketCreated(BaseModel):
    ticket_id: int


class AttachmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    ticket_id: int
    link: str
    created_at: datetime
    updated_at: datetime


class TicketResponse(BaseModel):
    """Ticket with its tag ids and attachments."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    category_id: int
    name: str
    description: str
    price: float | None
    quantity: int
    created_at: datetime
    updated_at: datetime
    tag_ids: list[int]
    attachments: list[AttachmentResponse]


class TicketsCount(BaseModel):
    count: int
