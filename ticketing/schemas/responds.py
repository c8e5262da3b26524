"""Respond Schemas: request/response models for the respond endpoints.

Invariants:
    - RespondCreate.user_id is the responding user; the master is resolved server-side
    - RespondUpdate.comment is always applied (omitting it clears the comment)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RespondCreate(BaseModel):
    user_id: int = Field(ge=1)
    price: float = Field(ge=0)
    comment: str | None = Field(None, max_length=2000)


class RespondUpdate(BaseModel):
    price: float | None = Field(None, ge=0)
    comment: str | None = Field(None, max_length=2000)


class RespondCreated(BaseModel):
    respond_id: int


class RespondResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    ticket_id: int
    master_id: int
    price: float
    comment: str | None
    created_at: datetime
    updated_at: datetime
