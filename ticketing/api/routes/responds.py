"""Respond Routes: HTTP mapping of the respond use cases.

Invariants:
    - Responding is user-scoped; the master id is resolved by UseCases, never trusted from input
    - List endpoints return [] instead of 404 when nothing matches
"""

from fastapi import APIRouter, Depends, status

from ticketing.api.dependencies import get_use_cases
from ticketing.core.entities import RawRespondToTicketDTO, UpdateRespondDTO
from ticketing.schemas.responds import (
    RespondCreate, RespondCreated, RespondResponse, RespondUpdate,
)
from ticketing.services.use_cases import UseCases

router = APIRouter(prefix="/api/v1", tags=["responds"])


@router.post(
    "/tickets/{ticket_id}/responds",
    response_model=RespondCreated,
    status_code=status.HTTP_201_CREATED,
)
async def respond_to_ticket(
    ticket_id: int, body: RespondCreate, use_cases: UseCases = Depends(get_use_cases),
):
    respond_id = await use_cases.respond_to_ticket(
        RawRespondToTicketDTO(
            ticket_id=ticket_id,
            user_id=body.user_id,
            price=body.price,
            comment=body.comment,
        ),
    )
    return RespondCreated(respond_id=respond_id)


@router.get("/tickets/{ticket_id}/responds", response_model=list[RespondResponse])
async def get_ticket_responds(ticket_id: int, use_cases: UseCases = Depends(get_use_cases)):
    responds = await use_cases.get_ticket_responds(ticket_id)
    return [RespondResponse.model_validate(respond) for respond in responds]


@router.get("/users/{user_id}/responds", response_model=list[RespondResponse])
async def get_user_responds(user_id: int, use_cases: UseCases = Depends(get_use_cases)):
    responds = await use_cases.get_user_responds(user_id)
    return [RespondResponse.model_validate(respond) for respond in responds]


@router.get("/masters/{master_id}/responds", response_model=list[RespondResponse])
async def get_master_responds(master_id: int, use_cases: UseCases = Depends(get_use_cases)):
    responds = await use_cases.get_master_responds(master_id)
    return [RespondResponse.model_validate(respond) for respond in responds]


@router.get("/responds/{respond_id}", response_model=RespondResponse)
async def get_respond(respond_id: int, use_cases: UseCases = Depends(get_use_cases)):
    return RespondResponse.model_validate(await use_cases.get_respond_by_id(respond_id))


@router.patch("/responds/{respond_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_respond(
    respond_id: int, body: RespondUpdate, use_cases: UseCases = Depends(get_use_cases),
):
    await use_cases.update_respond(
        UpdateRespondDTO(id=respond_id, price=body.price, comment=body.comment),
    )


@router.delete("/responds/{respond_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_respond(respond_id: int, use_cases: UseCases = Depends(get_use_cases)):
    await use_cases.delete_respond(respond_id)
