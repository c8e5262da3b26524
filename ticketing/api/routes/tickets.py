"""Ticket Routes: HTTP mapping of the ticket use cases.

Invariants:
    - Routes only translate between schemas and core DTOs; rules live in UseCases
    - List and count endpoints accept the same filter query params
    - Errors surface through the global TicketingError handler
"""

from fastapi import APIRouter, Depends, status

from ticketing.api.dependencies import get_pagination, get_tickets_filters, get_use_cases
from ticketing.core.entities import (
    CreateTicketDTO, Pagination, RawUpdateTicketDTO, TicketsFilters,
)
from ticketing.schemas.tickets import (
    TicketCreate, TicketCreated, TicketResponse, TicketsCount, TicketUpdate,
)
from ticketing.services.use_cases import UseCases

router = APIRouter(prefix="/api/v1", tags=["tickets"])


@router.post(
    "/tickets", response_model=TicketCreated, status_code=status.HTTP_201_CREATED,
)
async def create_ticket(
    body: TicketCreate, use_cases: UseCases = Depends(get_use_cases),
):
    ticket_id = await use_cases.create_ticket(
        CreateTicketDTO(
            user_id=body.user_id,
            category_id=body.category_id,
            name=body.name,
            description=body.description,
            price=body.price,
            quantity=body.quantity,
            tag_ids=body.tag_ids,
            attachments=body.attachments,
        ),
    )
    return TicketCreated(ticket_id=ticket_id)


@router.get("/tickets", response_model=list[TicketResponse])
async def get_tickets(
    pagination: Pagination = Depends(get_pagination),
    filters: TicketsFilters = Depends(get_tickets_filters),
    use_cases: UseCases = Depends(get_use_cases),
):
    tickets = await use_cases.get_tickets(pagination, filters)
    return [TicketResponse.model_validate(ticket) for ticket in tickets]


@router.get("/tickets/count", response_model=TicketsCount)
async def count_tickets(
    filters: TicketsFilters = Depends(get_tickets_filters),
    use_cases: UseCases = Depends(get_use_cases),
):
    return TicketsCount(count=await use_cases.count_tickets(filters))


@router.get("/tickets/{ticket_id}", response_model=TicketResponse)
async def get_ticket(ticket_id: int, use_cases: UseCases = Depends(get_use_cases)):
    return TicketResponse.model_validate(await use_cases.get_ticket_by_id(ticket_id))


@router.patch("/tickets/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_ticket(
    ticket_id: int, body: TicketUpdate, use_cases: UseCases = Depends(get_use_cases),
):
    await use_cases.update_ticket(
        RawUpdateTicketDTO(
            id=ticket_id,
            category_id=body.category_id,
            name=body.name,
            description=body.description,
            price=body.price,
            quantity=body.quantity,
            tag_ids=body.tag_ids,
            attachments=body.attachments,
        ),
    )


@router.delete("/tickets/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ticket(ticket_id: int, use_cases: UseCases = Depends(get_use_cases)):
    await use_cases.delete_ticket(ticket_id)


@router.get("/users/{user_id}/tickets", response_model=list[TicketResponse])
async def get_user_tickets(
    user_id: int,
    pagination: Pagination = Depends(get_pagination),
    filters: TicketsFilters = Depends(get_tickets_filters),
    use_cases: UseCases = Depends(get_use_cases),
):
    tickets = await use_cases.get_user_tickets(user_id, pagination, filters)
    return [TicketResponse.model_validate(ticket) for ticket in tickets]


@router.get("/users/{user_id}/tickets/count", response_model=TicketsCount)
async def count_user_tickets(
    user_id: int,
    filters: TicketsFilters = Depends(get_tickets_filters),
    use_cases: UseCases = Depends(get_use_cases),
):
    return TicketsCount(count=await use_cases.count_user_tickets(user_id, filters))
