"""API Dependencies: request-scoped access to lifespan-owned objects.

Invariants:
    - UseCases is built once in the lifespan and stored on app.state
    - Filter/pagination query params map 1:1 to TicketsFilters/Pagination fields
"""

from fastapi import Query, Request

from ticketing.core.entities import Pagination, TicketsFilters
from ticketing.services.use_cases import UseCases


def get_use_cases(request: Request) -> UseCases:
    return request.app.state.use_cases


def get_tickets_filters(
    search: str | None = Query(None, max_length=255),
    price_floor: float | None = Query(None, ge=0),
    price_ceil: float | None = Query(None, ge=0),
    quantity_floor: int | None = Query(None, ge=0),
    category_ids: list[int] | None = Query(None),
    tag_ids: list[int] | None = Query(None),
    created_at_order_by_asc: bool | None = Query(None),
) -> TicketsFilters:
    return TicketsFilters(
        search=search,
        price_floor=price_floor,
        price_ceil=price_ceil,
        quantity_floor=quantity_floor,
        category_ids=category_ids,
        tag_ids=tag_ids,
        created_at_order_by_asc=created_at_order_by_asc,
    )


def get_pagination(
    limit: int | None = Query(None, ge=1, le=1000),
    offset: int | None = Query(None, ge=0),
) -> Pagination:
    return Pagination(limit=limit, offset=offset)
