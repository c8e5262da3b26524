"""API Routes: HTTP status codes, payload shapes and the error envelope.

Tests cover:
    - ticket create/read/update/delete through HTTP, count endpoints
    - respond endpoints with server-side master resolution
    - domain errors -> envelope with code and matching HTTP status
    - request validation -> 400 VALIDATION_ERROR
    - health and readiness probes
"""

import httpx
import pytest

from tests.fakes import FakePublisher, FakeTaxonomyClient
from ticketing.main import app
from ticketing.services.notification_dispatcher import NotificationDispatcher
from ticketing.services.use_cases import UseCases

MASTER_USER = 20
MASTER_ID = 200


@pytest.fixture
def publisher():
    return FakePublisher()


@pytest.fixture
async def client(db_manager, tickets_repository, responds_repository, publisher):
    app.state.db_manager = db_manager
    app.state.use_cases = UseCases(
        tickets_repository=tickets_repository,
        responds_repository=responds_repository,
        taxonomy_client=FakeTaxonomyClient(masters={MASTER_USER: MASTER_ID}),
        notifications=NotificationDispatcher(publisher, "tickets.updated", "tickets.deleted"),
    )
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    del app.state.use_cases
    del app.state.db_manager


def _ticket_body(**overrides) -> dict:
    body = {
        "user_id": 1, "category_id": 1, "name": "Fix sink", "description": "Kitchen leak",
        "price": 100.0, "quantity": 1, "tag_ids": [1, 2], "attachments": ["a"],
    }
    body.update(overrides)
    return body


async def _create(client, **overrides) -> int:
    response = await client.post("/api/v1/tickets", json=_ticket_body(**overrides))
    assert response.status_code == 201
    return response.json()["ticket_id"]


# ─── Tickets ─────────────────────────────────────────────────────

async def test_create_and_get_ticket(client):
    ticket_id = await _create(client)

    response = await client.get(f"/api/v1/tickets/{ticket_id}")
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == ticket_id
    assert body["name"] == "Fix sink"
    assert sorted(body["tag_ids"]) == [1, 2]
    assert [a["link"] for a in body["attachments"]] == ["a"]


async def test_create_strips_name(client):
    ticket_id = await _create(client, name="  Fix sink  ")
    response = await client.get(f"/api/v1/tickets/{ticket_id}")
    assert response.json()["name"] == "Fix sink"


async def test_list_and_count_share_filters(client):
    await _create(client, name="Sink", tag_ids=[1, 2])
    await _create(client, name="Door", tag_ids=[1])
    await _create(client, name="Shelf", user_id=2, tag_ids=[2])

    response = await client.get("/api/v1/tickets", params={"tag_ids": [1, 2]})
    assert [t["name"] for t in response.json()] == ["Sink"]

    response = await client.get("/api/v1/tickets/count", params={"tag_ids": [1]})
    assert response.json() == {"count": 2}

    response = await client.get("/api/v1/users/2/tickets")
    assert [t["name"] for t in response.json()] == ["Shelf"]

    response = await client.get("/api/v1/users/1/tickets/count", params={"search": "door"})
    assert response.json() == {"count": 1}


async def test_list_pagination(client):
    for name in ("one", "two", "three"):
        await _create(client, name=name)

    response = await client.get("/api/v1/tickets", params={"limit": 2})
    assert len(response.json()) == 2

    response = await client.get("/api/v1/tickets", params={"limit": 0})
    assert response.status_code == 400


async def test_update_ticket(client, publisher):
    ticket_id = await _create(client)

    response = await client.patch(
        f"/api/v1/tickets/{ticket_id}",
        json={"name": "Fix tap", "tag_ids": [3], "attachments": ["b"]},
    )
    assert response.status_code == 204

    body = (await client.get(f"/api/v1/tickets/{ticket_id}")).json()
    assert body["name"] == "Fix tap"
    assert body["price"] is None
    assert body["tag_ids"] == [3]
    assert [a["link"] for a in body["attachments"]] == ["b"]
    assert publisher.published[0][0] == "tickets.updated"


async def test_update_with_blank_name_is_400(client):
    ticket_id = await _create(client)

    response = await client.patch(
        f"/api/v1/tickets/{ticket_id}", json={"name": "   ", "price": 1.0},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    body = (await client.get(f"/api/v1/tickets/{ticket_id}")).json()
    assert body["name"] == "Fix sink"
    assert body["price"] == 100.0


async def test_update_strips_description(client):
    ticket_id = await _create(client)

    response = await client.patch(
        f"/api/v1/tickets/{ticket_id}", json={"description": "  Bathroom leak  "},
    )
    assert response.status_code == 204
    body = (await client.get(f"/api/v1/tickets/{ticket_id}")).json()
    assert body["description"] == "Bathroom leak"


async def test_delete_ticket(client):
    ticket_id = await _create(client)

    response = await client.delete(f"/api/v1/tickets/{ticket_id}")
    assert response.status_code == 204

    response = await client.get(f"/api/v1/tickets/{ticket_id}")
    assert response.status_code == 404


# ─── Errors ──────────────────────────────────────────────────────

async def test_missing_ticket_envelope(client):
    response = await client.get("/api/v1/tickets/404")
    assert response.status_code == 404
    error = response.json()["error"]
    assert error["code"] == "TICKET_NOT_FOUND"
    assert error["context"]["ticket_id"] == 404


async def test_unknown_category_is_404(client):
    response = await client.post("/api/v1/tickets", json=_ticket_body(category_id=99))
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "category with ID=99 not found"


async def test_duplicate_ticket_is_409(client):
    await _create(client)
    response = await client.post("/api/v1/tickets", json=_ticket_body())
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "TICKET_ALREADY_EXISTS"


async def test_invalid_body_is_400(client):
    response = await client.post("/api/v1/tickets", json=_ticket_body(quantity=0, name="   "))
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    fields = {detail["field"] for detail in error["details"]}
    assert "body.quantity" in fields


# ─── Responds ────────────────────────────────────────────────────

async def test_respond_flow(client):
    ticket_id = await _create(client)

    response = await client.post(
        f"/api/v1/tickets/{ticket_id}/responds",
        json={"user_id": MASTER_USER, "price": 90.0, "comment": "tomorrow"},
    )
    assert response.status_code == 201
    respond_id = response.json()["respond_id"]

    respond = (await client.get(f"/api/v1/responds/{respond_id}")).json()
    assert respond["master_id"] == MASTER_ID

    listed = (await client.get(f"/api/v1/users/{MASTER_USER}/responds")).json()
    assert [r["id"] for r in listed] == [respond_id]
    listed = (await client.get(f"/api/v1/masters/{MASTER_ID}/responds")).json()
    assert [r["id"] for r in listed] == [respond_id]

    response = await client.patch(f"/api/v1/responds/{respond_id}", json={"price": 80.0})
    assert response.status_code == 204
    respond = (await client.get(f"/api/v1/responds/{respond_id}")).json()
    assert respond["price"] == 80.0
    assert respond["comment"] is None

    response = await client.delete(f"/api/v1/responds/{respond_id}")
    assert response.status_code == 204
    assert (await client.get(f"/api/v1/tickets/{ticket_id}/responds")).json() == []


async def test_respond_to_own_ticket_is_400(client):
    ticket_id = await _create(client)
    response = await client.post(
        f"/api/v1/tickets/{ticket_id}/responds", json={"user_id": 1, "price": 1.0},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "RESPOND_TO_OWN_TICKET"


async def test_respond_by_unknown_master_is_404(client):
    ticket_id = await _create(client)
    response = await client.post(
        f"/api/v1/tickets/{ticket_id}/responds", json={"user_id": 77, "price": 1.0},
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "MASTER_NOT_FOUND"


async def test_duplicate_respond_is_409(client):
    ticket_id = await _create(client)
    body = {"user_id": MASTER_USER, "price": 1.0}
    await client.post(f"/api/v1/tickets/{ticket_id}/responds", json=body)
    response = await client.post(f"/api/v1/tickets/{ticket_id}/responds", json=body)
    assert response.status_code == 409


# ─── Health ──────────────────────────────────────────────────────

async def test_health_probes(client):
    assert (await client.get("/api/v1/health/")).status_code == 200
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "healthy"
