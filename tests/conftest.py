"""Root conftest: shared engine, session manager and repository fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enabled
    - Tables created from Base.metadata (same models the app uses)

Design Decisions:
    - SQLite in-memory via aiosqlite: fast, no external dependency
    - StaticPool: one shared connection, so every session sees the same in-memory DB
"""

import os
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

# Ensure tests never reach real infrastructure
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("TAXONOMY_BASE_URL", "http://taxonomy.test")

from ticketing.db.base import Base  # noqa: E402
import ticketing.models  # noqa: E402,F401
from ticketing.infrastructure.database import DatabaseSessionManager  # noqa: E402
from ticketing.models.ticket import Ticket as TicketModel  # noqa: E402
from ticketing.models.ticket_tag_association import TicketTagAssociation  # noqa: E402
from ticketing.repositories.responds_repository import SqlRespondsRepository  # noqa: E402
from ticketing.repositories.tickets_repository import SqlTicketsRepository  # noqa: E402

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_manager(test_engine):
    # Manager first: it installs the foreign_keys pragma before the first connect
    manager = DatabaseSessionManager(test_engine)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return manager


@pytest.fixture
def tickets_repository(db_manager):
    return SqlTicketsRepository(db_manager)


@pytest.fixture
def responds_repository(db_manager):
    return SqlRespondsRepository(db_manager)


@pytest.fixture
def seed_ticket(db_manager):
    """Insert a ticket row directly, with a controllable created_at and tag set."""

    async def _seed(
        *,
        user_id: int = 1,
        category_id: int = 1,
        name: str = "Ticket",
        description: str = "Description",
        price: float | None = None,
        quantity: int = 1,
        tag_ids: tuple[int, ...] = (),
        minutes: int = 0,
    ) -> int:
        created_at = BASE_TIME + timedelta(minutes=minutes)
        async with db_manager.transaction() as session:
            ticket = TicketModel(
                user_id=user_id, category_id=category_id, name=name,
                description=description, price=price, quantity=quantity,
                created_at=created_at, updated_at=created_at,
            )
            session.add(ticket)
            await session.flush()
            if tag_ids:
                await session.execute(
                    insert(TicketTagAssociation),
                    [{"ticket_id": ticket.id, "tag_id": tag_id} for tag_id in tag_ids],
                )
            return ticket.id

    return _seed
