"""Tickets API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TicketingError -> structured JSON responses
    - Pool, taxonomy client and publisher created in the lifespan, stored on app.state,
      and closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Object graph wired here only: repositories and UseCases receive their collaborators
      (ADR: no module-level singletons in the core)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ticketing.api.error_handlers import register_error_handlers
from ticketing.api.routes import health, responds, tickets
from ticketing.config import Settings, get_settings
from ticketing.infrastructure.database import DatabaseSessionManager
from ticketing.infrastructure.notification_publisher import RedisNotificationPublisher
from ticketing.infrastructure.observability import setup_logging
from ticketing.infrastructure.taxonomy_client import HttpTaxonomyClient
from ticketing.repositories.responds_repository import SqlRespondsRepository
from ticketing.repositories.tickets_repository import SqlTicketsRepository
from ticketing.services.notification_dispatcher import NotificationDispatcher
from ticketing.services.use_cases import UseCases

logger = logging.getLogger(__name__)


def build_use_cases(
    settings: Settings,
    db_manager: DatabaseSessionManager,
    taxonomy_client: HttpTaxonomyClient,
    publisher: RedisNotificationPublisher,
) -> UseCases:
    return UseCases(
        tickets_repository=SqlTicketsRepository(db_manager),
        responds_repository=SqlRespondsRepository(db_manager),
        taxonomy_client=taxonomy_client,
        notifications=NotificationDispatcher(
            publisher,
            update_ticket_subject=settings.notifications_update_ticket_subject,
            delete_ticket_subject=settings.notifications_delete_ticket_subject,
        ),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    db_manager = DatabaseSessionManager.from_url(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_recycle=settings.database_pool_recycle_seconds,
    )
    taxonomy_client = HttpTaxonomyClient(
        settings.taxonomy_base_url,
        max_retries=settings.taxonomy_max_retries,
        base_delay_ms=settings.taxonomy_base_delay_ms,
        max_delay_ms=settings.taxonomy_max_delay_ms,
        timeout_seconds=settings.taxonomy_timeout_seconds,
    )
    publisher = RedisNotificationPublisher(settings.redis_url)

    app.state.db_manager = db_manager
    app.state.use_cases = build_use_cases(settings, db_manager, taxonomy_client, publisher)
    logger.info("Tickets API started")
    try:
        yield
    finally:
        logger.info("Tickets API shutting down")
        await publisher.close()
        await taxonomy_client.close()
        await db_manager.dispose()


app = FastAPI(title="Tickets API", version="1.0.0", lifespan=lifespan)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(tickets.router)
app.include_router(responds.router)

register_error_handlers(app)
