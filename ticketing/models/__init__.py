"""ORM Models: SQLAlchemy declarative models for tickets and responds.

Invariants:
    - All models inherit from Base (db/base.py)
    - Ticket is the aggregate root for tag associations and attachments

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from ticketing.models.ticket import Ticket  # noqa: F401
from ticketing.models.ticket_tag_association import TicketTagAssociation  # noqa: F401
from ticketing.models.ticket_attachment import TicketAttachment  # noqa: F401
from ticketing.models.respond import Respond  # noqa: F401
