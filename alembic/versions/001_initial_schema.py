"""Initial schema: tickets, tag associations, attachments, responds.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

Child tables reference tickets.id with ON DELETE CASCADE, so deleting a
ticket removes its associations, attachments and responds.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "tickets",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.BigInteger, nullable=False),
        sa.Column("category_id", sa.Integer, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("price", sa.Float, nullable=True),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_tickets_user_id", "tickets", ["user_id"])
    op.create_index("ix_tickets_category_id", "tickets", ["category_id"])

    op.create_table(
        "tickets_tags_associations",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column(
            "ticket_id", sa.BigInteger,
            sa.ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("tag_id", sa.Integer, nullable=False),
    )
    op.create_index(
        "ix_tickets_tags_associations_ticket_tag",
        "tickets_tags_associations", ["ticket_id", "tag_id"],
    )

    op.create_table(
        "tickets_attachments",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column(
            "ticket_id", sa.BigInteger,
            sa.ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("link", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_tickets_attachments_ticket_id", "tickets_attachments", ["ticket_id"])

    op.create_table(
        "responds",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column(
            "ticket_id", sa.BigInteger,
            sa.ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("master_id", sa.BigInteger, nullable=False),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("comment", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_responds_ticket_id", "responds", ["ticket_id"])
    op.create_index("ix_responds_master_id", "responds", ["master_id"])


def downgrade() -> None:
    op.drop_table("responds")
    op.drop_table("tickets_attachments")
    op.drop_table("tickets_tags_associations")
    op.drop_table("tickets")
