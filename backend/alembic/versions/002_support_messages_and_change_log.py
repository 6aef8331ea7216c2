"""Add support_messages and admin_change_log

Revision ID: 002
Revises: 001
Create Date: 2024-02-01 00:00:00.000000+00:00

What:  The admin-to-maintainer inbox and the persistent admin change log.
Rollback: downgrade() drops both tables (messages and history are lost).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "support_messages",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column(
            "type",
            sa.String(length=20),
            nullable=False,
            server_default=sa.text("'support'"),
            comment="support, contact, feedback, bug or feature",
        ),
        sa.Column(
            "attachments",
            sa.JSON(),
            nullable=False,
            server_default=sa.text("'[]'"),
            comment="Image URLs attached to the message",
        ),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("admin_response", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "responded_at",
            sa.TIMESTAMP(timezone=True),
            nullable=True,
            comment="Set when an admin_response is saved",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_support_messages_created_at", "support_messages", ["created_at"])

    op.create_table(
        "admin_change_log",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column("month", sa.String(length=7), nullable=False),
        sa.Column("action", sa.String(length=20), nullable=False),
        sa.Column("resource", sa.String(length=100), nullable=False),
        sa.Column("identifier", sa.String(length=100), nullable=True),
        sa.Column("request_id", sa.String(length=64), nullable=True),
        sa.Column("client_ip", sa.String(length=64), nullable=True),
        sa.Column("changes", sa.JSON(), nullable=True),
        sa.Column("old_value", sa.JSON(), nullable=True),
        sa.Column("new_value", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_admin_change_log_month", "admin_change_log", ["month"])


def downgrade() -> None:
    op.drop_index("ix_admin_change_log_month", table_name="admin_change_log")
    op.drop_table("admin_change_log")
    op.drop_index("ix_support_messages_created_at", table_name="support_messages")
    op.drop_table("support_messages")
