"""Create site_config and content tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the settings store and the seven orderable content tables.
How:   Every content table shares id / "order" / created_at plus a
       visibility flag (is_active, or is_published for articles).
       site_config.value is JSONB on PostgreSQL.

Rollback: downgrade() drops every table (destructive — all content lost).
"""

from typing import List, Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CONTENT_TABLES = (
    "testimonials",
    "faq_items",
    "services",
    "photo_carousel",
    "specialties",
    "custom_codes",
    "articles",
)


def _ordered_columns() -> List[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "order",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
            comment="Display position; ascending, ties broken by id",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def _is_active() -> sa.Column:
    return sa.Column(
        "is_active",
        sa.Boolean(),
        nullable=False,
        server_default=sa.text("true"),
        comment="Public visibility; inactive rows are admin-only",
    )


def _flag(name: str, default: str) -> sa.Column:
    return sa.Column(name, sa.Boolean(), nullable=False, server_default=sa.text(default))


def upgrade() -> None:
    op.create_table(
        "site_config",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("key", sa.String(100), nullable=False, comment="Setting name, e.g. hero_image, section_colors"),
        sa.Column(
            "value",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
            comment="Arbitrary JSON owned by the form that edits this key",
        ),
        sa.Column(
            "version",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("1"),
            comment="Incremented on every write; optimistic concurrency token",
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("key"),
    )

    op.create_table(
        "testimonials",
        *_ordered_columns(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("service", sa.Text(), nullable=False, comment="Service the client attended"),
        sa.Column("testimonial", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False, server_default=sa.text("5")),
        sa.Column("photo", sa.Text(), nullable=True),
        _is_active(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "faq_items",
        *_ordered_columns(),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        _is_active(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "services",
        *_ordered_columns(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("icon", sa.Text(), nullable=False, comment="Icon name from the admin icon picker"),
        sa.Column("gradient", sa.Text(), nullable=False, comment="Card gradient classes"),
        sa.Column("price", sa.Text(), nullable=True),
        sa.Column("duration", sa.Text(), nullable=True),
        _flag("show_price", "false"),
        _flag("show_duration", "false"),
        _is_active(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "photo_carousel",
        *_ordered_columns(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=False),
        _flag("show_text", "true"),
        _is_active(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "specialties",
        *_ordered_columns(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("icon", sa.Text(), nullable=False, server_default=sa.text("'Brain'")),
        sa.Column("icon_color", sa.Text(), nullable=False, server_default=sa.text("'#ec4899'")),
        _is_active(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "custom_codes",
        *_ordered_columns(),
        sa.Column("name", sa.Text(), nullable=False, comment="Descriptive label"),
        sa.Column("code", sa.Text(), nullable=False),
        sa.Column("location", sa.String(20), nullable=False, comment="'header' or 'body'"),
        _is_active(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "articles",
        *_ordered_columns(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("subtitle", sa.Text(), nullable=True),
        sa.Column("badge", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, comment="Full article body (HTML)"),
        sa.Column("card_image", sa.Text(), nullable=True),
        sa.Column("author", sa.Text(), nullable=False),
        sa.Column("co_authors", sa.Text(), nullable=True, comment="Comma-separated"),
        sa.Column("institution", sa.Text(), nullable=True),
        sa.Column("article_references", sa.Text(), nullable=True),
        sa.Column("doi", sa.Text(), nullable=True),
        sa.Column("keywords", sa.Text(), nullable=True, comment="Comma-separated"),
        sa.Column("category", sa.Text(), nullable=False, server_default=sa.text("'Psicologia'")),
        sa.Column("reading_time", sa.Integer(), nullable=True, comment="Minutes"),
        _flag("show_contact_button", "false"),
        sa.Column("contact_button_text", sa.Text(), nullable=True),
        sa.Column("contact_button_url", sa.Text(), nullable=True),
        sa.Column(
            "is_published",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
            comment="Public visibility gate; drafts are admin-only",
        ),
        _flag("is_featured", "false"),
        sa.Column(
            "published_at",
            sa.TIMESTAMP(timezone=True),
            nullable=True,
            comment="First time the article was published; never cleared",
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """
    Drop every table.

    WARNING: destructive. Ship a forward migration that archives data
    instead of running this against production.
    """
    for table in reversed(CONTENT_TABLES):
        op.drop_table(table)
    op.drop_table("site_config")
