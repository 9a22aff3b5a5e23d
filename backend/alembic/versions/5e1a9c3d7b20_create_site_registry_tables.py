"""create site registry tables

Revision ID: 5e1a9c3d7b20
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "5e1a9c3d7b20"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "sites",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("group", sa.String(), nullable=True),
        sa.Column("main_url", sa.String(), nullable=False),
        sa.Column("timezone", sa.String(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_sites_deleted_main_url", "sites", ["deleted", "main_url"], unique=False)
    op.create_index("ix_sites_group", "sites", ["group"], unique=False)
    op.create_index("ix_sites_timezone", "sites", ["timezone"], unique=False)

    op.create_table(
        "site_urls",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "site_id",
            sa.Integer(),
            sa.ForeignKey("sites.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("url", sa.String(), nullable=False),
    )
    op.create_index("ix_site_urls_site_id", "site_urls", ["site_id"], unique=False)
    op.create_index("ix_site_urls_url", "site_urls", ["url"], unique=False)

    op.create_table(
        "site_access",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("login", sa.String(), nullable=False),
        sa.Column("site_id", sa.Integer(), nullable=False),
        sa.Column("access", sa.String(length=5), nullable=False),
        sa.UniqueConstraint("login", "site_id", name="uq_site_access_login_site"),
    )
    op.create_index("ix_site_access_login", "site_access", ["login"], unique=False)
    op.create_index("ix_site_access_site_id", "site_access", ["site_id"], unique=False)

    op.create_table(
        "log_visit",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("site_id", sa.Integer(), nullable=False),
        sa.Column("visit_last_action_time", sa.DateTime(), nullable=False),
    )
    op.create_index(
        "ix_log_visit_site_last_action",
        "log_visit",
        ["site_id", "visit_last_action_time"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_log_visit_site_last_action", table_name="log_visit")
    op.drop_table("log_visit")
    op.drop_index("ix_site_access_site_id", table_name="site_access")
    op.drop_index("ix_site_access_login", table_name="site_access")
    op.drop_table("site_access")
    op.drop_index("ix_site_urls_url", table_name="site_urls")
    op.drop_index("ix_site_urls_site_id", table_name="site_urls")
    op.drop_table("site_urls")
    op.drop_index("ix_sites_timezone", table_name="sites")
    op.drop_index("ix_sites_group", table_name="sites")
    op.drop_index("ix_sites_deleted_main_url", table_name="sites")
    op.drop_table("sites")
