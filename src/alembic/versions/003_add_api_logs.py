"""Add api_logs for request logging and analytics

Revision ID: 003
Revises: 002
Create Date: 2025-03-14 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

revision: str = "003"
down_revision: str | None = "002"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "api_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("method", sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column("url", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("status_code", sa.Integer(), nullable=False),
        sa.Column("response_time", sa.Float(), nullable=False),
        sa.Column("ip_address", sqlmodel.sql.sqltypes.AutoString(length=45), nullable=True),
        sa.Column("user_agent", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column("project_id", sqlmodel.sql.sqltypes.AutoString(length=36), nullable=True),
        sa.Column("entity_type", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column("entity_id", sqlmodel.sql.sqltypes.AutoString(length=36), nullable=True),
        sa.Column("request_size", sa.Integer(), nullable=True),
        sa.Column("response_size", sa.Integer(), nullable=True),
        sa.Column("error_message", sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column("query_params", sa.JSON(), nullable=True),
        sa.Column("headers", sa.JSON(), nullable=True),
        sa.Column("referrer", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column("request_id", sqlmodel.sql.sqltypes.AutoString(length=36), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_api_logs_timestamp", "api_logs", ["timestamp"], unique=False)
    op.create_index(
        "ix_api_logs_project_timestamp", "api_logs", ["project_id", "timestamp"], unique=False
    )
    op.create_index("ix_api_logs_status_code", "api_logs", ["status_code"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_api_logs_status_code", table_name="api_logs")
    op.drop_index("ix_api_logs_project_timestamp", table_name="api_logs")
    op.drop_index("ix_api_logs_timestamp", table_name="api_logs")
    op.drop_table("api_logs")
