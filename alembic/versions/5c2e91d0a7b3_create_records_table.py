"""Create records table

Revision ID: 5c2e91d0a7b3
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "5c2e91d0a7b3"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """One row per collection; the whole collection lives in value_json."""
    op.create_table(
        "records",
        sa.Column("key", sa.String(100), primary_key=True),
        sa.Column("value_json", sa.Text, nullable=False),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()
        ),
    )


def downgrade() -> None:
    op.drop_table("records")
