"""create cakes table

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:00
"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "cakes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("occasion", sa.Integer(), nullable=False),
        sa.Column("price", sa.Float(), server_default=sa.text("0"), nullable=False),
        sa.Column("quantity", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    op.execute("PRAGMA user_version = 1")


def downgrade() -> None:
    op.drop_table("cakes")
    op.execute("PRAGMA user_version = 0")
