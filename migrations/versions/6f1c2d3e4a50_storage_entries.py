"""storage_entries

Create `storage_entries` key-value table backing the record store.

Revision ID: 6f1c2d3e4a50
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect as sa_inspect


# revision identifiers, used by Alembic.
revision = "6f1c2d3e4a50"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    inspector = sa_inspect(bind)

    if "storage_entries" not in set(inspector.get_table_names()):
        op.create_table(
            "storage_entries",
            sa.Column("key", sa.String(length=100), nullable=False),
            sa.Column("value", sa.Text(), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
            sa.PrimaryKeyConstraint("key"),
        )


def downgrade():
    op.drop_table("storage_entries")
