"""Create node and content type tables

Revision ID: 3f1c9a7e2b40
Revises:
Create Date: 2026-10-17 12:00:00.000000

"""
from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7e2b40'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the content type and node tables."""
    op.execute("""
        CREATE TABLE IF NOT EXISTS node_types (
            type VARCHAR(32) PRIMARY KEY,
            name TEXT NOT NULL
        )
    """)

    op.execute("""
        CREATE TABLE IF NOT EXISTS nodes (
            nid SERIAL PRIMARY KEY,
            uuid UUID NOT NULL UNIQUE,
            type VARCHAR(32) NOT NULL REFERENCES node_types (type),
            title VARCHAR(255) NOT NULL,
            body TEXT NOT NULL,
            created TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            changed TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)

    # Constraint checks look nodes up by type
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_nodes_type
        ON nodes (type)
    """)


def downgrade() -> None:
    """Drop the node and content type tables."""
    op.execute("DROP TABLE IF EXISTS nodes")
    op.execute("DROP TABLE IF EXISTS node_types")
