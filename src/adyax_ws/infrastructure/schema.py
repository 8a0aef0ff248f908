"""Database schema management."""

import logging

from asyncpg import Connection

from adyax_ws.domain.base import MAX_TITLE_LENGTH, MAX_TYPE_LENGTH

logger = logging.getLogger(__name__)


async def ensure_schema(conn: Connection) -> None:
    """Ensure the content tables exist.

    This function is idempotent - safe to call multiple times.
    """
    logger.info("Ensuring content schema exists")

    await conn.execute(f"""
        CREATE TABLE IF NOT EXISTS node_types (
            type VARCHAR({MAX_TYPE_LENGTH}) PRIMARY KEY,
            name TEXT NOT NULL
        )
    """)

    await conn.execute(f"""
        CREATE TABLE IF NOT EXISTS nodes (
            nid SERIAL PRIMARY KEY,
            uuid UUID NOT NULL UNIQUE,
            type VARCHAR({MAX_TYPE_LENGTH}) NOT NULL REFERENCES node_types (type),
            title VARCHAR({MAX_TITLE_LENGTH}) NOT NULL,
            body TEXT NOT NULL,
            created TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            changed TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)

    await conn.execute("""
        CREATE INDEX IF NOT EXISTS idx_nodes_type
        ON nodes (type)
    """)

    logger.info("Content schema is ready")


async def get_content_stats(conn: Connection) -> dict:
    """Get node and content type counts."""
    stats = await conn.fetchrow("""
        SELECT
            (SELECT COUNT(*) FROM nodes) AS node_count,
            (SELECT COUNT(*) FROM node_types) AS type_count
    """)

    return dict(stats) if stats else {"node_count": 0, "type_count": 0}
