"""Node repository for database operations."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

import pendulum

from adyax_ws.infrastructure.database import DatabasePool

from .base import REQUIRED_FIELDS
from .node import Node, NodeType

logger = logging.getLogger(__name__)

# SERIAL upper bound
MAX_NID = 2**31 - 1


class ContentStore(Protocol):
    """What the request pipeline needs from a node store."""

    async def load(self, nid: int | str | None) -> Node | None:
        """Load a node, or None if it does not exist."""
        ...

    def create(self, fields: Mapping) -> Node:
        """Build an unsaved node from field values."""
        ...

    async def save(self, node: Node) -> int:
        """Insert or update a node, returning its id.

        Raises ValueError when updating a node that has since been deleted.
        """
        ...

    async def delete(self, node: Node) -> None:
        """Delete a saved node."""
        ...

    async def type_exists(self, node_type: str) -> bool:
        """Check whether a content type exists."""
        ...


def parse_nid(nid: int | str | None) -> int | None:
    """Convert an incoming id to a storable integer, or None if it can't be one."""
    if nid is None or isinstance(nid, bool):
        return None
    try:
        value = int(str(nid).strip())
    except ValueError:
        return None
    if value < 1 or value > MAX_NID:
        return None
    return value


class NodeRepository:
    """Repository for storing and retrieving nodes and content types."""

    def __init__(self, db_pool: DatabasePool):
        """Initialize with database pool."""
        self.db_pool = db_pool

    async def load(self, nid: int | str | None) -> Node | None:
        """Load a node by id."""
        value = parse_nid(nid)
        if value is None:
            return None

        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow(
                """
                SELECT nid, uuid, type, title, body, created, changed
                FROM nodes
                WHERE nid = $1
                """,
                value,
            )

        return Node.from_record(row) if row else None

    def create(self, fields: Mapping) -> Node:
        """Build an unsaved node. Nothing touches the database until save()."""
        return Node(**{name: fields[name] for name in REQUIRED_FIELDS if name in fields})

    async def save(self, node: Node) -> int:
        """Store a node, inserting it if new, and return its id."""
        async with self.db_pool.acquire() as conn:
            if node.is_new():
                row = await conn.fetchrow(
                    """
                    INSERT INTO nodes (uuid, type, title, body, created, changed)
                    VALUES ($1, $2, $3, $4, $5, $6)
                    RETURNING nid
                    """,
                    node.uuid,
                    node.type,
                    node.title,
                    node.body,
                    node.created,
                    node.changed,
                )
                node.nid = row["nid"]
                logger.info(f"Inserted node {node.nid} of type {node.type}")
            else:
                node.changed = pendulum.now("UTC")
                result = await conn.execute(
                    """
                    UPDATE nodes
                    SET type = $2, title = $3, body = $4, changed = $5
                    WHERE nid = $1
                    """,
                    node.nid,
                    node.type,
                    node.title,
                    node.body,
                    node.changed,
                )
                if result == "UPDATE 0":
                    raise ValueError(f"Node {node.nid} no longer exists")
                logger.info(f"Updated node {node.nid}")

        return node.nid

    async def delete(self, node: Node) -> None:
        """Delete a node."""
        if node.is_new():
            raise ValueError("Cannot delete a node that was never saved")

        async with self.db_pool.acquire() as conn:
            await conn.execute("DELETE FROM nodes WHERE nid = $1", node.nid)
        logger.info(f"Deleted node {node.nid}")

    async def type_exists(self, node_type: str) -> bool:
        """Check if a content type exists."""
        async with self.db_pool.acquire() as conn:
            return await conn.fetchval(
                "SELECT EXISTS (SELECT 1 FROM node_types WHERE type = $1)",
                node_type,
            )

    async def create_type(self, node_type: NodeType) -> bool:
        """Create a content type. Returns False if it already exists."""
        async with self.db_pool.acquire() as conn:
            created = await conn.fetchval(
                """
                INSERT INTO node_types (type, name)
                VALUES ($1, $2)
                ON CONFLICT (type) DO NOTHING
                RETURNING type
                """,
                node_type.type,
                node_type.name,
            )
        return created is not None

    async def list_types(self) -> list[NodeType]:
        """List all content types ordered by machine name."""
        async with self.db_pool.acquire() as conn:
            rows = await conn.fetch("SELECT type, name FROM node_types ORDER BY type")
        return [NodeType(type=row["type"], name=row["name"]) for row in rows]

    async def delete_type(self, node_type: str) -> bool:
        """Delete an unused content type.

        Returns False if the type does not exist.
        Raises ValueError if nodes still reference it.
        """
        async with self.db_pool.acquire() as conn:
            async with conn.transaction():
                in_use = await conn.fetchval(
                    "SELECT COUNT(*) FROM nodes WHERE type = $1", node_type
                )
                if in_use:
                    raise ValueError(
                        f"Content type '{node_type}' is used by {in_use} node(s)"
                    )
                result = await conn.execute(
                    "DELETE FROM node_types WHERE type = $1", node_type
                )
        return result != "DELETE 0"
