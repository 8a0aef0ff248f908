"""Shared test fixtures and configuration."""

import dataclasses
from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from adyax_ws.domain import REQUIRED_FIELDS, Node, NodeConstraints
from adyax_ws.domain.repository import parse_nid
from adyax_ws.services import JsonCodec, RequestValidator

TEST_NODE_TYPE = "adyax_rest_test"


class InMemoryNodeStore:
    """Node store kept in a dict.

    Nodes are copied in and out so a loaded node behaves like a fresh row:
    changing it does nothing until save().
    """

    def __init__(self, types=(TEST_NODE_TYPE,)):
        self.nodes: dict[int, Node] = {}
        self.types = set(types)
        self.writes = 0
        self._next_nid = 1

    async def load(self, nid):
        value = parse_nid(nid)
        if value is None or value not in self.nodes:
            return None
        return dataclasses.replace(self.nodes[value])

    def create(self, fields: Mapping) -> Node:
        return Node(**{name: fields[name] for name in REQUIRED_FIELDS if name in fields})

    async def save(self, node: Node) -> int:
        if node.is_new():
            node.nid = self._next_nid
            self._next_nid += 1
        elif node.nid not in self.nodes:
            raise ValueError(f"Node {node.nid} no longer exists")
        self.nodes[node.nid] = dataclasses.replace(node)
        self.writes += 1
        return node.nid

    async def delete(self, node: Node) -> None:
        self.nodes.pop(node.nid, None)
        self.writes += 1

    async def type_exists(self, node_type: str) -> bool:
        return node_type in self.types


class FakeConnection:
    """Just enough of an asyncpg connection for the health check."""

    def __init__(self, stats: dict):
        self.stats = stats

    async def fetchrow(self, query, *args):
        return self.stats


class FakePool:
    """Database pool stand-in handing out a FakeConnection."""

    def __init__(self, stats: dict | None = None, error: Exception | None = None):
        self.stats = stats or {"node_count": 0, "type_count": 0}
        self.error = error

    @asynccontextmanager
    async def acquire(self):
        if self.error:
            raise self.error
        yield FakeConnection(self.stats)


@pytest.fixture
def store() -> InMemoryNodeStore:
    """Provide an empty node store with the test content type."""
    return InMemoryNodeStore()


@pytest.fixture
def validator(store: InMemoryNodeStore) -> RequestValidator:
    """Provide a request validator over the in-memory store."""
    return RequestValidator(store=store, constraints=NodeConstraints(store), codec=JsonCodec())


@pytest.fixture
def node_data() -> dict:
    """Valid create/update body."""
    return {"title": "Test title", "type": TEST_NODE_TYPE, "body": "Test body"}


@pytest_asyncio.fixture
async def client(store: InMemoryNodeStore) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client against the app with an in-memory store."""
    from adyax_ws.api.main import app, configure_services

    configure_services(app.state, store)
    app.state.db_pool = FakePool(stats={"node_count": len(store.nodes), "type_count": 1})

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def fake_pool() -> type[FakePool]:
    """Provide the FakePool class for tests that need a custom pool."""
    return FakePool
