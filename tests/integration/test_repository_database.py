"""Integration tests for NodeRepository against PostgreSQL.

Skipped when DATABASE_URL doesn't point at a reachable server.
"""
import uuid
from collections.abc import AsyncGenerator

import asyncpg
import pytest
import pytest_asyncio

from adyax_ws.domain import NodeRepository, NodeType
from adyax_ws.infrastructure.database import DatabasePool
from adyax_ws.infrastructure.schema import ensure_schema

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def db_pool() -> AsyncGenerator[DatabasePool, None]:
    """Create a database pool with the content schema in place."""
    pool = DatabasePool()
    try:
        await pool.initialize()
    except (OSError, asyncpg.PostgresError) as e:
        pytest.skip(f"PostgreSQL not available: {e}")

    async with pool.acquire() as conn:
        await ensure_schema(conn)

    yield pool

    await pool.close()


@pytest_asyncio.fixture
async def repository(db_pool: DatabasePool) -> AsyncGenerator[NodeRepository, None]:
    """Repository with a unique content type, cleaned up afterwards."""
    repo = NodeRepository(db_pool)
    repo.test_type = f"test_{uuid.uuid4().hex[:8]}"
    await repo.create_type(NodeType(repo.test_type, "Test type"))

    yield repo

    async with db_pool.acquire() as conn:
        await conn.execute("DELETE FROM nodes WHERE type = $1", repo.test_type)
        await conn.execute("DELETE FROM node_types WHERE type = $1", repo.test_type)


@pytest.mark.asyncio
async def test_ensure_schema_is_idempotent(db_pool):
    async with db_pool.acquire() as conn:
        await ensure_schema(conn)
        await ensure_schema(conn)


@pytest.mark.asyncio
async def test_save_and_load(repository):
    node = repository.create({"title": "T", "type": repository.test_type, "body": "B"})
    assert node.is_new()

    nid = await repository.save(node)

    loaded = await repository.load(nid)
    assert loaded is not None
    assert loaded.nid == nid
    assert loaded.uuid == node.uuid
    assert (loaded.title, loaded.type, loaded.body) == ("T", repository.test_type, "B")


@pytest.mark.asyncio
async def test_load_accepts_string_ids(repository):
    nid = await repository.save(
        repository.create({"title": "T", "type": repository.test_type, "body": "B"})
    )

    assert (await repository.load(str(nid))).nid == nid


@pytest.mark.asyncio
@pytest.mark.parametrize("nid", [None, "", "abc", 0, -5, 2**40])
async def test_load_unparseable_ids(repository, nid):
    assert await repository.load(nid) is None


@pytest.mark.asyncio
async def test_update_bumps_changed(repository):
    node = repository.create({"title": "T", "type": repository.test_type, "body": "B"})
    nid = await repository.save(node)
    before = (await repository.load(nid)).changed

    node.set("title", "Updated")
    await repository.save(node)

    loaded = await repository.load(nid)
    assert loaded.title == "Updated"
    assert loaded.changed >= before


@pytest.mark.asyncio
async def test_delete(repository):
    node = repository.create({"title": "T", "type": repository.test_type, "body": "B"})
    nid = await repository.save(node)

    await repository.delete(node)

    assert await repository.load(nid) is None


@pytest.mark.asyncio
async def test_delete_unsaved_node(repository):
    with pytest.raises(ValueError, match="never saved"):
        await repository.delete(repository.create({}))


@pytest.mark.asyncio
async def test_content_types(repository):
    assert await repository.type_exists(repository.test_type)
    assert not await repository.type_exists("definitely_not_a_type")

    # Creating twice reports the duplicate
    assert not await repository.create_type(NodeType(repository.test_type))

    types = [t.type for t in await repository.list_types()]
    assert repository.test_type in types


@pytest.mark.asyncio
async def test_delete_type_in_use(repository):
    await repository.save(
        repository.create({"title": "T", "type": repository.test_type, "body": "B"})
    )

    with pytest.raises(ValueError, match="is used by 1 node"):
        await repository.delete_type(repository.test_type)


@pytest.mark.asyncio
async def test_delete_unused_type(db_pool):
    repository = NodeRepository(db_pool)
    machine_name = f"test_{uuid.uuid4().hex[:8]}"
    await repository.create_type(NodeType(machine_name))

    assert await repository.delete_type(machine_name)
    assert not await repository.delete_type(machine_name)


@pytest.mark.asyncio
async def test_update_after_delete(repository):
    node = repository.create({"title": "T", "type": repository.test_type, "body": "B"})
    nid = await repository.save(node)
    await repository.delete(node)

    node.set("title", "Too late")
    with pytest.raises(ValueError, match="no longer exists"):
        await repository.save(node)

    assert await repository.load(nid) is None
