"""Startup configuration checks."""

import sys

import asyncpg
import structlog

logger = structlog.get_logger()


async def check_database() -> bool:
    """Check PostgreSQL connectivity and permissions."""
    from adyax_ws.config import settings

    print("  Checking PostgreSQL...", flush=True)

    try:
        conn = await asyncpg.connect(settings.database_url)

        # The schema is created on startup, so we need CREATE rights
        try:
            can_create = await conn.fetchval(
                "SELECT has_schema_privilege(current_schema(), 'CREATE')"
            )
        finally:
            await conn.close()

        print("    ✓ Database connection established", flush=True)
        if not can_create:
            print("    ✗ Insufficient database permissions", flush=True)
            print("      User needs CREATE privilege on the current schema", flush=True)
            return False
        print("    ✓ Table creation permissions verified", flush=True)
        return True

    except asyncpg.InvalidCatalogNameError:
        print("    ✗ Database does not exist", flush=True)
        print(f"      Create it with: createdb {settings.database_url.split('/')[-1]}", flush=True)
        return False
    except (OSError, asyncpg.PostgresError) as e:
        print(f"    ✗ Cannot connect to PostgreSQL: {e}", flush=True)
        print("      Check DATABASE_URL environment variable", flush=True)
        return False


async def run_startup_checks() -> bool:
    """Run all vital sign checks and return success status."""
    print("\nStarting adyax-ws - Checking vital signs...\n", flush=True)
    sys.stdout.flush()

    if not await check_database():
        return False

    print("\n✓ All vital signs normal - adyax-ws is ready!\n", flush=True)
    sys.stdout.flush()
    return True


def check_configuration() -> bool:
    """Warn about settings that leave the service unable to accept nodes."""
    from adyax_ws.config import settings

    if settings.default_node_type_name and not settings.default_node_type:
        logger.warning(
            "DEFAULT_NODE_TYPE_NAME set without DEFAULT_NODE_TYPE",
            help="Set DEFAULT_NODE_TYPE to seed a content type at startup",
        )
        return False

    return True
