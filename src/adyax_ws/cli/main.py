"""adyax-ws CLI main entry point."""

import asyncio
import sys

import click
import structlog

from adyax_ws.domain import NodeRepository, NodeType, ValidationError
from adyax_ws.infrastructure.database import DatabasePool
from adyax_ws.infrastructure.schema import ensure_schema

# Configure logging for CLI
structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.dev.ConsoleRenderer(colors=True),
    ],
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@click.group()
@click.pass_context
def cli(ctx):
    """adyax-ws - REST web service for nodes.

    Administration tool for the database schema and content types.
    """
    ctx.ensure_object(dict)


@cli.command(name="serve")
def serve():
    """Run the REST API server."""
    from adyax_ws.__main__ import main

    main()


@cli.group()
@click.pass_context
def schema(ctx):
    """Manage the database schema."""
    pass


@schema.command(name="init")
@click.pass_context
def schema_init(ctx):
    """Create the content tables if they don't exist."""
    async def _init():
        pool = DatabasePool()
        try:
            await pool.initialize()
            async with pool.acquire() as conn:
                await ensure_schema(conn)
            click.echo("✓ Content schema is ready")
        finally:
            await pool.close()

    asyncio.run(_init())


@cli.group(name="type")
@click.pass_context
def node_type(ctx):
    """Manage content types."""
    pass


@node_type.command(name="list")
@click.pass_context
def type_list(ctx):
    """List all content types."""
    async def _list():
        pool = DatabasePool()
        try:
            await pool.initialize()
            types = await NodeRepository(pool).list_types()
            if not types:
                click.echo("No content types found.")
            else:
                click.echo(f"Found {len(types)} content type(s):")
                for t in types:
                    click.echo(f"  - {t.type} ({t.name})")
        finally:
            await pool.close()

    asyncio.run(_list())


@node_type.command(name="create")
@click.argument("machine_name")
@click.option("--name", default="", help="Human readable name (defaults to the machine name)")
@click.pass_context
def type_create(ctx, machine_name: str, name: str):
    """Create a new content type."""
    try:
        new_type = NodeType(type=machine_name, name=name)
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    async def _create():
        pool = DatabasePool()
        try:
            await pool.initialize()
            if not await NodeRepository(pool).create_type(new_type):
                click.echo(f"Error: Content type '{machine_name}' already exists.", err=True)
                sys.exit(1)
            click.echo(f"✓ Created content type: {new_type.type} ({new_type.name})")
        finally:
            await pool.close()

    asyncio.run(_create())


@node_type.command(name="delete")
@click.argument("machine_name")
@click.pass_context
def type_delete(ctx, machine_name: str):
    """Delete a content type that no node uses."""
    async def _delete():
        pool = DatabasePool()
        try:
            await pool.initialize()
            try:
                deleted = await NodeRepository(pool).delete_type(machine_name)
            except ValueError as e:
                click.echo(f"Error: {e}", err=True)
                sys.exit(1)

            if not deleted:
                click.echo(f"Error: Content type '{machine_name}' does not exist.", err=True)
                sys.exit(1)
            click.echo(f"✓ Deleted content type: {machine_name}")
        finally:
            await pool.close()

    asyncio.run(_delete())


if __name__ == "__main__":
    cli()
