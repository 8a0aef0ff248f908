"""Main FastAPI application."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.responses import Response
from prometheus_client import REGISTRY, generate_latest
from prometheus_fastapi_instrumentator import Instrumentator

from adyax_ws.config import settings
from adyax_ws.domain import ContentStore, NodeConstraints, NodeRepository, NodeType
from adyax_ws.infrastructure.database import DatabasePool
from adyax_ws.infrastructure.schema import ensure_schema
from adyax_ws.services import JsonCodec, RequestValidator, StructuredDataCodec
from adyax_ws.startup_check import check_configuration, run_startup_checks

from .middleware import (
    ErrorHandlingMiddleware,
    LoggingMiddleware,
    RequestIDMiddleware,
)
from .routes import health, nodes

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(colors=True),
    ],
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


def configure_services(
    state,
    store: ContentStore,
    codec: StructuredDataCodec | None = None,
) -> RequestValidator:
    """Wire the store, constraint engine and codec onto app state."""
    state.node_repository = store
    state.codec = codec or JsonCodec()
    state.request_validator = RequestValidator(
        store=store,
        constraints=NodeConstraints(store, title_max_length=settings.title_max_length),
        codec=state.codec,
    )
    return state.request_validator


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown."""
    if not await run_startup_checks():
        print("\nStartup failed. Exiting.\n", flush=True)
        import sys
        sys.exit(1)

    check_configuration()

    logger.info("initializing_database_pool")
    app.state.db_pool = DatabasePool()
    await app.state.db_pool.initialize()

    async with app.state.db_pool.acquire() as conn:
        await ensure_schema(conn)
    logger.info("database_pool_ready")

    repository = NodeRepository(app.state.db_pool)
    if settings.default_node_type:
        node_type = NodeType(
            type=settings.default_node_type,
            name=settings.default_node_type_name or "",
        )
        if await repository.create_type(node_type):
            logger.info("default_node_type_created", type=node_type.type)

    configure_services(app.state, repository)
    logger.info("request_validator_ready")

    yield

    logger.info("closing_database_pool")
    await app.state.db_pool.close()


app = FastAPI(
    title="Adyax WS",
    description="REST web service for creating, reading, updating and deleting nodes",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(nodes.router)

app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIDMiddleware)

# Automatic HTTP metrics
instrumentator = Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=True,
    should_respect_env_var=True,  # Respects ENABLE_METRICS env var
    should_instrument_requests_inprogress=True,
    excluded_handlers=["/metrics"],
    env_var_name="ENABLE_METRICS",
    inprogress_name="adyax_ws_http_requests_inprogress",
    inprogress_labels=True,
)

instrumentator.instrument(app)


@app.get("/metrics", include_in_schema=False)
async def get_metrics() -> Response:
    """Prometheus metrics endpoint."""
    metrics = generate_latest(REGISTRY)
    return Response(content=metrics, media_type="text/plain; version=0.0.4")
