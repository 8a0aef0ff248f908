"""Health check endpoint."""

import structlog
from fastapi import APIRouter, Depends

from adyax_ws.api.dependencies import get_db_pool
from adyax_ws.api.models import HealthResponse
from adyax_ws.infrastructure.database import DatabasePool
from adyax_ws.infrastructure.schema import get_content_stats
from adyax_ws.metrics import node_count

logger = structlog.get_logger()
router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db_pool: DatabasePool = Depends(get_db_pool),  # noqa: B008
) -> HealthResponse:
    """Report database reachability and content counts."""
    try:
        async with db_pool.acquire() as conn:
            stats = await get_content_stats(conn)
    except Exception as e:
        logger.warning("health_database_error", error=str(e))
        return HealthResponse(status="degraded", database="unhealthy")

    node_count.set(stats["node_count"])

    return HealthResponse(
        status="healthy",
        database="healthy",
        node_count=stats["node_count"],
        type_count=stats["type_count"],
    )
