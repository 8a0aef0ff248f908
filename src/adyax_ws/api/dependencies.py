"""Dependency injection for API endpoints."""

from fastapi import Request

from adyax_ws.domain import ContentStore
from adyax_ws.infrastructure.database import DatabasePool
from adyax_ws.services import RequestValidator, StructuredDataCodec


async def get_db_pool(request: Request) -> DatabasePool:
    """Get database pool from app state."""
    return request.app.state.db_pool


async def get_repository(request: Request) -> ContentStore:
    """Get the node store from app state."""
    return request.app.state.node_repository


async def get_codec(request: Request) -> StructuredDataCodec:
    """Get the codec from app state."""
    return request.app.state.codec


async def get_validator(request: Request) -> RequestValidator:
    """Get the request validator from app state."""
    return request.app.state.request_validator

