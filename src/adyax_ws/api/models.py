"""Pydantic models for API responses."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Response after a successful write."""

    message: str


class CreatedResponse(MessageResponse):
    """Response after a node is created."""

    id: int


class ErrorsResponse(BaseModel):
    """Validation failures, returned with status 200."""

    errors: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Response for the health check."""

    status: str
    database: str
    node_count: int | None = None
    type_count: int | None = None
    version: str = "0.1.0"


class ErrorResponse(BaseModel):
    """Standard error response for unexpected failures."""

    error: str
    request_id: str | None = None
