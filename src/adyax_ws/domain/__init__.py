"""Domain models for the Adyax web service."""

from .base import MAX_TITLE_LENGTH, MAX_TYPE_LENGTH, REQUIRED_FIELDS, ValidationError
from .constraints import FieldConstraintEngine, NodeConstraints
from .node import Node, NodeType, Payload
from .repository import ContentStore, NodeRepository

__all__ = [
    "MAX_TITLE_LENGTH",
    "MAX_TYPE_LENGTH",
    "REQUIRED_FIELDS",
    "ContentStore",
    "FieldConstraintEngine",
    "Node",
    "NodeConstraints",
    "NodeRepository",
    "NodeType",
    "Payload",
    "ValidationError",
]
