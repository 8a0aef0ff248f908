"""Field constraints checked before a node is saved."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from .base import MAX_TITLE_LENGTH, REQUIRED_FIELDS
from .node import Node
from .repository import ContentStore


class FieldConstraintEngine(Protocol):
    """Reports constraint violations for a subset of a node's fields."""

    async def check(self, node: Node, fields: Sequence[str]) -> list[str]:
        """Return one message per violation, empty if the node is valid."""
        ...


class NodeConstraints:
    """Constraint rules for the writable node fields.

    Every field in the requested subset is checked, so a node with several
    bad fields gets one message per field. Within a field only the first
    failing rule is reported.
    """

    def __init__(self, store: ContentStore, title_max_length: int = MAX_TITLE_LENGTH):
        self.store = store
        self.title_max_length = title_max_length

    async def check(
        self, node: Node, fields: Sequence[str] = REQUIRED_FIELDS
    ) -> list[str]:
        """Check the given fields of a node, in order."""
        checkers = {
            "title": self._check_title,
            "type": self._check_type,
            "body": self._check_body,
        }

        violations = []
        for name in fields:
            checker = checkers.get(name)
            if checker is None:
                continue
            message = await checker(getattr(node, name))
            if message:
                violations.append(message)
        return violations

    async def _check_title(self, value: Any) -> str | None:
        if not isinstance(value, str):
            return "Title must be a string."
        if not value.strip():
            return "Title cannot be empty."
        if "\x00" in value:
            return "Title contains invalid characters."
        if len(value) > self.title_max_length:
            return f"Title cannot be longer than {self.title_max_length} characters."
        return None

    async def _check_type(self, value: Any) -> str | None:
        if not isinstance(value, str):
            return "Content type must be a string."
        if not value:
            return "Content type cannot be empty."
        if "\x00" in value:
            return "Content type contains invalid characters."
        if not await self.store.type_exists(value):
            return f"Content type '{value}' does not exist."
        return None

    async def _check_body(self, value: Any) -> str | None:
        if not isinstance(value, str):
            return "Body must be a string."
        if not value.strip():
            return "Body cannot be empty."
        if "\x00" in value:
            return "Body contains invalid characters."
        return None
