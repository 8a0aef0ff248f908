"""Node, node type and payload domain models."""
from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

import pendulum
from pendulum import DateTime

from .base import MAX_TYPE_LENGTH, REQUIRED_FIELDS, ValidationError

MACHINE_NAME_PATTERN = re.compile(r"^[a-z0-9_]+$")


@dataclass
class Node:
    """A single content item.

    Field values are stored as received. Checking them is the job of the
    constraint engine, so an unsaved node may hold invalid data until it is
    validated.
    """

    type: Any = None
    title: Any = None
    body: Any = None

    # Set by the store
    nid: int | None = None
    uuid: str = field(default_factory=lambda: str(uuid4()))
    created: DateTime = field(default_factory=lambda: pendulum.now("UTC"))
    changed: DateTime = field(default_factory=lambda: pendulum.now("UTC"))

    def is_new(self) -> bool:
        """Check if this node has never been saved."""
        return self.nid is None

    def set(self, name: str, value: Any) -> None:
        """Set one of the writable fields."""
        if name not in REQUIRED_FIELDS:
            raise ValidationError(f"Field '{name}' is not writable")
        setattr(self, name, value)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "nid": self.nid,
            "uuid": self.uuid,
            "type": self.type,
            "title": self.title,
            "body": self.body,
            "created": self.created.isoformat(),
            "changed": self.changed.isoformat(),
        }

    @classmethod
    def from_record(cls, record: Mapping) -> Node:
        """Create a Node from a database row."""
        return cls(
            nid=record["nid"],
            uuid=str(record["uuid"]),
            type=record["type"],
            title=record["title"],
            body=record["body"],
            created=pendulum.instance(record["created"]),
            changed=pendulum.instance(record["changed"]),
        )


@dataclass
class NodeType:
    """A content type that nodes belong to."""

    type: str
    name: str = ""

    def __post_init__(self):
        """Validate the machine name after creation."""
        self.type = self._validate_machine_name(self.type)
        if not self.name:
            self.name = self.type

    @staticmethod
    def _validate_machine_name(value: str) -> str:
        """Validate a content type machine name.

        Rules:
        - Cannot be empty
        - Only lowercase letters, digits and underscores
        - Cannot exceed MAX_TYPE_LENGTH characters
        """
        if not value:
            raise ValidationError("Content type cannot be empty")

        if not MACHINE_NAME_PATTERN.match(value):
            raise ValidationError(
                "Content type may only contain lowercase letters, digits and underscores"
            )

        if len(value) > MAX_TYPE_LENGTH:
            raise ValidationError(
                f"Content type exceeds maximum length of {MAX_TYPE_LENGTH} characters"
            )

        return value


@dataclass(frozen=True)
class Payload:
    """The writable fields of a create or update request."""

    title: Any
    type: Any
    body: Any

    @classmethod
    def from_mapping(cls, data: Mapping) -> Payload | None:
        """Build a payload from decoded input.

        Keys outside the required set are dropped. Returns None when any
        required key is missing.
        """
        fields = {name: data[name] for name in REQUIRED_FIELDS if name in data}
        if len(fields) != len(REQUIRED_FIELDS):
            return None
        return cls(**fields)

    def items(self) -> list[tuple[str, Any]]:
        """Field name and value pairs in required-field order."""
        return [(name, getattr(self, name)) for name in REQUIRED_FIELDS]

    def to_dict(self) -> dict:
        """Convert to a plain mapping."""
        return dict(self.items())
