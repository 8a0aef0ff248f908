"""Request validation for the node endpoints.

Each step returns either ``Ok`` with its value or ``Err`` with the messages
collected so far. Handlers branch on the result and never need to catch
anything for bad input.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

from adyax_ws.domain.base import REQUIRED_FIELDS
from adyax_ws.domain.constraints import FieldConstraintEngine
from adyax_ws.domain.node import Node, Payload
from adyax_ws.domain.repository import ContentStore

from .codec import CodecError, StructuredDataCodec

T = TypeVar("T")

# User-facing messages
INVALID_ID = "Please, provide a valid node id."
NOT_FOUND = "Node does not exist."
INVALID_JSON = "Please, provide a valid json data."
MISSING_FIELDS = "Please, provide required fields: title, type and body."

ID_PARAMS = ("id", "nid")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful validation step."""

    value: T


@dataclass(frozen=True)
class Err:
    """A failed validation step with its messages, newest first."""

    errors: tuple[str, ...]

    @classmethod
    def of(cls, *messages: str) -> Err:
        """Build a failure from one or more messages."""
        return cls(errors=tuple(messages))

    @property
    def messages(self) -> list[str]:
        """Messages ready for the response body."""
        return flatten_errors(self.errors)


def flatten_errors(errors: Iterable[str | None]) -> list[str]:
    """Drop empty messages, keeping order."""
    return [message for message in errors if message]


class RequestValidator:
    """Turns request parts into a node and payload, or a list of errors."""

    def __init__(
        self,
        store: ContentStore,
        constraints: FieldConstraintEngine,
        codec: StructuredDataCodec,
    ):
        self.store = store
        self.constraints = constraints
        self.codec = codec

    async def resolve_item(self, query: Mapping[str, str]) -> Ok[Node] | Err:
        """Load the node named by the ``id`` (or ``nid``) query parameter."""
        nid = next((query[name] for name in ID_PARAMS if query.get(name)), None)
        # "0" is treated as no id at all
        if not nid or nid == "0":
            return Err.of(INVALID_ID)

        node = await self.store.load(nid)
        if node is None:
            return Err.of(NOT_FOUND)
        return Ok(node)

    def extract_payload(self, raw: bytes) -> Ok[Payload] | Err:
        """Decode the body and keep only the required fields.

        Unknown keys are dropped silently. A body that is not a JSON object
        has none of the required keys.
        """
        try:
            data = self.codec.decode(raw)
        except CodecError:
            return Err.of(INVALID_JSON)

        payload = Payload.from_mapping(data) if isinstance(data, Mapping) else None
        if payload is None:
            return Err.of(MISSING_FIELDS)
        return Ok(payload)

    async def validate_against_schema(self, node: Node) -> Ok[Node] | Err:
        """Check every required field and report all violations together.

        The engine reports in field order; the response lists the most
        recently found violation first.
        """
        violations = await self.constraints.check(node, REQUIRED_FIELDS)
        if violations:
            return Err(errors=tuple(reversed(violations)))
        return Ok(node)
