"""JSON decoding and node normalization."""

import json
from typing import Any, Protocol

from adyax_ws.domain.node import Node


class CodecError(ValueError):
    """Raised when a request body cannot be decoded."""

    pass


class StructuredDataCodec(Protocol):
    """Decodes request bodies and serializes nodes for responses."""

    def decode(self, raw: bytes) -> Any:
        """Decode raw bytes into Python data, raising CodecError on bad input."""
        ...

    def normalize(self, node: Node) -> dict:
        """Turn a node into a JSON-ready mapping."""
        ...


class JsonCodec:
    """JSON codec producing field-list normalized nodes.

    Every field is a list of value items, so a node reads like:

        {"nid": [{"value": 1}], "type": [{"target_id": "article"}],
         "title": [{"value": "Hello"}], ...}
    """

    def decode(self, raw: bytes) -> Any:
        """Decode a JSON document."""
        try:
            return json.loads(raw)
        except (ValueError, RecursionError) as e:
            raise CodecError(str(e)) from e

    def normalize(self, node: Node) -> dict:
        """Normalize a node into field lists."""
        # References carry target_id, plain values carry value
        return {
            name: [{"target_id" if name == "type" else "value": value}]
            for name, value in node.to_dict().items()
        }
