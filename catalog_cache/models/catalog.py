"""
CatalogCache Repository
Introductory remarks: This module is part of the CatalogCache codebase.

Domain models for catalog entries, model cards and request payloads.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


@dataclass
class CatalogEntry:
    """A cached catalog document addressed by its derived URI.

    ``content`` is ``None`` once the entry has been logically deleted.
    """

    uri: str
    content: Optional[bytes] = None

    @property
    def is_present(self) -> bool:
        return self.content is not None


@dataclass
class ModelCardRecord:
    """Model card content plus the bookkeeping used to throttle re-serves."""

    content: str
    freshness_token: str
    dirty: bool = True
    serve_count: int = 0


class ModelCardStatus(str, Enum):
    """Outcome of a model card read."""

    FRESH = "fresh"
    NOT_MODIFIED = "not_modified"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ModelCardRead:
    """Result of :meth:`InMemoryModelCardStore.read`."""

    status: ModelCardStatus
    content: Optional[str] = None


_STRING_FIELDS = {
    "model_card_key": "modelCardKey",
    "model_card": "modelCard",
    "freshness_token": "lastUpdateTimeSinceEpoch",
}


@dataclass(frozen=True)
class UpsertRequest:
    """Parsed body of an upsert request.

    ``body`` arrives base64 encoded, which is how the ingestion client
    serialises raw bytes in JSON.
    """

    body: bytes = b""
    model_card_key: str = ""
    model_card: str = ""
    freshness_token: str = ""

    @classmethod
    def from_json(cls, payload: Any) -> "UpsertRequest":
        if not isinstance(payload, Mapping):
            raise ValueError("request body must be a JSON object")

        raw_body = payload.get("body")
        if raw_body is None:
            raise ValueError("'body' is required")
        if isinstance(raw_body, str):
            try:
                body = base64.b64decode(raw_body, validate=True)
            except (binascii.Error, ValueError) as exc:
                raise ValueError(
                    f"'body' is not valid base64: {exc}"
                ) from exc
        else:
            raise ValueError("'body' must be a base64 encoded string")

        values: Dict[str, str] = {}
        for attr, wire_name in _STRING_FIELDS.items():
            value = payload.get(wire_name)
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise ValueError(f"'{wire_name}' must be a string")
            values[attr] = value

        return cls(body=body, **values)


@dataclass
class DiscoveryResponse:
    """Set of catalog URIs that currently resolve to a document."""

    uris: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return {"uris": list(self.uris)}
