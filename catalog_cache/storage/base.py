"""Abstract store interfaces for the catalog cache."""

from __future__ import annotations

from typing import List, Protocol

from catalog_cache.models import ModelCardRead


class CatalogRepository(Protocol):
    """Keyed store of catalog documents with soft-delete semantics."""

    def upsert(self, uri: str, content: bytes) -> None:
        """Insert or replace the payload stored at ``uri``."""

    def delete(self, uri: str) -> None:
        """Clear the payload at ``uri``; a missing entry is not an error."""

    def get(self, uri: str) -> bytes:
        """Return the payload or raise EntryNotFound."""

    def list_present(self) -> List[str]:
        """Return URIs whose payload has not been cleared."""


class ModelCardRepository(Protocol):
    """Model card store with staleness-throttled reads."""

    def upsert(self, key: str, content: str, freshness_token: str) -> None:
        """Create or refresh a card when its freshness token changes."""

    def read(self, key: str) -> ModelCardRead:
        """Return fresh content, a not-modified signal or not-found."""


class BackingStorage(Protocol):
    """Durable storage consulted once at startup to hydrate the cache."""

    def list_model_keys(self) -> List[str]:
        """Return every ``model_version`` key known to storage."""

    def fetch_model(self, key: str) -> bytes:
        """Return the stored catalog document for ``key``."""
