"""
CatalogCache Repository
Introductory remarks: This module is part of the CatalogCache codebase.

In-memory catalog and model card stores guarded by a shared lock.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional

from catalog_cache.models import (CatalogEntry, DiscoveryResponse,
                                  ModelCardRead, ModelCardRecord,
                                  ModelCardStatus, UpsertRequest)

from .base import CatalogRepository, ModelCardRepository
from .errors import EntryNotFound

# Reads past this count return "not modified" until the card changes again.
MODEL_CARD_MAX_SERVES = 10

_LOGGER = logging.getLogger(__name__)


class InMemoryCatalogStore(CatalogRepository):
    """Dictionary-backed catalog store.

    Entries are never removed from the mapping. Deleting an entry clears
    its payload so the URI resolves to not-found while its slot stays
    registered.
    """

    def __init__(self, lock: Optional[threading.RLock] = None) -> None:
        self._lock = lock or threading.RLock()
        self._entries: Dict[str, CatalogEntry] = {}

    def upsert(self, uri: str, content: bytes) -> None:
        with self._lock:
            entry = self._entries.get(uri)
            if entry is None:
                self._entries[uri] = CatalogEntry(uri=uri, content=content)
            else:
                entry.content = content

    def delete(self, uri: str) -> None:
        with self._lock:
            entry = self._entries.get(uri)
            if entry is not None:
                entry.content = None

    def get(self, uri: str) -> bytes:
        with self._lock:
            entry = self._entries.get(uri)
            if entry is None or entry.content is None:
                raise EntryNotFound(f"No catalog entry for '{uri}'")
            return entry.content

    def list_present(self) -> List[str]:
        with self._lock:
            return [
                uri for uri, entry in self._entries.items() if entry.is_present
            ]

    def __contains__(self, uri: object) -> bool:
        with self._lock:
            return uri in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class InMemoryModelCardStore(ModelCardRepository):
    """Model cards keyed by the ingestion client's opaque card key."""

    def __init__(self, lock: Optional[threading.RLock] = None) -> None:
        self._lock = lock or threading.RLock()
        self._cards: Dict[str, ModelCardRecord] = {}

    def upsert(self, key: str, content: str, freshness_token: str) -> None:
        """
        Record a model card.

        The freshness token is the only change signal: when it matches the
        stored token the existing record is kept as is, even if ``content``
        differs.
        """
        with self._lock:
            record = self._cards.get(key)
            if record is None:
                self._cards[key] = ModelCardRecord(
                    content=content, freshness_token=freshness_token
                )
                return
            if record.freshness_token != freshness_token:
                record.content = content
                record.freshness_token = freshness_token
                record.dirty = True
                record.serve_count = 0

    def read(self, key: str) -> ModelCardRead:
        """
        Serve a model card to a polling consumer.

        After every change the content is served until it has been read
        ``MODEL_CARD_MAX_SERVES + 1`` times. Later reads report
        ``NOT_MODIFIED`` without touching the record.
        """
        with self._lock:
            record = self._cards.get(key)
            if record is None:
                return ModelCardRead(ModelCardStatus.NOT_FOUND)
            if not record.dirty and record.serve_count > MODEL_CARD_MAX_SERVES:
                return ModelCardRead(ModelCardStatus.NOT_MODIFIED)
            record.dirty = False
            record.serve_count += 1
            return ModelCardRead(ModelCardStatus.FRESH, record.content)

    def get_record(self, key: str) -> Optional[ModelCardRecord]:
        """Return a copy of the stored record, mainly for diagnostics."""
        with self._lock:
            record = self._cards.get(key)
            if record is None:
                return None
            return ModelCardRecord(
                content=record.content,
                freshness_token=record.freshness_token,
                dirty=record.dirty,
                serve_count=record.serve_count,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._cards)


class CatalogState:
    """Both stores plus the single lock that serialises access to them."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.catalog = InMemoryCatalogStore(self.lock)
        self.model_cards = InMemoryModelCardStore(self.lock)

    def apply_upsert(self, uri: str, request: UpsertRequest) -> None:
        """Apply the catalog and model card halves of an upsert atomically."""
        with self.lock:
            self.catalog.upsert(uri, request.body)
            self.model_cards.upsert(
                request.model_card_key,
                request.model_card,
                request.freshness_token,
            )
        _LOGGER.info(
            "Upserting URI %s with data of len %d with modelcard key %s "
            "and modelcard len %d",
            uri,
            len(request.body),
            request.model_card_key,
            len(request.model_card),
        )

    def discover(self) -> DiscoveryResponse:
        with self.lock:
            return DiscoveryResponse(uris=self.catalog.list_present())
