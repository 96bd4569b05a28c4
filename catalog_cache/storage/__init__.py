"""Storage layer abstractions and in-memory adapters."""

from .base import BackingStorage, CatalogRepository, ModelCardRepository
from .errors import (CatalogError, EntryNotFound, InvalidKeyError,
                     ValidationError)
from .memory import (MODEL_CARD_MAX_SERVES, CatalogState,
                     InMemoryCatalogStore, InMemoryModelCardStore)

__all__ = [
    "BackingStorage",
    "CatalogRepository",
    "ModelCardRepository",
    "CatalogError",
    "EntryNotFound",
    "InvalidKeyError",
    "ValidationError",
    "MODEL_CARD_MAX_SERVES",
    "CatalogState",
    "InMemoryCatalogStore",
    "InMemoryModelCardStore",
]
