"""Domain models for the catalog cache."""

from .catalog import (CatalogEntry, DiscoveryResponse, ModelCardRead,
                      ModelCardRecord, ModelCardStatus, UpsertRequest)

__all__ = [
    "CatalogEntry",
    "DiscoveryResponse",
    "ModelCardRead",
    "ModelCardRecord",
    "ModelCardStatus",
    "UpsertRequest",
]
