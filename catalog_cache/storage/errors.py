"""Common errors raised by the catalog and model-card stores."""

from __future__ import annotations


class CatalogError(RuntimeError):
    """Base class for catalog cache failures."""


class ValidationError(CatalogError):
    """Raised when client input fails validation."""


class InvalidKeyError(ValidationError):
    """Raised when a ``key`` query parameter is missing or malformed."""


class EntryNotFound(CatalogError):
    """Raised when a catalog URI has no entry or its payload was cleared."""
