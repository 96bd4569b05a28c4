"""
CatalogCache Repository
Introductory remarks: This module is part of the CatalogCache codebase.

Startup hydration of the catalog store from backing storage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .clients.storage_client import StorageError
from .keys import KEY_DELIMITER, build_import_key_and_uri, split_key
from .storage.base import BackingStorage
from .storage.errors import InvalidKeyError
from .storage.memory import CatalogState

_LOGGER = logging.getLogger(__name__)


@dataclass
class HydrationResult:
    """Summary of a hydration run."""

    completed: bool = False
    loaded: int = 0
    skipped: int = 0


def hydrate(
    state: CatalogState, storage: BackingStorage, output_format: str
) -> HydrationResult:
    """
    Populate ``state`` with every document known to ``storage``.

    Storage failures are logged and end the run early; they never
    propagate, so the service can still start and be filled by upserts.
    Each document is inserted after its fetch returns, so the lock is
    never held across a network call.
    """
    result = HydrationResult()
    try:
        keys = storage.list_model_keys()
    except StorageError as error:
        _LOGGER.error("Listing models from storage failed: %s", error)
        return result

    for key in keys:
        try:
            model, version = split_key(key)
        except InvalidKeyError:
            _LOGGER.warning(
                "bad format for key from storage when splitting with '%s': %s",
                KEY_DELIMITER,
                key,
            )
            result.skipped += 1
            continue
        try:
            content = storage.fetch_model(key)
        except StorageError as error:
            _LOGGER.error("Fetching model %s from storage failed: %s", key, error)
            return result

        _, uri = build_import_key_and_uri(model, version, output_format)
        state.catalog.upsert(uri, content)
        result.loaded += 1
        _LOGGER.debug("Hydrated %s with data of len %d", uri, len(content))

    result.completed = True
    _LOGGER.info(
        "Hydration loaded %d catalog entries (%d keys skipped)",
        result.loaded,
        result.skipped,
    )
    return result
