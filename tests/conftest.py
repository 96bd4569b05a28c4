"""
CatalogCache Repository
Introductory remarks: This module is part of the CatalogCache codebase.

Shared fixtures for the test-suite.
"""

from __future__ import annotations

import pytest

from catalog_cache.utils import env

_CATALOG_ENV_VARS = (
    "CATALOG_OUTPUT_FORMAT",
    "CATALOG_HOST",
    "CATALOG_PORT",
    "CATALOG_STORAGE_URL",
    "CATALOG_STORAGE_TOKEN",
    "CATALOG_STORAGE_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer ``.env`` files and CATALOG_* variables out of tests."""
    monkeypatch.setattr(env, "_ENV_LOADED", True)
    for name in _CATALOG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
