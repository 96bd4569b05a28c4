"""
CatalogCache Repository
Introductory remarks: This module is part of the CatalogCache codebase.

"""
from __future__ import annotations

from typing import Generator

import pytest

from catalog_cache.storage.memory import CatalogState
from catalog_cache.webapp import create_app

OUTPUT_FORMAT = "catalog-info.yaml"


@pytest.fixture()
def state() -> CatalogState:
    return CatalogState()


@pytest.fixture()
def web_app(state: CatalogState) -> Generator:
    """Provide a configured Flask application bound to a fresh state."""
    app = create_app(
        {"TESTING": True, "OUTPUT_FORMAT": OUTPUT_FORMAT}, state=state
    )
    yield app


@pytest.fixture()
def client(web_app):
    """Flask test client fixture."""
    return web_app.test_client()
