"""Flask application factory and shared setup for the catalog cache."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict

from flask import Flask, current_app, g, request

from catalog_cache.config import DEFAULT_OUTPUT_FORMAT
from catalog_cache.storage.memory import CatalogState
from catalog_cache.utils.request_logging import log_request

REQUEST_ID_HEADER = "X-Request-Id"

_LOGGER = logging.getLogger(__name__)


def create_app(
    config: Dict[str, Any] | None = None,
    state: CatalogState | None = None,
) -> Flask:
    """Create and configure the Flask application."""

    app = Flask(__name__)
    app.config.setdefault("JSON_SORT_KEYS", False)
    app.config.setdefault("OUTPUT_FORMAT", DEFAULT_OUTPUT_FORMAT)
    app.config.setdefault("CATALOG_STATE", state or CatalogState())

    if config:
        app.config.update(config)

    from .api import api_bp

    app.register_blueprint(api_bp)

    @app.before_request
    def assign_request_id() -> None:
        """Tag each request with an id that is useful when debugging."""
        g.request_id = str(uuid.uuid4())
        log_request(_LOGGER, request, g.request_id)

    @app.after_request
    def echo_request_id(response):
        request_id = getattr(g, "request_id", None)
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id
        return response

    _LOGGER.info(
        "Catalog cache app created with %d catalog entries",
        len(get_state(app).catalog),
    )
    return app


def get_state(app: Flask | None = None) -> CatalogState:
    """Retrieve the shared catalog state. Accepts an optional app override."""
    ctx_app = app or current_app
    state = ctx_app.config.get("CATALOG_STATE")
    if not isinstance(state, CatalogState):
        raise RuntimeError("CATALOG_STATE config must be a CatalogState instance")
    return state
