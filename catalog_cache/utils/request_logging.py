"""Shared helpers for logging incoming HTTP requests."""

from __future__ import annotations

import json
from typing import Any, Optional


def log_request(logger, request: Any, request_id: Optional[str] = None) -> None:
    """
    Emit a structured log for the current HTTP request.

    ``request`` is a Flask/Werkzeug request object; anything without a
    ``method`` attribute is ignored.
    """
    method = getattr(request, "method", None)
    if not method:
        return

    query_params = dict(getattr(request, "args", None) or {})
    view_args = getattr(request, "view_args", None) or {}
    logger.info(
        "HTTP request id=%s method=%s path=%s query=%s path_params=%s body=%s",
        request_id or "<none>",
        method,
        getattr(request, "path", ""),
        query_params,
        view_args,
        _body_preview(request),
    )


def _body_preview(request: Any) -> str:
    get_data = getattr(request, "get_data", None)
    if get_data is None:
        return "<missing>"
    body = get_data(cache=True)
    if not body:
        return "<empty>"
    if isinstance(body, (bytes, bytearray)):
        try:
            decoded = body.decode("utf-8")
        except UnicodeDecodeError:
            return "<binary>"
        return _truncate(decoded)
    try:
        serialized = json.dumps(body)
    except (TypeError, ValueError):
        serialized = str(body)
    return _truncate(serialized)


def _truncate(value: str, *, limit: int = 2048) -> str:
    if len(value) <= limit:
        return value
    return f"{value[:limit]}...<truncated>"
