"""HTTP handlers for catalog discovery, ingestion and model card reads."""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, jsonify, request

from catalog_cache.keys import (KEY_QUERY_PARAM, LIST_URI, MODEL_CARD_URI,
                                REMOVE_URI, UPSERT_URI,
                                build_import_key_and_uri, uri_for_key)
from catalog_cache.models import ModelCardStatus, UpsertRequest
from catalog_cache.storage.errors import EntryNotFound, ValidationError

from . import get_state

api_bp = Blueprint("api", __name__)

CATALOG_CONTENT_TYPE = "application/json"
MODEL_CARD_CONTENT_TYPE = "text/markdown"

_LOGGER = logging.getLogger(__name__)


def _json_error(message: str, status: int = 400):
    return jsonify({"error": message}), status


def _output_format() -> str:
    return current_app.config["OUTPUT_FORMAT"]


@api_bp.get(LIST_URI)
def discover_catalog():
    """Return every catalog URI that currently resolves to a document."""
    discovery = get_state().discover()
    try:
        return jsonify(discovery.to_dict()), 200
    except (TypeError, ValueError) as exc:
        _LOGGER.error("Failed to serialise discovery response: %s", exc)
        return _json_error(str(exc), 500)


@api_bp.post(UPSERT_URI)
def upsert_catalog_entry():
    """Create or replace a catalog entry and its companion model card."""
    try:
        uri = uri_for_key(request.args.get(KEY_QUERY_PARAM), _output_format())
    except ValidationError as exc:
        return _json_error(str(exc), 400)

    payload = request.get_json(force=True, silent=True)
    if payload is None:
        _LOGGER.error("error reading POST body: body is not valid JSON")
        return _json_error("error reading POST body: body is not valid JSON", 400)
    try:
        upsert = UpsertRequest.from_json(payload)
    except ValueError as exc:
        _LOGGER.error("error reading POST body: %s", exc)
        return _json_error(f"error reading POST body: {exc}", 400)

    get_state().apply_upsert(uri, upsert)
    return jsonify({"uri": uri}), 201


@api_bp.delete(REMOVE_URI)
def remove_catalog_entry():
    """Logically delete a catalog entry; unknown keys still succeed."""
    try:
        uri = uri_for_key(request.args.get(KEY_QUERY_PARAM), _output_format())
    except ValidationError as exc:
        return _json_error(str(exc), 400)

    _LOGGER.info("Removing URI %s", uri)
    get_state().catalog.delete(uri)
    return jsonify({"uri": uri}), 200


@api_bp.get(MODEL_CARD_URI)
def get_model_card():
    """Serve a model card, throttled to "not modified" once it goes stale."""
    key = request.args.get(KEY_QUERY_PARAM, "")
    result = get_state().model_cards.read(key)
    if result.status is ModelCardStatus.NOT_FOUND:
        _LOGGER.info("no model card found for %s", key)
        return _json_error(f"no model card found for '{key}'", 404)
    if result.status is ModelCardStatus.NOT_MODIFIED:
        _LOGGER.info("no update required for model card %s", key)
        return Response(status=304)

    _LOGGER.info("return model card content for %s", key)
    return Response(
        result.content or "",
        status=200,
        content_type=MODEL_CARD_CONTENT_TYPE,
    )


@api_bp.get("/<model>/<version>/<output_format>")
def get_catalog_entry(model: str, version: str, output_format: str):
    """Return the raw catalog document for a model/version/format triple.

    A request missing one of the three path segments does not match this
    route, so Flask answers 404 rather than 400.
    """
    _, uri = build_import_key_and_uri(model, version, output_format)
    try:
        content = get_state().catalog.get(uri)
    except EntryNotFound as exc:
        return _json_error(str(exc), 404)

    _LOGGER.info(
        "returning content: uri %s with data of len %d", uri, len(content)
    )
    return Response(content, status=200, content_type=CATALOG_CONTENT_TYPE)
