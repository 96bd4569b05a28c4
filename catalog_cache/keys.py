"""
CatalogCache Repository
Introductory remarks: This module is part of the CatalogCache codebase.

Lookup key and URI construction shared by the write and read paths.
"""

from __future__ import annotations

from typing import Tuple

from .storage.errors import InvalidKeyError

KEY_DELIMITER = "_"
KEY_QUERY_PARAM = "key"

LIST_URI = "/list"
UPSERT_URI = "/upsert"
REMOVE_URI = "/remove"
MODEL_CARD_URI = "/modelcard"


def build_import_key_and_uri(
    model: str, version: str, output_format: str
) -> Tuple[str, str]:
    """Return the ``(key, uri)`` pair for a model/version/format triple."""
    key = f"{model}{KEY_DELIMITER}{version}"
    uri = f"/{model}/{version}/{output_format}"
    return key, uri


def split_key(key: str | None) -> Tuple[str, str]:
    """
    Split a ``model_version`` key into its model and version segments.

    Segments past the second are ignored; the first two must be
    non-empty.
    """
    if not key:
        raise InvalidKeyError(f"need a '{KEY_QUERY_PARAM}' parameter")
    segments = key.split(KEY_DELIMITER)
    if len(segments) < 2 or not segments[0] or not segments[1]:
        raise InvalidKeyError(f"bad key format: {key}")
    return segments[0], segments[1]


def uri_for_key(key: str | None, output_format: str) -> str:
    """Validate ``key`` and derive the catalog URI it maps to."""
    model, version = split_key(key)
    _, uri = build_import_key_and_uri(model, version, output_format)
    return uri
