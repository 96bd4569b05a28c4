"""
CatalogCache Repository
Introductory remarks: This module is part of the CatalogCache codebase.

Runtime settings for the catalog cache, read from the environment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .utils.env import load_dotenv, read_float, read_int, read_str

DEFAULT_OUTPUT_FORMAT = "catalog-info.yaml"
"""Format segment appended to every catalog URI."""

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 9090
DEFAULT_STORAGE_TIMEOUT = 30.0
"""Seconds to wait on each backing storage call during hydration."""


@dataclass(frozen=True)
class Settings:
    """Process configuration for the catalog cache service."""

    output_format: str = DEFAULT_OUTPUT_FORMAT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    storage_url: Optional[str] = None
    storage_token: Optional[str] = None
    storage_timeout: float = DEFAULT_STORAGE_TIMEOUT

    def __post_init__(self) -> None:
        if not self.output_format or "/" in self.output_format:
            raise ValueError(
                "CATALOG_OUTPUT_FORMAT must be a single non-empty path segment"
            )
        if not 0 < self.port < 65536:
            raise ValueError(f"CATALOG_PORT out of range: {self.port}")
        if self.storage_timeout <= 0:
            raise ValueError("CATALOG_STORAGE_TIMEOUT must be positive")


def load_settings() -> Settings:
    """Build :class:`Settings` from ``CATALOG_*`` environment variables."""
    load_dotenv()
    return Settings(
        output_format=read_str("CATALOG_OUTPUT_FORMAT", DEFAULT_OUTPUT_FORMAT)
        or DEFAULT_OUTPUT_FORMAT,
        host=read_str("CATALOG_HOST", DEFAULT_HOST) or DEFAULT_HOST,
        port=read_int("CATALOG_PORT", DEFAULT_PORT),
        storage_url=read_str("CATALOG_STORAGE_URL"),
        storage_token=read_str("CATALOG_STORAGE_TOKEN"),
        storage_timeout=read_float(
            "CATALOG_STORAGE_TIMEOUT", DEFAULT_STORAGE_TIMEOUT
        ),
    )
