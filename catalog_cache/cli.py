"""Command-line entry point that hydrates the cache and serves it over HTTP."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import Optional, Sequence

from flask import Flask

from .clients.storage_client import BridgeStorageClient
from .config import Settings, load_settings
from .hydration import HydrationResult, hydrate
from .logging_config import configure_logging
from .storage.memory import CatalogState
from .webapp import create_app

logger = logging.getLogger(__name__)


class CatalogCacheApp:
    """Wire settings, state, hydration and the Flask app together."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self.state = CatalogState()
        self.app: Flask = create_app(
            {"OUTPUT_FORMAT": settings.output_format}, state=self.state
        )

    def hydrate(self) -> Optional[HydrationResult]:
        """Load stored documents before traffic starts, when storage is set."""
        if not self._settings.storage_url:
            logger.info("No storage URL configured; starting with an empty cache")
            return None
        client = BridgeStorageClient(
            self._settings.storage_url,
            token=self._settings.storage_token,
            timeout=self._settings.storage_timeout,
        )
        return hydrate(self.state, client, self._settings.output_format)

    def run(self) -> int:
        self.hydrate()
        logger.info(
            "Serving catalog cache on %s:%d",
            self._settings.host,
            self._settings.port,
        )
        self.app.run(
            host=self._settings.host,
            port=self._settings.port,
            threaded=True,
        )
        return 0


def build_arg_parser() -> argparse.ArgumentParser:
    argument_parser = argparse.ArgumentParser(
        description=(
            "Model catalog cache: serve catalog documents and model cards "
            "from memory."
        )
    )
    argument_parser.add_argument("--host", help="Interface to bind.")
    argument_parser.add_argument("--port", type=int, help="Port to listen on.")
    argument_parser.add_argument(
        "--format",
        dest="output_format",
        help="Output format segment used when building catalog URIs.",
    )
    argument_parser.add_argument(
        "--storage-url",
        help="Base URL of the storage service used for startup hydration.",
    )
    return argument_parser


def resolve_settings(parsed_args: argparse.Namespace) -> Settings:
    """Apply command-line overrides on top of the environment settings."""
    settings = load_settings()
    overrides = {
        name: value
        for name, value in (
            ("host", parsed_args.host),
            ("port", parsed_args.port),
            ("output_format", parsed_args.output_format),
            ("storage_url", parsed_args.storage_url),
        )
        if value is not None
    }
    if not overrides:
        return settings
    return dataclasses.replace(settings, **overrides)


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    argument_parser = build_arg_parser()
    parsed_args = argument_parser.parse_args(argv)

    try:
        settings = resolve_settings(parsed_args)
    except ValueError as error:
        logger.error("Invalid configuration: %s", error)
        print(f"Invalid configuration: {error}", file=sys.stderr)
        return 2

    return CatalogCacheApp(settings).run()


if __name__ == "__main__":
    sys.exit(main())
