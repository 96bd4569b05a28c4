"""Client for the bridge storage REST service used during hydration."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional, TypeVar

import requests  # type: ignore[import]

DEFAULT_TIMEOUT_SECONDS = 30.0
LIST_PATH = "/list"
FETCH_PATH = "/fetch"

T = TypeVar("T")


class StorageError(RuntimeError):
    """Raised when the backing storage service cannot satisfy a call."""


class StorageUnavailableError(StorageError):
    """Raised when the storage service cannot be reached."""


class StorageResponseError(StorageError):
    """Raised when the storage service answers with a non-success status."""

    def __init__(self, operation: str, status_code: int, text: str) -> None:
        super().__init__(
            f"bad response code from storage {operation} "
            f"{status_code}, {text}"
        )
        self.status_code = status_code
        self.text = text


class BridgeStorageClient:
    """Minimal wrapper around the storage service's list and fetch APIs."""

    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._session = session or requests.Session()
        self._timeout = timeout
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    def list_model_keys(self) -> List[str]:
        """Return the ``model_version`` keys of every stored document."""

        def _operation() -> List[str]:
            response = self._get(LIST_PATH)
            if response.status_code != 200:
                raise StorageResponseError(
                    "list models", response.status_code, response.text
                )
            try:
                payload = response.json()
            except ValueError as error:
                raise StorageError(
                    "storage list models returned invalid JSON"
                ) from error
            keys = payload.get("keys") if isinstance(payload, dict) else payload
            if not isinstance(keys, list):
                raise StorageError(
                    "storage list models response has no 'keys' array"
                )
            return [str(key) for key in keys]

        return self._timed(_operation, name="storage.list_model_keys")

    def fetch_model(self, key: str) -> bytes:
        """Return the raw catalog document stored under ``key``."""

        def _operation() -> bytes:
            response = self._get(FETCH_PATH, params={"key": key})
            if response.status_code != 200:
                raise StorageResponseError(
                    f"fetch model {key} is", response.status_code, response.text
                )
            return response.content

        return self._timed(_operation, name="storage.fetch_model")

    def _get(
        self, path: str, *, params: Optional[Dict[str, str]] = None
    ) -> Any:
        url = f"{self._base_url}{path}"
        try:
            return self._session.get(
                url,
                headers=self._build_headers(),
                params=params,
                timeout=self._timeout,
            )
        except requests.RequestException as error:
            raise StorageUnavailableError(
                f"storage request to {url} failed: {error}"
            ) from error

    def _timed(self, operation: Callable[[], T], *, name: str) -> T:
        started_at = time.perf_counter()
        try:
            return operation()
        finally:
            elapsed_ms = (time.perf_counter() - started_at) * 1000.0
            if self._logger.isEnabledFor(logging.DEBUG):
                self._logger.debug(
                    "Operation %s completed in %.2f ms",
                    name,
                    elapsed_ms,
                )

    def _build_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers
