"""Thin adapter for talking to the conversion service over HTTP."""

from typing import Any, Protocol

import requests

from core.utils.config import PhotoDeckSettings, get_settings


class HttpAdapterProtocol(Protocol):
    """Minimal HTTP adapter protocol (client-facing)."""

    def post_json(self, *, payload: dict[str, Any]) -> requests.Response: ...

    def close(self) -> None: ...


class ConversionHttpAdapter:
    """Low-level HTTP operations (mechanical, no error handling).

    This adapter:
    - Wraps a requests session bound to the conversion endpoint
    - Does NOT handle errors (lets them bubble up)
    - The conversion client catches and translates errors
    """

    def __init__(
        self,
        settings: PhotoDeckSettings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        settings = settings or get_settings()

        self._endpoint = settings.conversion_endpoint
        self._timeout = settings.request_timeout
        self._session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def post_json(self, *, payload: dict[str, Any]) -> requests.Response:
        """POST ``payload`` as JSON.
        Raises requests exceptions - caught by the conversion client.
        """
        return self._session.post(
            self._endpoint,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=self._timeout,
        )

    def close(self) -> None:
        self._session.close()
