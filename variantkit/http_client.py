"""HTTP transport with retries on transient failures."""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from variantkit.future import Future, call

_MAX_RETRY_WAIT = 2.0
_RETRY_STATUSES = frozenset({502, 503})


@dataclass(frozen=True)
class HttpClientConfig:
    """Timeouts and retry settings, durations in seconds."""

    connect_timeout: float = 3.0
    connection_keep_alive: float = 30.0
    retry_interval: float = 0.333
    connection_request_timeout: float = 1.0
    max_retries: int = 5


def should_retry(response: Any, error: BaseException | None) -> bool:
    """Return whether a request should be retried after this outcome."""
    return error is not None or response.status_code in _RETRY_STATUSES


class DefaultHttpClient:
    """Sends requests in the background, returning futures of the responses."""

    def __init__(self, config: HttpClientConfig | None = None) -> None:
        self._config = config or HttpClientConfig()
        self._session = requests.Session()
        self._session.headers["Accept-Encoding"] = "identity"
        adapter = HTTPAdapter(pool_maxsize=200)
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

    def get(
        self, url: str, query: Mapping[str, str] | None, headers: Mapping[str, str] | None
    ) -> Future:
        """Send a GET request."""
        return call(lambda: self._send("GET", url, query, headers))

    def put(
        self,
        url: str,
        query: Mapping[str, str] | None,
        headers: Mapping[str, str] | None,
        body: bytes | None,
    ) -> Future:
        """Send a PUT request with ``body``."""
        return call(lambda: self._send("PUT", url, query, headers, body))

    def post(
        self,
        url: str,
        query: Mapping[str, str] | None,
        headers: Mapping[str, str] | None,
        body: bytes | None,
    ) -> Future:
        """Send a POST request with ``body``."""
        return call(lambda: self._send("POST", url, query, headers, body))

    def _backoff(self, attempt: int) -> float:
        return min(self._config.retry_interval * (2**attempt), _MAX_RETRY_WAIT)

    def _send(
        self,
        method: str,
        url: str,
        query: Mapping[str, str] | None,
        headers: Mapping[str, str] | None,
        body: bytes | None = None,
    ) -> requests.Response:
        timeout = (self._config.connect_timeout, self._config.connection_request_timeout)
        attempt = 0
        while True:
            response: requests.Response | None = None
            error: requests.RequestException | None = None
            try:
                response = self._session.request(
                    method,
                    url,
                    params=dict(query) if query else None,
                    headers=dict(headers) if headers else None,
                    data=body,
                    timeout=timeout,
                )
            except requests.RequestException as exc:
                error = exc
            if attempt >= self._config.max_retries or not should_retry(response, error):
                if error is not None:
                    raise error
                return response
            time.sleep(self._backoff(attempt))
            attempt += 1