"""Keen IO HTTP transport.

Low-level HTTP client for the Keen query API. Handles:
- Building the per-project queries endpoint
- Lazily creating and closing a pooled httpx.Client
- Issuing streamed GET requests with a per-request timeout
- Escaping `#` and `+` in the query so they reach the server literally
- Turning httpx transport failures into KeenTransportError

Status codes are never interpreted here. This is a private implementation
detail; users should go through KeenClient and KeenQuery.
"""

from __future__ import annotations

import logging
import re
import threading
from typing import TYPE_CHECKING

import httpx

from keen_query.exceptions import KeenQueryError, KeenTransportError

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

API_URL = "https://api.keen.io"
API_VERSION = "3.0"

_API_KEY_PATTERN = re.compile(r"(api_key=)[^&]*")


def redact_api_key(url: str) -> str:
    """Mask the ``api_key`` query parameter for logs and error details.

    Example:
        ```python
        redact_api_key("https://x/count?api_key=SECRET&event_collection=c")
        # 'https://x/count?api_key=***&event_collection=c'
        ```
    """
    return _API_KEY_PATTERN.sub(r"\1***", url)


def escape_query_delimiters(url: str) -> str:
    """Percent-encode ``#`` and ``+`` in the query string of ``url``.

    Unescaped, ``#`` would start a fragment and cut off the rest of the
    query, and ``+`` would reach the server as a space. Everything else is
    left for httpx to encode.

    Example:
        ```python
        escape_query_delimiters('https://x/count?v="a#b"&t=00+00:00')
        # 'https://x/count?v="a%23b"&t=00%2B00:00'
        ```
    """
    base, sep, query = url.partition("?")
    return base + sep + query.replace("#", "%23").replace("+", "%2B")


class KeenAPIClient:
    """Low-level HTTP client for the Keen query API.

    Most users won't use this directly; KeenClient owns one and KeenQuery
    sends through it.

    Example:
        ```python
        with KeenAPIClient() as api:
            response = api.get(url, timeout=10.0)
            try:
                print(response.status_code, response.read())
            finally:
                response.close()
        ```
    """

    def __init__(
        self,
        *,
        base_url: str = API_URL,
        _transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the API client.

        Args:
            base_url: Scheme and host of the API, without a trailing slash.
            _transport: Internal parameter for testing with MockTransport.
        """
        self._base_url = base_url.rstrip("/")
        self._client: httpx.Client | None = None
        self._transport = _transport
        self._lock = threading.Lock()

    def queries_url(self, project_id: str) -> str:
        """Build the queries endpoint prefix for a project.

        Returns:
            URL ending in ``/queries/``, ready for an analysis segment.
        """
        return f"{self._base_url}/{API_VERSION}/projects/{project_id}/queries/"

    def _ensure_client(self) -> httpx.Client:
        """Ensure HTTP client is initialized.

        The client carries no default timeout; each request sets its own.
        Safe to call from several threads at once: only one client is built.
        """
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(timeout=None, transport=self._transport)
            return self._client

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None

    def __enter__(self) -> KeenAPIClient:
        """Enter context manager."""
        self._ensure_client()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager, closing client."""
        self.close()

    def get(self, url: str, *, timeout: float | None = None) -> httpx.Response:
        """Issue a GET and return the response without reading its body.

        The response is streamed: the caller owns it and must call
        ``read()``, iterate it, or ``close()`` it. Any HTTP status, including
        4xx and 5xx, is returned as-is.

        Args:
            url: Full request URL, query string included.
            timeout: Connect/read/write/pool timeout in seconds. None waits
                indefinitely.

        Returns:
            The streamed httpx.Response.

        Raises:
            KeenTransportError: DNS, connection, or timeout failure.
            KeenQueryError: If the URL cannot be parsed.
        """
        client = self._ensure_client()
        safe_url = redact_api_key(url)

        logger.debug("GET %s (timeout=%s)", safe_url, timeout)

        try:
            request = client.build_request(
                "GET", escape_query_delimiters(url), timeout=timeout
            )
        except httpx.InvalidURL as e:
            raise KeenQueryError(
                f"Invalid request URL: {e}",
                code="INVALID_URL",
                details={"request_url": safe_url},
            ) from e

        try:
            response = client.send(request, stream=True)
        except httpx.TransportError as e:
            is_timeout = isinstance(e, httpx.TimeoutException)
            logger.warning(
                "Request to %s failed: %s: %s", safe_url, type(e).__name__, e
            )
            raise KeenTransportError(
                f"{'Timeout' if is_timeout else 'Transport error'}: {e}",
                request_url=safe_url,
                timeout=timeout,
                is_timeout=is_timeout,
            ) from e

        logger.debug("GET %s -> %d", safe_url, response.status_code)
        return response
