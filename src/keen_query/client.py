"""KeenClient: credentials holder and query factory.

Example:
    ```python
    from keen_query import KeenClient, Metric

    with KeenClient("READ_KEY", "PROJECT_ID", timeout=30) as client:
        query = client.query(Metric.count(), "pageviews", "this_7_days")
        query.group_by("country")
        print(query.url())
        response = query.data()
        try:
            print(response.status_code, response.read())
        finally:
            response.close()
    ```

Credentials from the environment or ~/.keen/config.toml:

    ```python
    client = KeenClient.from_config()
    ```
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

import httpx
from pydantic import SecretStr

from keen_query._internal.api_client import API_URL, KeenAPIClient
from keen_query._internal.config import ConfigManager, Credentials
from keen_query.query import KeenQuery
from keen_query.types import Metric, TimeFrame, coerce_timeframe

if TYPE_CHECKING:
    from types import TracebackType


def _to_seconds(timeout: float | timedelta | None) -> float | None:
    if timeout is None:
        return None
    seconds = (
        timeout.total_seconds() if isinstance(timeout, timedelta) else float(timeout)
    )
    if seconds <= 0:
        raise ValueError(f"timeout must be positive, got {timeout!r}")
    return seconds


class KeenClient:
    """Keen IO client bound to one project.

    Holds the API key, project id and an optional request timeout, and
    creates KeenQuery objects that borrow them. Credentials are not checked;
    empty values simply produce a URL the API will reject.

    The pooled HTTP connection is opened on the first ``data()`` call and
    released by ``close()`` or on leaving a ``with`` block.
    """

    def __init__(
        self,
        api_key: str,
        project_id: str,
        *,
        timeout: float | timedelta | None = None,
        base_url: str = API_URL,
        _transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Create a client.

        Args:
            api_key: Read key sent as the ``api_key`` query parameter.
            project_id: Keen project id.
            timeout: Request timeout for ``data()`` calls. None waits
                indefinitely.
            base_url: API scheme and host.
            _transport: Internal parameter for testing with MockTransport.

        Raises:
            ValueError: If timeout is zero or negative.
        """
        self._credentials = Credentials(
            project_id=project_id, api_key=SecretStr(api_key)
        )
        self._timeout = _to_seconds(timeout)
        self._api = KeenAPIClient(base_url=base_url, _transport=_transport)

    @classmethod
    def from_credentials(
        cls,
        credentials: Credentials,
        *,
        timeout: float | timedelta | None = None,
        base_url: str = API_URL,
        _transport: httpx.BaseTransport | None = None,
    ) -> KeenClient:
        """Create a client from a Credentials object."""
        return cls(
            credentials.api_key.get_secret_value(),
            credentials.project_id,
            timeout=timeout,
            base_url=base_url,
            _transport=_transport,
        )

    @classmethod
    def from_config(
        cls,
        account: str | None = None,
        *,
        timeout: float | timedelta | None = None,
        _config_manager: ConfigManager | None = None,
        _transport: httpx.BaseTransport | None = None,
    ) -> KeenClient:
        """Create a client from resolved credentials.

        Resolution order:
        1. Environment variables (KEEN_PROJECT_ID, KEEN_READ_KEY)
        2. Named account from config file (if account specified)
        3. Default account from config file

        Raises:
            ConfigError: If no credentials can be resolved.
            AccountNotFoundError: If the named account doesn't exist.
        """
        config = _config_manager or ConfigManager()
        credentials = config.resolve_credentials(account)
        return cls.from_credentials(credentials, timeout=timeout, _transport=_transport)

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def project_id(self) -> str:
        return self._credentials.project_id

    @property
    def timeout(self) -> float | None:
        """Request timeout in seconds, or None if unbounded."""
        return self._timeout

    @property
    def queries_url(self) -> str:
        """Endpoint prefix every query URL starts with."""
        return self._api.queries_url(self._credentials.project_id)

    def set_timeout(self, timeout: float | timedelta | None) -> None:
        """Set the timeout used by subsequent ``data()`` calls.

        Requests already in flight keep the timeout they started with.

        Args:
            timeout: Seconds or a timedelta. None removes the timeout.

        Raises:
            ValueError: If timeout is zero or negative.
        """
        self._timeout = _to_seconds(timeout)

    def query(
        self,
        metric: Metric,
        collection: str,
        timeframe: TimeFrame | str,
    ) -> KeenQuery:
        """Start a new query against this client's project.

        Args:
            metric: Analysis to run.
            collection: Event collection name.
            timeframe: Relative or absolute timeframe. A plain string is
                taken as a relative descriptor such as ``"this_2_days"``.

        Returns:
            KeenQuery with no group-by, filters, interval, or max_age.
        """
        return KeenQuery(self, metric, collection, coerce_timeframe(timeframe))

    def _get(self, url: str) -> httpx.Response:
        return self._api.get(url, timeout=self._timeout)

    def close(self) -> None:
        """Release the pooled HTTP connection."""
        self._api.close()

    def __enter__(self) -> KeenClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"KeenClient(project_id={self.project_id!r}, api_key=***, "
            f"timeout={self._timeout!r})"
        )
