"""Exception hierarchy for keen_query.

All library exceptions inherit from KeenQueryError, enabling callers to
catch all library errors with a single except clause while still allowing
fine-grained exception handling when needed.

HTTP status codes are never turned into exceptions: a 4xx/5xx response is
a successful round trip and is handed back to the caller as-is. Only
transport failures (DNS, connect, timeout) raise.
"""

from __future__ import annotations

from typing import Any


class KeenQueryError(Exception):
    """Base exception for all keen_query errors.

    All library exceptions inherit from this class, allowing callers to:
    - Catch all library errors: except KeenQueryError
    - Handle specific errors: except KeenTransportError
    - Serialize errors: error.to_dict()
    """

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code for programmatic handling.
            details: Additional structured data about the error.
        """
        super().__init__(message)
        self._message = message
        self._code = code
        self._details = details or {}

    @property
    def code(self) -> str:
        """Machine-readable error code."""
        return self._code

    @property
    def message(self) -> str:
        """Human-readable error message."""
        return self._message

    @property
    def details(self) -> dict[str, Any]:
        """Additional structured error data."""
        return self._details

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/JSON output.

        Returns:
            Dictionary with keys: code, message, details.
            All values are JSON-serializable.
        """
        return {
            "code": self._code,
            "message": self._message,
            "details": self._details,
        }

    def __str__(self) -> str:
        """Return human-readable error message."""
        return self._message

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return (
            f"{self.__class__.__name__}(message={self._message!r}, code={self._code!r})"
        )


# Transport Exceptions


class KeenTransportError(KeenQueryError):
    """The HTTP request never produced a response.

    Raised by KeenQuery.data() when the underlying HTTP client fails with a
    DNS, connection, or timeout error. The original httpx exception is
    chained as ``__cause__``. The request URL in ``details`` has the API key
    redacted.

    Example:
        ```python
        try:
            response = query.data()
        except KeenTransportError as e:
            print(f"Request failed: {e.message}")
            print(f"URL: {e.request_url}")
            print(f"Timed out: {e.is_timeout}")
        ```
    """

    def __init__(
        self,
        message: str,
        *,
        request_url: str | None = None,
        timeout: float | None = None,
        is_timeout: bool = False,
    ) -> None:
        """Initialize KeenTransportError.

        Args:
            message: Human-readable error message.
            request_url: Request URL with the API key redacted.
            timeout: Timeout in seconds that was in effect, if any.
            is_timeout: Whether the failure was a timeout.
        """
        self._request_url = request_url
        self._timeout = timeout
        self._is_timeout = is_timeout

        details: dict[str, Any] = {"is_timeout": is_timeout}
        if request_url is not None:
            details["request_url"] = request_url
        if timeout is not None:
            details["timeout"] = timeout

        super().__init__(
            message,
            code="TIMEOUT" if is_timeout else "TRANSPORT_ERROR",
            details=details,
        )

    @property
    def request_url(self) -> str | None:
        """Request URL with the API key redacted."""
        return self._request_url

    @property
    def timeout(self) -> float | None:
        """Timeout in seconds that was in effect, or None if unbounded."""
        return self._timeout

    @property
    def is_timeout(self) -> bool:
        """Whether the request failed because the timeout elapsed."""
        return self._is_timeout


# Configuration Exceptions


class ConfigError(KeenQueryError):
    """Base for configuration-related errors.

    Raised when there's a problem with the configuration file, environment
    variables, or credential resolution.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ConfigError.

        Args:
            message: Human-readable error message.
            details: Additional structured data.
        """
        super().__init__(message, code="CONFIG_ERROR", details=details)


class AccountNotFoundError(ConfigError):
    """Named account does not exist in configuration.

    The available_accounts property lists valid account names to help users.
    """

    def __init__(
        self,
        account_name: str,
        available_accounts: list[str] | None = None,
    ) -> None:
        """Initialize AccountNotFoundError.

        Args:
            account_name: The requested account name that wasn't found.
            available_accounts: List of valid account names for suggestions.
        """
        available = available_accounts or []
        if available:
            available_str = ", ".join(f"'{a}'" for a in available)
            message = (
                f"Account '{account_name}' not found. "
                f"Available accounts: {available_str}"
            )
        else:
            message = f"Account '{account_name}' not found. No accounts configured."

        details = {
            "account_name": account_name,
            "available_accounts": available,
        }
        super().__init__(message, details=details)
        self._code = "ACCOUNT_NOT_FOUND"

    @property
    def account_name(self) -> str:
        """The requested account name that wasn't found."""
        return str(self._details.get("account_name", ""))

    @property
    def available_accounts(self) -> list[str]:
        """List of valid account names."""
        accounts = self._details.get("available_accounts")
        return accounts if isinstance(accounts, list) else []


class AccountExistsError(ConfigError):
    """Account name already exists in configuration."""

    def __init__(self, account_name: str) -> None:
        """Initialize AccountExistsError.

        Args:
            account_name: The conflicting account name.
        """
        message = f"Account '{account_name}' already exists."
        details = {"account_name": account_name}
        super().__init__(message, details=details)
        self._code = "ACCOUNT_EXISTS"

    @property
    def account_name(self) -> str:
        """The conflicting account name."""
        return str(self._details.get("account_name", ""))
