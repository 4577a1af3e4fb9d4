"""Configuration management for keen_query.

Handles credential storage, resolution, and account management.
Configuration is stored in TOML format at ~/.keen/config.toml by default.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import BaseModel, ConfigDict, SecretStr

from keen_query.exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    ConfigError,
)

ENV_PROJECT_ID = "KEEN_PROJECT_ID"
ENV_READ_KEY = "KEEN_READ_KEY"
ENV_CONFIG_PATH = "KEEN_CONFIG_PATH"


class Credentials(BaseModel):
    """Immutable credentials for the Keen IO query API.

    Fields are deliberately not checked for emptiness: an empty key or
    project id yields a well-formed URL that the API rejects, and the
    caller sees that in the response status.
    """

    model_config = ConfigDict(frozen=True)

    project_id: str
    """Keen project identifier."""

    api_key: SecretStr
    """Read (or master) key sent as the ``api_key`` query parameter."""

    def __repr__(self) -> str:
        """Return string representation with redacted key."""
        return f"Credentials(project_id={self.project_id!r}, api_key=***)"

    def __str__(self) -> str:
        """Return string representation with redacted key."""
        return self.__repr__()


@dataclass(frozen=True)
class AccountInfo:
    """Information about a configured account (without the key)."""

    name: str
    """Account display name."""

    project_id: str
    """Keen project identifier."""

    is_default: bool
    """Whether this is the default account."""


class ConfigManager:
    """Manages Keen project credentials.

    Config file location (in priority order):
    1. Explicit config_path parameter
    2. KEEN_CONFIG_PATH environment variable
    3. Default: ~/.keen/config.toml
    """

    DEFAULT_CONFIG_PATH = Path.home() / ".keen" / "config.toml"

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize ConfigManager.

        Args:
            config_path: Override config file location.
                         Default: ~/.keen/config.toml
        """
        if config_path is not None:
            self._config_path = config_path
        elif ENV_CONFIG_PATH in os.environ:
            self._config_path = Path(os.environ[ENV_CONFIG_PATH])
        else:
            self._config_path = self.DEFAULT_CONFIG_PATH

    @property
    def config_path(self) -> Path:
        """Return the config file path."""
        return self._config_path

    def _read_config(self) -> dict[str, Any]:
        """Read and parse the config file.

        Returns:
            Parsed config dictionary, or empty dict if file doesn't exist.
        """
        if not self._config_path.exists():
            return {}

        try:
            with self._config_path.open("rb") as f:
                return dict(tomllib.load(f))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(
                f"Invalid TOML in config file: {e}",
                details={"path": str(self._config_path)},
            ) from e

    def _write_config(self, config: dict[str, Any]) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        with self._config_path.open("wb") as f:
            tomli_w.dump(config, f)

    def resolve_credentials(self, account: str | None = None) -> Credentials:
        """Resolve credentials using priority order.

        Resolution order:
        1. Environment variables (KEEN_PROJECT_ID, KEEN_READ_KEY)
        2. Named account from config file (if account parameter provided)
        3. Default account from config file
        4. First account in the config file

        Args:
            account: Optional account name to use instead of default.

        Returns:
            Immutable Credentials object.

        Raises:
            ConfigError: If no credentials can be resolved.
            AccountNotFoundError: If named account doesn't exist.
        """
        env_creds = self._resolve_from_env()
        if env_creds is not None:
            return env_creds

        config = self._read_config()
        accounts = config.get("accounts", {})

        if not accounts:
            raise ConfigError(
                "No credentials configured. "
                f"Set {ENV_PROJECT_ID} and {ENV_READ_KEY} environment variables, "
                "or add an account with add_account()."
            )

        account_name: str
        if account is not None:
            account_name = account
        else:
            default_account = config.get("default")
            if default_account is not None and isinstance(default_account, str):
                account_name = default_account
            else:
                account_name = next(iter(accounts.keys()))

        if account_name not in accounts:
            raise AccountNotFoundError(
                account_name,
                available_accounts=list(accounts.keys()),
            )

        account_data = accounts[account_name]
        try:
            return Credentials(
                project_id=account_data["project_id"],
                api_key=SecretStr(account_data["api_key"]),
            )
        except KeyError as e:
            raise ConfigError(
                f"Account '{account_name}' is missing field {e.args[0]!r}",
                details={"path": str(self._config_path), "account": account_name},
            ) from e

    def _resolve_from_env(self) -> Credentials | None:
        """Attempt to resolve credentials from environment variables.

        Returns:
            Credentials if both env vars are set, None otherwise.
        """
        project_id = os.environ.get(ENV_PROJECT_ID)
        api_key = os.environ.get(ENV_READ_KEY)

        if project_id and api_key:
            return Credentials(project_id=project_id, api_key=SecretStr(api_key))
        return None

    def list_accounts(self) -> list[AccountInfo]:
        """List all configured accounts.

        Returns:
            List of AccountInfo objects (keys not included).
        """
        config = self._read_config()
        accounts = config.get("accounts", {})
        default_name = config.get("default")

        return [
            AccountInfo(
                name=name,
                project_id=data.get("project_id", ""),
                is_default=(name == default_name),
            )
            for name, data in accounts.items()
        ]

    def add_account(self, name: str, project_id: str, api_key: str) -> None:
        """Add a new account configuration.

        The first account added becomes the default.

        Args:
            name: Display name for the account.
            project_id: Keen project id.
            api_key: Read key for the project.

        Raises:
            AccountExistsError: If account name already exists.
        """
        config = self._read_config()
        accounts = config.setdefault("accounts", {})

        if name in accounts:
            raise AccountExistsError(name)

        accounts[name] = {"project_id": project_id, "api_key": api_key}

        if "default" not in config:
            config["default"] = name

        self._write_config(config)

    def remove_account(self, name: str) -> None:
        """Remove an account configuration.

        Args:
            name: Account name to remove.

        Raises:
            AccountNotFoundError: If account doesn't exist.
        """
        config = self._read_config()
        accounts = config.get("accounts", {})

        if name not in accounts:
            raise AccountNotFoundError(name, available_accounts=list(accounts.keys()))

        del accounts[name]

        # Removing the default promotes the next account, if any
        if config.get("default") == name:
            if accounts:
                config["default"] = next(iter(accounts.keys()))
            else:
                config.pop("default", None)

        self._write_config(config)

    def set_default(self, name: str) -> None:
        """Set the default account.

        Args:
            name: Account name to set as default.

        Raises:
            AccountNotFoundError: If account doesn't exist.
        """
        config = self._read_config()
        accounts = config.get("accounts", {})

        if name not in accounts:
            raise AccountNotFoundError(name, available_accounts=list(accounts.keys()))

        config["default"] = name
        self._write_config(config)

    def get_account(self, name: str) -> AccountInfo:
        """Get information about a specific account.

        Raises:
            AccountNotFoundError: If account doesn't exist.
        """
        config = self._read_config()
        accounts = config.get("accounts", {})

        if name not in accounts:
            raise AccountNotFoundError(name, available_accounts=list(accounts.keys()))

        data = accounts[name]
        return AccountInfo(
            name=name,
            project_id=data.get("project_id", ""),
            is_default=(name == config.get("default")),
        )
