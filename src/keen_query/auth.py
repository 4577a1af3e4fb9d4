"""Public authentication and configuration module.

Re-exports the credential management classes for public use.

Re-exported classes:
    ConfigManager: TOML-based account management (~/.keen/config.toml).
    Credentials: Immutable credential container with SecretStr for the key.
    AccountInfo: Named account metadata (name, project_id, is_default).

Example usage:
    from keen_query import KeenClient
    from keen_query.auth import ConfigManager

    config = ConfigManager()
    config.add_account("prod", project_id="5f...", api_key="...")
    client = KeenClient.from_credentials(config.resolve_credentials("prod"))
"""

from keen_query._internal.config import (
    AccountInfo,
    ConfigManager,
    Credentials,
)

__all__ = [
    "ConfigManager",
    "Credentials",
    "AccountInfo",
]
