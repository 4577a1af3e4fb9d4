"""Internal implementation modules. Not part of the public API."""

from keen_query._internal.api_client import KeenAPIClient
from keen_query._internal.config import ConfigManager, Credentials

__all__ = ["ConfigManager", "Credentials", "KeenAPIClient"]
