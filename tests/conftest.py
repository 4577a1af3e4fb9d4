"""Shared fixtures for keen_query tests."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Generator
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

import httpx
import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "default",
    max_examples=100,
    verbosity=Verbosity.normal,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)

settings.register_profile(
    "ci",
    max_examples=200,
    verbosity=Verbosity.normal,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
    derandomize=True,  # Reproducible in CI
)

settings.register_profile(
    "dev",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)

# Load profile from HYPOTHESIS_PROFILE env var, default to "default"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))

if TYPE_CHECKING:
    from keen_query._internal.config import ConfigManager
    from keen_query.client import KeenClient


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_path(temp_dir: Path) -> Path:
    """Return path for a temporary config file."""
    return temp_dir / "config.toml"


@pytest.fixture
def config_manager(config_path: Path) -> ConfigManager:
    """Create a ConfigManager with a temporary config file."""
    from keen_query._internal.config import ConfigManager

    return ConfigManager(config_path=config_path)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove Keen environment variables for the duration of a test."""
    for name in ("KEEN_PROJECT_ID", "KEEN_READ_KEY", "KEEN_CONFIG_PATH"):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def keen_client() -> Generator[KeenClient, None, None]:
    """Client with the credentials used in expected URLs."""
    from keen_query.client import KeenClient

    client = KeenClient("APIKEY", "PROJ")
    yield client
    client.close()


@pytest.fixture
def t0() -> datetime:
    return datetime(2023, 1, 1, tzinfo=UTC)


@pytest.fixture
def t1() -> datetime:
    return datetime(2023, 1, 3, tzinfo=UTC)


@pytest.fixture
def mock_client_factory() -> Callable[
    [Callable[[httpx.Request], httpx.Response]], KeenClient
]:
    """Factory for creating clients backed by httpx.MockTransport.

    Usage:
        def test_something(mock_client_factory):
            def handler(request):
                return httpx.Response(200, json={"result": 1})

            with mock_client_factory(handler) as client:
                response = client.query(Metric.count(), "c", "today").data()
    """
    from keen_query.client import KeenClient

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
    ) -> KeenClient:
        transport = httpx.MockTransport(handler)
        return KeenClient("APIKEY", "PROJ", _transport=transport)

    return factory


@pytest.fixture
def success_handler() -> Callable[[httpx.Request], httpx.Response]:
    """Handler that returns 200 with a Keen-style result body."""

    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"result": 42})

    return handler
