"""Shared fixtures for pubsentinel tests (no network required)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def version_source():
    """Version source returning versions from a dict; unknown names give ""."""
    versions: dict[str, str] = {}
    source = MagicMock()
    source.versions = versions

    async def _latest(name: str) -> str:
        return versions.get(name, "")

    source.get_latest_package_version = AsyncMock(side_effect=_latest)
    return source


@pytest.fixture
def manifest():
    m = MagicMock()
    m.get_pubspec = AsyncMock(return_value=None)
    m.update_pubspec_dependency = AsyncMock(return_value=True)
    return m


@pytest.fixture
def open_external():
    return MagicMock()
