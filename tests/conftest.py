"""Pytest configuration and fixtures."""

from collections.abc import Generator

import pytest

from domainkit.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Read settings from a clean environment for each test."""
    for name in (
        "DOMAINKIT_ENVIRONMENT",
        "DOMAINKIT_LOG_LEVEL",
        "DOMAINKIT_EMIT_LEGACY_KEY_ALIAS",
        "DOMAINKIT_MAX_STRUCTURE_DEPTH",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
