"""Shared fixtures for palette_extractor tests."""

from __future__ import annotations

import pytest

from palette_extractor.settings import get_settings

from .helpers import make_buffer


@pytest.fixture
def buffer_of():
    return make_buffer


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "LOG_LEVEL",
        "PALETTE_MAX_COLORS",
        "PALETTE_FORMAT",
        "PALETTE_MAX_SIZE",
        "PALETTE_SIMILARITY_THRESHOLD",
        "PALETTE_SORT_BY",
        "PALETTE_HTTP_TIMEOUT",
        "PALETTE_USER_AGENT",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
