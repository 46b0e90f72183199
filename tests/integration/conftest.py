"""Integration test fixtures.

Provides an AppState wired with a real Fetcher over an httpx.Client (mocked
with respx in each test) and the in-memory cache store from tests/conftest.py.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from cspquery.fetcher import Fetcher
from cspquery.state import AppState

if TYPE_CHECKING:
    from collections.abc import Iterator

    from cspquery.config import Settings


@pytest.fixture()
def app_state(settings: Settings, memory_store) -> Iterator[AppState]:
    """Full AppState for handler tests."""
    with httpx.Client() as client:
        yield AppState(
            settings=settings,
            store=memory_store,
            fetcher=Fetcher(client),
        )
