"""Protocol interfaces for swappable components.

Handlers and AppState reference these protocols, not the concrete
implementations. Tests use lightweight in-memory implementations.
"""

from __future__ import annotations

from typing import Protocol


class CacheStoreProtocol(Protocol):
    """Interface for the slug → URL index cache."""

    def load(self) -> dict[str, str] | None: ...

    def save(self, index: dict[str, str]) -> None: ...

    def clear(self) -> None: ...


class FetcherProtocol(Protocol):
    """Interface for the HTTP documentation fetcher."""

    def fetch(self, url: str) -> str: ...
