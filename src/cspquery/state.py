"""Application state container.

AppState is created once per CLI invocation and passed to every handler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cspquery.config import Settings
    from cspquery.protocols import CacheStoreProtocol, FetcherProtocol


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every handler."""

    settings: Settings
    store: CacheStoreProtocol
    fetcher: FetcherProtocol | None = None
