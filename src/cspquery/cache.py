"""JSON file cache for the CSP slug index.

The whole index is one JSON object (slug → URL) in a single file. Every
rebuild clears the file and writes it again from scratch; there is no
expiry and no partial update.

Reads degrade gracefully: a missing file is a cache miss and a corrupt file
is logged and treated as a miss, so interactive completion never fails.
Writes are not swallowed: ``clear`` and ``save`` raise ``CacheWriteError``
and the handler decides how to report it.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import structlog

from cspquery.errors import CacheWriteError

if TYPE_CHECKING:
    from pathlib import Path

log = structlog.get_logger()


class JsonFileCacheStore:
    """File-backed index cache implementing CacheStoreProtocol."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, str] | None:
        """Read the cached index. Returns ``None`` on a miss or read failure."""
        if not self._path.is_file():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            log.warning("cache_read_error", path=str(self._path), exc_info=True)
            return None
        if not isinstance(data, dict):
            log.warning("cache_read_error", path=str(self._path), reason="not_an_object")
            return None
        return {str(slug): str(url) for slug, url in data.items()}

    def save(self, index: dict[str, str]) -> None:
        """Write the index, replacing whatever the file held before."""
        payload = json.dumps(index, indent=4)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            raise CacheWriteError(
                f"Could not write index cache {self._path}: {exc}",
                path=str(self._path),
            ) from exc
        log.debug("cache_written", path=str(self._path), entries=len(index))

    def clear(self) -> None:
        """Delete the cache file. A missing file is not an error."""
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            raise CacheWriteError(
                f"Could not delete index cache {self._path}: {exc}",
                path=str(self._path),
            ) from exc
