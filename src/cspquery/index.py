"""CSP index builder.

Fetches the policy CSP landing page, pulls every hyperlink target out of it
and keeps the fragments that name a policy CSP page. The result is an
ordered slug → URL mapping, written to the cache store on every rebuild.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog

from cspquery.errors import ErrorCode, FetchError

if TYPE_CHECKING:
    from cspquery.config import DocsSettings
    from cspquery.protocols import CacheStoreProtocol, FetcherProtocol

log = structlog.get_logger()

SLUG_PREFIX = "policy-csp"
SLUG_MARKER = "policy-"

_HREF_RE = re.compile(r"""href\s*=\s*(["'])(.*?)\1""", re.IGNORECASE | re.DOTALL)


def extract_links(content: str) -> list[str]:
    """Return every hyperlink target in the page, in document order."""
    return [match.group(2) for match in _HREF_RE.finditer(content)]


def extract_slugs(links: list[str], base_url: str) -> dict[str, str]:
    """Build the ordered slug → URL mapping from hyperlink targets.

    Each link is split at ``#``; any part starting with ``policy-csp`` (and
    therefore containing ``policy-``) is a slug. First occurrence wins.
    """
    index: dict[str, str] = {}
    for link in links:
        for part in link.split("#"):
            if not part.startswith(SLUG_PREFIX):
                continue
            if SLUG_MARKER not in part:
                continue
            if part not in index:
                index[part] = f"{base_url}{part}"
    return index


def build_index(content: str, base_url: str) -> dict[str, str]:
    return extract_slugs(extract_links(content), base_url)


def rebuild_index(
    fetcher: FetcherProtocol,
    store: CacheStoreProtocol,
    docs: DocsSettings,
) -> dict[str, str]:
    """Fetch the index page and overwrite the cache with a fresh mapping.

    The page is fetched before the cache is touched, so a network failure
    leaves the previous cache in place. Raises FetchError or CacheWriteError.
    """
    url = docs.index_url
    try:
        content = fetcher.fetch(url)
    except FetchError as exc:
        raise FetchError(
            code=ErrorCode.INDEX_FETCH_FAILED,
            message=f"Could not fetch the CSP index: {exc.message}",
            suggestion=exc.suggestion,
            url=exc.url,
            status_code=exc.status_code,
        ) from exc

    index = build_index(content, docs.base_url)
    store.clear()
    store.save(index)
    log.info("index_rebuilt", url=url, entries=len(index))
    return index
