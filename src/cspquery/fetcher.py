"""HTTP documentation fetcher.

All network I/O goes through a single Fetcher instance per invocation. The
Fetcher receives an httpx.Client via constructor injection; the CLI owns the
client lifecycle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from cspquery.errors import ErrorCode, FetchError

if TYPE_CHECKING:
    from cspquery.config import FetcherSettings

log = structlog.get_logger()


def build_http_client(settings: FetcherSettings | None = None) -> httpx.Client:
    """Create the shared httpx client. Called once per invocation."""
    timeout = settings.timeout_seconds if settings is not None else 30.0
    return httpx.Client(
        follow_redirects=True,
        timeout=httpx.Timeout(timeout),
    )


class Fetcher:
    """Plain GET fetcher. One request at a time, no retries."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def fetch(self, url: str) -> str:
        """Fetch a URL and return the response text.

        Raises FetchError on network errors and non-2xx responses. The error
        carries the attempted URL and, when a response arrived, its status.
        """
        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            raise FetchError(
                code=ErrorCode.PAGE_FETCH_FAILED,
                message=f"Network error fetching {url}: {exc}",
                suggestion="learn.microsoft.com may be temporarily unreachable.",
                url=url,
            ) from exc

        if not response.is_success:
            if response.status_code == 404:
                raise FetchError(
                    code=ErrorCode.PAGE_NOT_FOUND,
                    message=f"HTTP 404 fetching {url}",
                    suggestion="Check the CSP name; run 'cspquery query --display-all' to list them.",
                    url=url,
                    status_code=404,
                )
            raise FetchError(
                code=ErrorCode.PAGE_FETCH_FAILED,
                message=f"HTTP {response.status_code} fetching {url}",
                suggestion="The documentation site may be temporarily unavailable.",
                url=url,
                status_code=response.status_code,
            )

        log.info(
            "fetch_complete",
            url=url,
            status_code=response.status_code,
            content_length=len(response.text),
        )
        return response.text
