"""Handler for the query command.

Receives AppState, rebuilds the slug index, then either lists the cached
slugs or fetches one CSP page and reshapes its support table. Expected
failures are logged and returned in the QueryResult. Nothing here prints;
cli.py owns all output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from cspquery.errors import CspQueryError, ErrorCode
from cspquery.index import rebuild_index
from cspquery.models.support import QueryResult
from cspquery.parser import reshape

if TYPE_CHECKING:
    from cspquery.state import AppState


def rebuild(state: AppState) -> CspQueryError | None:
    """Rebuild the index cache. Returns the failure instead of raising it."""
    log = structlog.get_logger().bind(handler="rebuild")
    if state.fetcher is None:
        raise RuntimeError("Fetcher not initialized")
    try:
        rebuild_index(state.fetcher, state.store, state.settings.docs)
    except CspQueryError as exc:
        log.warning("handler_error", code=exc.code, message=exc.message)
        return exc
    return None


def handle(slug: str | None, display_all: bool, state: AppState) -> QueryResult:
    """Handle a query call."""
    log = structlog.get_logger().bind(handler="query", slug=slug, display_all=display_all)
    log.info("handler_called")

    result = QueryResult()

    error = rebuild(state)
    if error is not None:
        result.errors.append(error.to_dict())

    if display_all:
        index = state.store.load() or {}
        result.slugs = list(index)
        log.info("handler_finished", slugs=len(result.slugs))
        return result

    if not slug:
        error = CspQueryError(
            code=ErrorCode.INVALID_INPUT,
            message="No CSP name given.",
            suggestion="Pass a CSP name such as 'policy-csp-abovelock', or use --display-all.",
        )
        log.warning("handler_error", code=error.code, message=error.message)
        result.errors.append(error.to_dict())
        return result

    if state.fetcher is None:
        raise RuntimeError("Fetcher not initialized")

    result.url = state.settings.docs.page_url(slug)
    try:
        content = state.fetcher.fetch(result.url)
    except CspQueryError as exc:
        log.warning("handler_error", code=exc.code, message=exc.message, url=result.url)
        result.errors.append(exc.to_dict())
        return result

    result.rows = reshape(content)
    log.info("handler_finished", rows=len(result.rows))
    return result
