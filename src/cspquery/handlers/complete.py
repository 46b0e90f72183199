"""Handler for slug completion.

Read-only: looks at whatever the last rebuild left in the cache store and
never touches the network, so it is cheap enough to run on every keypress.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cspquery.models.completion import CompletionItem

if TYPE_CHECKING:
    from cspquery.protocols import CacheStoreProtocol


def handle(partial: str, store: CacheStoreProtocol) -> list[CompletionItem]:
    """Return cached slugs containing ``partial``, case-insensitively."""
    index = store.load()
    if not index:
        return []

    needle = partial.lower()
    return [
        CompletionItem(label=slug, value=slug, hint=url)
        for slug, url in index.items()
        if needle in slug.lower()
    ]
