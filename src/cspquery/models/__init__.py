from __future__ import annotations

from cspquery.models.completion import CompletionItem
from cspquery.models.support import QueryResult, SupportRow

__all__ = [
    "SupportRow",
    "QueryResult",
    "CompletionItem",
]
