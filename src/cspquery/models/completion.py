from __future__ import annotations

from pydantic import BaseModel


class CompletionItem(BaseModel):
    """Single completion candidate for a partially typed slug."""

    label: str  # Shown in the completion menu
    value: str  # Inserted on the command line
    hint: str  # Detail URL
