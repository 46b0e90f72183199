from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

NO_POLICIES = "No Policies"


class SupportRow(BaseModel):
    """One record of a CSP page's edition support table."""

    model_config = ConfigDict(populate_by_name=True)

    policy: str = Field(alias="Policy")
    edition: str = Field(alias="Edition")
    windows10: str = Field(alias="Windows10")
    windows11: str = Field(alias="Windows11")


class QueryResult(BaseModel):
    """Outcome of one query invocation. Failures are carried, not raised."""

    rows: list[SupportRow] = []
    slugs: list[str] = []
    url: str | None = None  # Detail URL attempted, if any
    errors: list[dict] = []  # CspQueryError.to_dict() payloads

    @property
    def ok(self) -> bool:
        return not self.errors
