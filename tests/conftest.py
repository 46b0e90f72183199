"""Shared test fixtures for the cspquery test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import structlog

from cspquery.config import Settings

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

INDEX_HTML = """
<html><body>
<nav><a href="../overview" data-linktype="relative-path">Overview</a></nav>
<ul>
<li><a href="policy-csp-abovelock" data-linktype="relative-path">AboveLock</a></li>
<li><a href="policy-csp-accounts#accounts-allowaddingnonmicrosoftaccountsmanually"
  data-linktype="relative-path">Accounts/AllowAddingNonMicrosoftAccountsManually</a></li>
<li><a href="policy-csp-abovelock#abovelock-allowtoasts">AboveLock/AllowToasts</a></li>
<li><a href="policy-configuration-service-provider#policy-csp-admx">ADMX</a></li>
<li><a href="https://learn.microsoft.com/en-us/windows/client-management/mdm/policy-csp-bits">BITS</a></li>
<li><a href='#policy-csp-bluetooth'>Bluetooth</a></li>
</ul>
</body></html>
"""


def _support_table() -> str:
    return """
<table>
<thead>
<tr>
<th>Edition</th>
<th>Windows 10</th>
<th>Windows 11</th>
</tr>
</thead>
<tbody>
<tr>
<td>Home</td>
<td>No</td>
<td>No</td>
</tr>
<tr>
<td>Pro</td>
<td>Yes, starting in Windows 10, version 1607</td>
<td>Yes</td>
</tr>
<tr>
<td>Windows SE</td>
<td>No</td>
<td>Yes</td>
</tr>
<tr>
<td>Business</td>
<td>Yes</td>
<td>Yes</td>
</tr>
<tr>
<td>Enterprise</td>
<td>Yes</td>
<td>Yes</td>
</tr>
<tr>
<td>Education</td>
<td>Yes</td>
<td>Yes</td>
</tr>
</tbody>
</table>
"""


CSP_PAGE_HTML = f"""
<html><body>
<h1 id="policy-csp---abovelock">Policy CSP - AboveLock</h1>
<dl>
<dd>
<a href="#abovelock-allowcortanaabovelock" data-linktype="self-bookmark">AboveLock/AllowCortanaAboveLock</a>
</dd>
<dd>
<a href="#abovelock-allowtoasts" data-linktype="self-bookmark">AboveLock/AllowToasts</a>
</dd>
</dl>
<h2 id="abovelock-allowcortanaabovelock">AllowCortanaAboveLock</h2>
{_support_table()}
<h2 id="abovelock-allowtoasts">AllowToasts</h2>
{_support_table()}
</body></html>
"""


class InMemoryCacheStore:
    """CacheStoreProtocol fake backed by a dict."""

    def __init__(self, index: dict[str, str] | None = None) -> None:
        self.index = dict(index) if index is not None else None
        self.clear_calls = 0

    def load(self) -> dict[str, str] | None:
        return dict(self.index) if self.index is not None else None

    def save(self, index: dict[str, str]) -> None:
        self.index = dict(index)

    def clear(self) -> None:
        self.clear_calls += 1
        self.index = None


@pytest.fixture()
def memory_store() -> InMemoryCacheStore:
    return InMemoryCacheStore()


@pytest.fixture()
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "policiesFound.json"


@pytest.fixture()
def settings(cache_path: Path) -> Settings:
    return Settings(cache={"path": str(cache_path)})


@pytest.fixture()
def index_html() -> str:
    return INDEX_HTML


@pytest.fixture()
def csp_page_html() -> str:
    return CSP_PAGE_HTML


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """CLI commands configure structlog against the runner's stderr; undo it."""
    yield
    structlog.reset_defaults()
