"""Command-line entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState for the invocation and close the HTTP client afterwards
- Register commands and slug completion
- Render handler results
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import click
import structlog
from click.shell_completion import CompletionItem, get_completion_class
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

import cspquery.handlers.complete as h_complete
import cspquery.handlers.query as h_query
from cspquery import __version__
from cspquery.cache import JsonFileCacheStore
from cspquery.config import Settings
from cspquery.fetcher import Fetcher, build_http_client
from cspquery.state import AppState

if TYPE_CHECKING:
    from collections.abc import Iterator

    from cspquery.models.support import QueryResult, SupportRow

log = structlog.get_logger()

FINISHED_MESSAGE = "Finished!"
COMPLETE_VAR = "_CSPQUERY_COMPLETE"

_ROW_FIELDS = ("policy", "edition", "windows10", "windows11")


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once per invocation before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr; stdout carries the command output
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@contextmanager
def app_state(settings: Settings) -> Iterator[AppState]:
    """Create the shared resources for one invocation and tear them down."""
    http_client = build_http_client(settings.fetcher)
    try:
        yield AppState(
            settings=settings,
            store=JsonFileCacheStore(Path(settings.cache.path).expanduser()),
            fetcher=Fetcher(http_client),
        )
    finally:
        http_client.close()


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _support_table(rows: list[SupportRow], title: str | None = None) -> Table:
    table = Table(title=title)
    table.add_column("Policy", style="cyan")
    table.add_column("Edition")
    table.add_column("Windows10")
    table.add_column("Windows11")
    for row in rows:
        table.add_row(*(escape(getattr(row, field)) for field in _ROW_FIELDS))
    return table


def _report_errors(result: QueryResult) -> None:
    for payload in result.errors:
        error = payload["error"]
        message = error["message"]
        if error.get("status_code") is not None:
            message = f"{message} (status code {error['status_code']}, url {error['url']})"
        click.echo(f"Error: {message}", err=True)
        if error.get("suggestion"):
            click.echo(f"  {error['suggestion']}", err=True)


def _render(result: QueryResult, *, as_json: bool) -> None:
    if as_json:
        if result.slugs:
            click.echo(json.dumps(result.slugs, indent=2))
        elif result.rows:
            click.echo(json.dumps([row.model_dump(by_alias=True) for row in result.rows], indent=2))
        return

    for slug in result.slugs:
        click.echo(slug)
    if result.rows:
        Console().print(_support_table(result.rows, title=result.url))
    elif result.url is not None and result.ok:
        click.echo(f"No support table found at {result.url}")


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------


def complete_slug(
    ctx: click.Context, param: click.Parameter, incomplete: str
) -> list[CompletionItem]:
    """Offer cached slugs for the query argument. Never hits the network."""
    settings = Settings()
    store = JsonFileCacheStore(Path(settings.cache.path).expanduser())
    return [
        CompletionItem(item.value, help=item.hint)
        for item in h_complete.handle(incomplete, store)
    ]


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(__version__, prog_name="cspquery")
def cli() -> None:
    """Look up Windows policy CSP edition support from Microsoft Learn."""


@cli.command("query")
@click.argument("slug", required=False, shell_complete=complete_slug)
@click.option(
    "--display-all",
    is_flag=True,
    help="List every known CSP name instead of querying one.",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table.")
def query_cmd(slug: str | None, display_all: bool, as_json: bool) -> None:
    """Rebuild the CSP list, then show the support table for SLUG."""
    try:
        settings = Settings()
        _setup_logging(settings)
        with app_state(settings) as state:
            result = h_query.handle(slug, display_all, state)
        _report_errors(result)
        _render(result, as_json=as_json)
    except ValidationError as exc:
        click.echo(f"Error: Invalid configuration: {exc}", err=True)
    except Exception:
        log.error("command_unexpected_error", command="query", exc_info=True)
        raise
    finally:
        click.echo(FINISHED_MESSAGE, err=True)


@cli.command("rebuild")
def rebuild_cmd() -> None:
    """Refresh the cached CSP list without querying a page."""
    settings = Settings()
    _setup_logging(settings)
    with app_state(settings) as state:
        error = h_query.rebuild(state)
        if error is not None:
            click.echo(f"Error: {error.message}", err=True)
            return
        index = state.store.load() or {}
    click.echo(f"Cached {len(index)} CSP names in {settings.cache.path}")


@cli.command("complete")
@click.argument("partial", default="")
def complete_cmd(partial: str) -> None:
    """Print cached CSP names containing PARTIAL, one per line."""
    settings = Settings()
    _setup_logging(settings)
    store = JsonFileCacheStore(Path(settings.cache.path).expanduser())
    for item in h_complete.handle(partial, store):
        click.echo(f"{item.label}\t{item.hint}")


@cli.command("completion")
@click.argument("shell", type=click.Choice(["bash", "zsh", "fish"]))
def completion_cmd(shell: str) -> None:
    """Print the shell completion script for SHELL.

    Add ``eval "$(cspquery completion bash)"`` to your shell profile.
    """
    completion_class = get_completion_class(shell)
    if completion_class is None:
        raise click.UsageError(f"Unsupported shell: {shell}")
    script = completion_class(cli, {}, "cspquery", COMPLETE_VAR).source()
    click.echo(script)


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    cli(prog_name="cspquery", complete_var=COMPLETE_VAR)


if __name__ == "__main__":
    main()
