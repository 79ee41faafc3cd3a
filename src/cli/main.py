"""crawldesk CLI (Typer).

Presentation layer only: it turns operator intents into calls on the
registry controller and the sync workflow, then renders their state.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Coroutine, Optional, TypeVar

import typer
from rich.console import Console

from adapters.crawler_api import CrawlerApiClient
from adapters.json_exporter import default_export_path, export_sync_json
from cli.doctor import app as doctor_app
from cli.ui_components import (
    build_candidates_table,
    build_domains_table,
    build_invalid_links_panel,
    print_banner,
    render_view,
)
from core.config import AppSettings
from core.domain.validation import is_valid_domain
from core.errors import ConfirmationDeclined, CrawlDeskError, DuplicateError
from core.interfaces.confirmation import AlwaysConfirm, ConfirmationProvider
from core.logging import configure_logging
from core.services.domain_registry import DomainRegistryController
from core.services.sync_workflow import SyncWorkflow

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Register domains to crawl and review their resources.")
domains_app = typer.Typer(no_args_is_help=True, help="Manage the domain registry.")
app.add_typer(domains_app, name="domains")
app.add_typer(doctor_app, name="doctor")

_console = Console()


class PromptConfirmation:
    """Asks on the terminal; anything but an explicit yes declines."""

    async def confirm(self, message: str) -> bool:
        return typer.confirm(message, default=False)


def build_api(settings: AppSettings) -> CrawlerApiClient:
    return CrawlerApiClient(settings)


def _settings(ctx: typer.Context) -> AppSettings:
    if isinstance(ctx.obj, AppSettings):
        return ctx.obj
    return AppSettings()


def _controller(settings: AppSettings, confirm: ConfirmationProvider | None = None) -> DomainRegistryController:
    return DomainRegistryController(build_api(settings), confirm or PromptConfirmation())


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run one operation; expected failures become a message and an exit code."""

    try:
        return asyncio.run(coro)
    except ConfirmationDeclined:
        _console.print("[yellow]Cancelled.[/yellow]")
        raise typer.Exit(code=0)
    except CrawlDeskError as exc:
        _console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    log_json: bool = typer.Option(False, "--log-json", help="JSON log lines on stderr."),
    banner: bool = typer.Option(False, "--banner", help="Print the welcome banner."),
) -> None:
    settings = AppSettings()
    configure_logging(
        verbose=verbose or settings.verbose,
        log_json=log_json or settings.log_json,
        api_base_url=settings.api_base_url,
    )
    ctx.obj = settings
    if banner:
        print_banner(_console)


# ----------------------------------------------------------------------
# domains
# ----------------------------------------------------------------------


@domains_app.command("list")
def list_domains(ctx: typer.Context) -> None:
    """Show the registered domains."""

    controller = _controller(_settings(ctx))
    domains = _run(controller.load())
    if not domains:
        _console.print("[dim]No domains registered.[/dim]")
        return
    _console.print(build_domains_table(domains))


@domains_app.command("add")
def add_domain(ctx: typer.Context, name: str = typer.Argument(..., help="Domain to register.")) -> None:
    """Register a new domain."""

    controller = _controller(_settings(ctx))

    async def _add() -> None:
        await controller.load()
        await controller.submit(name)

    _run(_add())
    _console.print(f"[green]Added[/green] {name.strip()}")
    _console.print(build_domains_table(controller.domains))


@domains_app.command("rename")
def rename_domain(
    ctx: typer.Context,
    current: str = typer.Argument(..., help="Registered domain to rename."),
    new: str = typer.Argument(..., help="New domain name."),
) -> None:
    """Rename a registered domain."""

    controller = _controller(_settings(ctx))

    async def _rename() -> None:
        await controller.load()
        index = controller.find(current)
        if index is None:
            raise CrawlDeskError(f"domain not registered: {current.strip()!r}")
        controller.begin_edit(index)
        await controller.submit(new)

    _run(_rename())
    _console.print(f"[green]Renamed[/green] {current.strip()} -> {new.strip()}")
    _console.print(build_domains_table(controller.domains))


@domains_app.command("remove")
def remove_domain(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Registered domain to delete."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Delete a registered domain (asks for confirmation)."""

    confirm: ConfirmationProvider = AlwaysConfirm() if yes else PromptConfirmation()
    controller = _controller(_settings(ctx), confirm)

    async def _remove() -> None:
        await controller.load()
        index = controller.find(name)
        if index is None:
            raise CrawlDeskError(f"domain not registered: {name.strip()!r}")
        await controller.remove(index)

    _run(_remove())
    _console.print(f"[green]Removed[/green] {name.strip()}")


# ----------------------------------------------------------------------
# sync / scan / discover
# ----------------------------------------------------------------------


@app.command()
def sync(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="Domain to sync."),
    export: Optional[Path] = typer.Option(None, "--export", help="Write the result as JSON to this path."),
    export_default: bool = typer.Option(
        False, "--export-default", help="Write the result under the configured export directory."
    ),
) -> None:
    """Fetch and group the resources of one domain."""

    settings = _settings(ctx)
    workflow = SyncWorkflow(build_api(settings))
    with _console.status(f"Syncing {domain.strip()}..."):
        snapshot = _run(workflow.sync(domain))

    _console.print(f"[bold]{snapshot.domain}[/bold]: {len(snapshot.records)} resources")
    render_view(_console, snapshot.view)
    _console.print(build_invalid_links_panel(snapshot.invalid_links))

    target = export
    if target is None and export_default:
        target = default_export_path(export_dir=settings.export_dir, domain=snapshot.domain)
    if target is not None:
        written = export_sync_json(snapshot=snapshot, output_path=target)
        _console.print(f"[green]Exported[/green] {written}")


@app.command()
def scan(ctx: typer.Context, url: str = typer.Argument(..., help="URL to scan.")) -> None:
    """Scan a single URL and group what it loads."""

    workflow = SyncWorkflow(build_api(_settings(ctx)))
    view = _run(workflow.scan_url(url))
    render_view(_console, view)


@app.command()
def discover(
    ctx: typer.Context,
    root_url: str = typer.Argument(..., help="Root URL whose sitemap is explored."),
    register: bool = typer.Option(False, "--register", help="Register every valid new candidate."),
) -> None:
    """List candidate domains found under a root URL."""

    settings = _settings(ctx)
    api = build_api(settings)
    workflow = SyncWorkflow(api)
    controller = DomainRegistryController(api, PromptConfirmation())

    async def _discover() -> tuple[list[str], list[str]]:
        candidates = await workflow.discover(root_url)
        await controller.load()
        if not register:
            return candidates, []
        added: list[str] = []
        for name in candidates:
            if not is_valid_domain(name):
                _console.print(f"[yellow]Skipping invalid candidate[/yellow] {name}")
                continue
            try:
                created = await controller.submit(name)
            except DuplicateError:
                continue
            added.append(created.name)
        return candidates, added

    candidates, added = _run(_discover())
    _console.print(build_candidates_table(candidates, set(controller.names())))
    if register:
        _console.print(f"[green]Registered {len(added)} new domain(s).[/green]")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
