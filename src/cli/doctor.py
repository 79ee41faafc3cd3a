"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.crawler_api import CrawlerApiClient
from core.config import AppSettings, write_user_env_vars
from core.errors import RemoteError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    try:
        domains = await CrawlerApiClient(settings).list_domains()
    except RemoteError as exc:
        return False, str(exc)
    return True, f"{len(domains)} domain(s) registered"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="crawldesk Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API base_url", "OK", settings.api_base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Success status", "OK", settings.success_status)

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] run `crawldesk doctor setup-api` or set CRAWLDESK_API_BASE_URL."
        )
        raise typer.Exit(code=1)


@app.command(name="setup-api")
def setup_api() -> None:
    """Interactive API setup (stores config in the user config .env)."""

    settings = AppSettings()
    base_url = typer.prompt("API base URL", default=settings.api_base_url, show_default=True).strip()
    timeout = typer.prompt(
        "Request timeout (seconds)", default=str(settings.http_timeout_seconds), show_default=True
    ).strip()

    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base URL must start with http:// or https://")
    try:
        if float(timeout) <= 0:
            raise ValueError(timeout)
    except ValueError:
        raise typer.BadParameter("timeout must be a positive number")

    env_path = write_user_env_vars(
        {
            "CRAWLDESK_API_BASE_URL": base_url,
            "CRAWLDESK_HTTP_TIMEOUT_SECONDS": timeout,
        }
    )

    _console.print(f"[green]Saved API config to:[/green] {env_path}")
