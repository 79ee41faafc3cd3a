"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Tables/panels are reused by several commands.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ClassificationView, DomainEntry, ResourceRecord
from core.services.classification import display_meta, summarize


def print_banner(console: Console) -> None:
    title = Text("crawldesk", style="bold cyan")
    subtitle = Text("Domains • Sync • Resource validity", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_domains_table(domains: Sequence[DomainEntry]) -> Table:
    """Registry table in local mirror order."""

    table = Table(title="Domains")
    table.add_column("#", style="dim", justify="right")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Domain", style="white")
    for position, entry in enumerate(domains):
        table.add_row(str(position), str(entry.id), entry.name)
    return table


def build_group_table(resource_type: str, records: Sequence[ResourceRecord]) -> Table:
    meta = display_meta(resource_type)
    table = Table(title=f"{meta.icon} {meta.title} ({len(records)})", expand=True)
    table.add_column("URL", style="magenta", overflow="fold")
    table.add_column("Valid", no_wrap=True)
    for record in records:
        valid = Text("yes", style="green") if record.is_valid else Text("no", style="red")
        table.add_row(record.url, valid)
    return table


def build_summary_table(view: ClassificationView) -> Table:
    table = Table(title="Summary")
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Total", justify="right")
    table.add_column("Valid", style="green", justify="right")
    table.add_column("Invalid", style="red", justify="right")
    for key, (total, valid, invalid) in summarize(view).items():
        meta = display_meta(key)
        table.add_row(f"{meta.icon} {meta.title}", str(total), str(valid), str(invalid))
    return table


def build_invalid_links_panel(links: Sequence[str]) -> Panel:
    body = Text()
    if not links:
        body.append("No invalid links.", style="dim")
    for link in links:
        body.append(f"- {link}\n")
    return Panel(body, title=Text(f"Invalid links ({len(links)})", style="bold red"), border_style="red")


def render_view(console: Console, view: ClassificationView) -> None:
    """One table per type, in the view's order."""

    if not view.types:
        console.print("[dim]No resources found.[/dim]")
        return
    for key in view.types:
        console.print(build_group_table(key, view.groups.get(key, [])))
    console.print(build_summary_table(view))


def build_candidates_table(candidates: Sequence[str], registered: set[str]) -> Table:
    table = Table(title="Discovered domains")
    table.add_column("Domain", style="white")
    table.add_column("Registered", no_wrap=True)
    for name in candidates:
        mark = Text("yes", style="green") if name in registered else Text("no", style="dim")
        table.add_row(name, mark)
    return table
