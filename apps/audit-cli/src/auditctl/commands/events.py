"""Inspect and export events written by the JSONL sink."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from auditable import get_config
from auditctl.services import event_log

app = typer.Typer(no_args_is_help=True)
console = Console()


def _events_file(entity_type: str, events_dir: Optional[Path]) -> Path:
    cfg = get_config()
    directory = events_dir or cfg.events_dir
    return directory / f"{entity_type.lower()}{cfg.destination_suffix}.jsonl"


@app.command("list")
def list_events(
    entity_type: str = typer.Argument(..., help="Entity type, e.g. Customer"),
    status: Optional[str] = typer.Option(None, help="SUCCESS, FAILED or ERROR"),
    action: Optional[str] = typer.Option(None, help="Filter by action"),
    entity_id: Optional[str] = typer.Option(None, "--entity-id", help="Filter by entity id"),
    limit: int = typer.Option(50, min=1, help="Maximum rows to show"),
    events_dir: Optional[Path] = typer.Option(None, "--events-dir", help="Override AUDIT_EVENTS_DIR"),
) -> None:
    """Show the newest events for an entity type."""
    path = _events_file(entity_type, events_dir)
    events = event_log.read_events(path, status=status, action=action, entity_id=entity_id)
    events = [e for e in events if "event_id" in e]
    if not events:
        console.print(f"[yellow]No events in {path}[/yellow]")
        return

    table = Table(title=f"{entity_type} events")
    table.add_column("Timestamp")
    table.add_column("Action")
    table.add_column("Entity ID")
    table.add_column("Status")
    table.add_column("Actor")
    table.add_column("Error")
    for e in events[:limit]:
        status_value = e.get("status", "")
        style = "green" if status_value == "SUCCESS" else "red"
        table.add_row(
            str(e.get("timestamp", "")),
            str(e.get("action", "")),
            e.get("entity_id") or "-",
            f"[{style}]{status_value}[/{style}]",
            e.get("actor_username") or e.get("actor_sub") or "-",
            e.get("error_message") or "",
        )
    console.print(table)


@app.command()
def export(
    entity_type: str = typer.Argument(..., help="Entity type, e.g. Customer"),
    format: str = typer.Option("csv", "--format", help="csv or json"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
    events_dir: Optional[Path] = typer.Option(None, "--events-dir", help="Override AUDIT_EVENTS_DIR"),
) -> None:
    """Export all events for an entity type as CSV or JSON."""
    if format not in ("csv", "json"):
        console.print(f"[red]Unsupported format: {format}[/red]")
        raise typer.Exit(1)

    events = event_log.read_events(_events_file(entity_type, events_dir))
    data = event_log.to_json(events) if format == "json" else event_log.to_csv(events)
    if output:
        output.write_text(data)
        console.print(f"[green]Exported[/green] {output}")
    else:
        typer.echo(data, nl=False)
