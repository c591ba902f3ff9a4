"""Manual event publishing through the configured publisher."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from auditable import AuditError, AuditPublisher, decode_metadata, get_publisher

console = Console()


def _publisher() -> AuditPublisher:
    try:
        return get_publisher()
    except AuditError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(exc.exit_code)


def destination(
    entity_type: str = typer.Argument(..., help="Entity type, e.g. Customer"),
) -> None:
    """Print the destination events for ENTITY_TYPE are published to."""
    typer.echo(_publisher().destination_for(entity_type))


def emit(
    entity_type: str = typer.Argument(..., help="Entity type, e.g. Customer"),
    action: str = typer.Argument(..., help="Action, e.g. CREATED"),
    entity_id: Optional[str] = typer.Option(None, "--entity-id", help="Identifier of the entity"),
    metadata: Optional[str] = typer.Option(None, "--metadata", help="JSON object or free text"),
    error: Optional[str] = typer.Option(None, "--error", help="Publish a FAILED event with this message"),
) -> None:
    """Publish one audit event by hand."""
    publisher = _publisher()
    if error is not None:
        event = publisher.failed(entity_type, entity_id, action, error)
    else:
        event = publisher.success(entity_type, entity_id, action, decode_metadata(metadata))
    console.print(
        f"[green]Published[/green] {event.status.value} {event.action} "
        f"to {publisher.destination_for(entity_type)} ({event.event_id})"
    )
