"""Root Typer application for the auditctl CLI."""

from __future__ import annotations

import typer

from auditctl.commands import emit, events

app = typer.Typer(
    name="auditctl",
    help="Inspect and emit audit events produced by auditable services.",
    no_args_is_help=True,
)

app.add_typer(events.app, name="events", help="List and export published events.")
app.command(name="emit")(emit.emit)
app.command(name="destination")(emit.destination)

if __name__ == "__main__":
    app()
