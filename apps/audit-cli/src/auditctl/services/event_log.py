"""Reading audit events back from the JSONL sink."""

from __future__ import annotations

import csv
import io
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from audit_common import RAW_METADATA_KEY, AuditEvent

log = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "timestamp",
    "event_id",
    "source",
    "action",
    "entity_type",
    "entity_id",
    "status",
    "error_message",
    "actor_username",
    "actor_email",
    "actor_role",
]


def read_events(
    path: Path,
    *,
    status: str | None = None,
    action: str | None = None,
    entity_id: str | None = None,
) -> list[dict[str, Any]]:
    """Return the events in *path*, newest first, matching all given filters.

    Valid events are normalised through :class:`AuditEvent`. Objects that do
    not validate are kept as written. Lines that are not JSON objects are
    returned as ``{"raw": line}`` and are dropped as soon as any filter is
    applied.
    """
    if not path.exists():
        return []

    events: list[dict[str, Any]] = []
    for line in path.read_text().splitlines():
        if not line.strip():
            continue
        try:
            parsed = json.loads(line)
        except json.JSONDecodeError:
            log.debug("Skipping malformed line in %s", path)
            parsed = None
        if not isinstance(parsed, dict):
            parsed = {RAW_METADATA_KEY: line}
        else:
            try:
                parsed = AuditEvent.from_document(parsed).to_document()
            except ValidationError as exc:
                log.debug("Keeping unvalidated event in %s: %s", path, exc)
        events.append(parsed)

    if status:
        events = [e for e in events if str(e.get("status", "")).upper() == status.upper()]
    if action:
        events = [e for e in events if e.get("action") == action]
    if entity_id:
        events = [e for e in events if e.get("entity_id") == entity_id]

    events.sort(key=lambda e: e.get("timestamp") or "", reverse=True)
    return events


def to_csv(events: list[dict[str, Any]]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(EXPORT_COLUMNS)
    for e in events:
        if RAW_METADATA_KEY in e and "event_id" not in e:
            continue
        writer.writerow([e.get(column) or "" for column in EXPORT_COLUMNS])
    return output.getvalue()


def to_json(events: list[dict[str, Any]]) -> str:
    return json.dumps([e for e in events if "event_id" in e], indent=2)
