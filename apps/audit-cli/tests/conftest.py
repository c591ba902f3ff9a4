"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from audit_common import AuditEvent, AuditStatus
from auditable import bootstrap


@pytest.fixture
def events_dir(tmp_path: Path, monkeypatch) -> Path:
    """Point the CLI at a temp JSONL sink directory."""
    directory = tmp_path / "events"
    monkeypatch.setenv("AUDIT_SINK", "jsonl")
    monkeypatch.setenv("AUDIT_EVENTS_DIR", str(directory))
    monkeypatch.setenv("AUDIT_SERVICE_NAME", "cli-test")
    bootstrap.reset()
    yield directory
    bootstrap.reset()


@pytest.fixture
def customer_log(events_dir: Path) -> Path:
    """customer.events.jsonl with two successes, one failure and one bad line."""
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    events = [
        AuditEvent(action="CREATED", entity_type="Customer", entity_id="c-1", timestamp=start, source="crm"),
        AuditEvent(
            action="UPDATED",
            entity_type="Customer",
            entity_id="c-1",
            timestamp=start + timedelta(minutes=1),
            source="crm",
        ),
        AuditEvent(
            action="DELETED",
            entity_type="Customer",
            entity_id="c-2",
            status=AuditStatus.FAILED,
            error_message="customer is locked",
            timestamp=start + timedelta(minutes=2),
            source="crm",
        ),
    ]
    events_dir.mkdir(parents=True, exist_ok=True)
    path = events_dir / "customer.events.jsonl"
    lines = [e.to_jsonl() for e in events]
    lines.insert(1, "this is not json")
    path.write_text("\n".join(lines) + "\n")
    return path
