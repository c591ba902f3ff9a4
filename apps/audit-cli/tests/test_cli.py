"""Tests for the auditctl commands."""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console
from typer.testing import CliRunner

from auditctl.cli import app

runner = CliRunner()


class TestDestination:
    def test_lowercase_with_suffix(self, events_dir: Path):
        result = runner.invoke(app, ["destination", "Customer"])
        assert result.exit_code == 0
        assert result.output.strip() == "customer.events"


class TestEvents:
    def test_list(self, customer_log: Path, monkeypatch):
        monkeypatch.setattr("auditctl.commands.events.console", Console(width=200))
        result = runner.invoke(app, ["events", "list", "Customer"])
        assert result.exit_code == 0
        assert "DELETED" in result.output
        assert "customer is locked" in result.output

    def test_list_empty(self, events_dir: Path):
        result = runner.invoke(app, ["events", "list", "Order"])
        assert result.exit_code == 0
        assert "No events" in result.output

    def test_export_json(self, customer_log: Path):
        result = runner.invoke(app, ["events", "export", "Customer", "--format", "json"])
        assert result.exit_code == 0
        assert len(json.loads(result.output)) == 3

    def test_export_to_file(self, customer_log: Path, tmp_path: Path):
        out = tmp_path / "customer.csv"
        result = runner.invoke(app, ["events", "export", "Customer", "--output", str(out)])
        assert result.exit_code == 0
        assert out.read_text().splitlines()[0].startswith("timestamp,event_id")

    def test_export_bad_format(self, customer_log: Path):
        result = runner.invoke(app, ["events", "export", "Customer", "--format", "xml"])
        assert result.exit_code == 1


class TestEmit:
    def test_success_event(self, events_dir: Path):
        result = runner.invoke(
            app,
            ["emit", "Customer", "CREATED", "--entity-id", "c-5", "--metadata", '{"via": "cli"}'],
        )
        assert result.exit_code == 0, result.output
        doc = json.loads((events_dir / "customer.events.jsonl").read_text().splitlines()[0])
        assert doc["status"] == "SUCCESS"
        assert doc["entity_id"] == "c-5"
        assert doc["source"] == "cli-test"
        assert doc["metadata"] == {"via": "cli"}

    def test_failure_event(self, events_dir: Path):
        result = runner.invoke(app, ["emit", "Customer", "DELETED", "--error", "locked"])
        assert result.exit_code == 0, result.output
        doc = json.loads((events_dir / "customer.events.jsonl").read_text().splitlines()[0])
        assert doc["status"] == "FAILED"
        assert doc["error_message"] == "locked"

    def test_misconfigured_sink(self, events_dir: Path, monkeypatch):
        monkeypatch.setenv("AUDIT_SINK", "http")
        monkeypatch.delenv("AUDIT_HTTP_URL", raising=False)
        result = runner.invoke(app, ["emit", "Customer", "CREATED"])
        assert result.exit_code == 1
        assert "AUDIT_HTTP_URL" in result.output
