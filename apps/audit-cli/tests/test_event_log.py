"""Tests for reading events back from the JSONL sink."""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path

from auditctl.services.event_log import read_events, to_csv, to_json


class TestReadEvents:
    def test_newest_first(self, customer_log: Path):
        events = [e for e in read_events(customer_log) if "event_id" in e]
        assert [e["action"] for e in events] == ["DELETED", "UPDATED", "CREATED"]

    def test_malformed_lines_kept_raw(self, customer_log: Path):
        events = read_events(customer_log)
        assert {"raw": "this is not json"} in events

    def test_filter_status(self, customer_log: Path):
        events = read_events(customer_log, status="failed")
        assert len(events) == 1
        assert events[0]["error_message"] == "customer is locked"

    def test_filter_action_and_entity(self, customer_log: Path):
        assert len(read_events(customer_log, action="UPDATED")) == 1
        assert len(read_events(customer_log, entity_id="c-1")) == 2

    def test_missing_file(self, tmp_path: Path):
        assert read_events(tmp_path / "nope.jsonl") == []

    def test_null_timestamp_sorts_last(self, customer_log: Path):
        with customer_log.open("a") as fh:
            fh.write(json.dumps({"event_id": "e-null", "action": "CREATED", "timestamp": None}) + "\n")
        events = [e for e in read_events(customer_log) if "event_id" in e]
        assert [e["event_id"] for e in events][-1] == "e-null"
        assert events[0]["action"] == "DELETED"

    def test_events_are_normalised(self, customer_log: Path):
        event = next(e for e in read_events(customer_log) if e.get("action") == "CREATED")
        assert event["actor_username"] is None
        assert event["timestamp"] == "2026-01-01T00:00:00+00:00"


class TestExport:
    def test_csv(self, customer_log: Path):
        rows = list(csv.DictReader(io.StringIO(to_csv(read_events(customer_log)))))
        assert len(rows) == 3
        assert rows[0]["status"] == "FAILED"
        assert rows[0]["entity_id"] == "c-2"

    def test_json(self, customer_log: Path):
        data = json.loads(to_json(read_events(customer_log)))
        assert len(data) == 3
        assert all("event_id" in e for e in data)
