"""Tests for reflective entity-id extraction."""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal

import pytest

from auditable.extraction import extract_entity_id


class WithGetId:
    def __init__(self):
        self.id = "field"

    def get_id(self):
        return "method"


class WithUuid:
    uuid = "u-1"


class WithIdentifier:
    identifier = "i-1"


class WithField:
    def __init__(self):
        self.id = 12


class BrokenGetId:
    id = "field"

    def get_id(self):
        raise RuntimeError("no")


class NoneGetId:
    identifier = "i-2"

    def get_id(self):
        return None


class Anonymous:
    def __str__(self):
        return "Anonymous(composite=1/2)"


class TestExtractEntityId:
    def test_none(self):
        assert extract_entity_id(None) is None

    @pytest.mark.parametrize("value", ["operation completed", b"raw", True, False, 42, 3.5, Decimal("1.0")])
    def test_scalars_rejected(self, value):
        assert extract_entity_id(value) is None

    def test_rejection_is_logged_as_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="auditable.extraction"):
            extract_entity_id("user created")
        assert any("rejected" in r.getMessage() for r in caplog.records)
        assert all(r.levelno < logging.ERROR for r in caplog.records)

    def test_get_id_first(self):
        assert extract_entity_id(WithGetId()) == "method"

    def test_uuid_synonym(self):
        assert extract_entity_id(WithUuid()) == "u-1"

    def test_identifier_synonym(self):
        assert extract_entity_id(WithIdentifier()) == "i-1"

    def test_raw_field(self):
        assert extract_entity_id(WithField()) == "12"

    def test_mapping_id(self):
        assert extract_entity_id({"id": 7, "name": "x"}) == "7"

    def test_failing_probe_advances(self):
        assert extract_entity_id(BrokenGetId()) == "field"

    def test_none_probe_advances(self):
        assert extract_entity_id(NoneGetId()) == "i-2"

    def test_str_fallback(self):
        assert extract_entity_id(Anonymous()) == "Anonymous(composite=1/2)"

    def test_uuid_value(self):
        value = uuid.UUID("12345678-1234-5678-1234-567812345678")
        assert extract_entity_id(value) == str(value)
