"""Audit event model: one record per wrapped-call outcome."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from audit_common.models.actor import ACTOR_FIELDS, ActorSnapshot


class AuditStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"  # business error raised by the call
    ERROR = "ERROR"  # unexpected technical error


class AuditEvent(BaseModel):
    """A single audited operation.

    Immutable once built. ``error_message`` is present if and only if the
    status is not ``SUCCESS``.
    """

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    action: str
    entity_type: str
    entity_id: str | None = None
    actor: ActorSnapshot = Field(default_factory=ActorSnapshot)
    status: AuditStatus = AuditStatus.SUCCESS
    error_message: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    source: str = ""
    metadata: dict[str, Any] | None = None

    @model_validator(mode="after")
    def check_error_message(self) -> AuditEvent:
        if self.status is AuditStatus.SUCCESS and self.error_message is not None:
            raise ValueError("error_message must be empty for SUCCESS events")
        if self.status is not AuditStatus.SUCCESS and not self.error_message:
            raise ValueError(f"error_message is required for {self.status.value} events")
        return self

    def to_document(self) -> dict[str, Any]:
        """Flatten the event into its wire shape."""
        doc: dict[str, Any] = {
            "event_id": self.event_id,
            "action": self.action,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
        }
        for name in ACTOR_FIELDS:
            doc[f"actor_{name}"] = getattr(self.actor, name)
        doc.update(
            status=self.status.value,
            error_message=self.error_message,
            timestamp=self.timestamp.isoformat(),
            source=self.source,
        )
        if self.metadata is not None:
            doc["metadata"] = self.metadata
        return doc

    def to_jsonl(self) -> str:
        return json.dumps(self.to_document(), default=str)

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> AuditEvent:
        """Rebuild an event from the flat wire shape."""
        actor = ActorSnapshot(**{name: doc.get(f"actor_{name}") for name in ACTOR_FIELDS})
        fields = {
            key: value
            for key, value in doc.items()
            if key in cls.model_fields and key != "actor"
        }
        return cls(actor=actor, **fields)
