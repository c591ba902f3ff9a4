"""Audit event factory.

Stamps every event with a fresh id, the current UTC time, the emitting
service name and the current actor.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from audit_common import UNKNOWN_ERROR, UNKNOWN_SERVICE, AuditEvent, AuditStatus

from auditable.actor import ActorProvider, resolve_actor


def error_message_of(error: BaseException | str | None) -> str:
    """Message for a failure event; never empty."""
    if error is None:
        return UNKNOWN_ERROR
    if isinstance(error, BaseException):
        try:
            message = str(error)
        except Exception:
            message = ""
        return message or type(error).__name__
    return error or UNKNOWN_ERROR


class AuditEventFactory:
    def __init__(
        self,
        service_name: str | None = None,
        actor_provider: ActorProvider | None = None,
    ) -> None:
        self.service_name = service_name or UNKNOWN_SERVICE
        self.actor_provider = actor_provider

    def build_success(
        self,
        entity_type: str,
        entity_id: str | None,
        action: str,
        metadata: dict[str, Any] | None = None,
    ) -> AuditEvent:
        return self._build(
            entity_type,
            entity_id,
            action,
            status=AuditStatus.SUCCESS,
            metadata=metadata,
        )

    def build_failure(
        self,
        entity_type: str,
        entity_id: str | None,
        action: str,
        error: BaseException | str | None = None,
    ) -> AuditEvent:
        return self._build(
            entity_type,
            entity_id,
            action,
            status=AuditStatus.FAILED,
            error_message=error_message_of(error),
        )

    def _build(
        self,
        entity_type: str,
        entity_id: str | None,
        action: str,
        *,
        status: AuditStatus,
        error_message: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_id=str(uuid4()),
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            actor=resolve_actor(self.actor_provider),
            status=status,
            error_message=error_message,
            timestamp=datetime.now(timezone.utc),
            source=self.service_name,
            metadata=metadata,
        )
