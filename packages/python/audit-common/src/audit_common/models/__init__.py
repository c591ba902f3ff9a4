"""Shared Pydantic models."""

from audit_common.models.actor import ActorSnapshot
from audit_common.models.audit_event import AuditEvent, AuditStatus
from audit_common.models.audit_spec import AuditSpec

__all__ = ["ActorSnapshot", "AuditEvent", "AuditSpec", "AuditStatus"]
