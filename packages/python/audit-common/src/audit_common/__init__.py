"""Audit Common: shared models and constants for auditable and auditctl."""

from audit_common.constants import (
    DEFAULT_PUBLISH_TIMEOUT,
    DEFAULT_SINK,
    DESTINATION_SUFFIX,
    EVENTS_DIR,
    RAW_METADATA_KEY,
    UNKNOWN_ERROR,
    UNKNOWN_SERVICE,
)
from audit_common.config import AuditConfig
from audit_common.models.actor import ActorSnapshot
from audit_common.models.audit_event import AuditEvent, AuditStatus
from audit_common.models.audit_spec import AuditSpec

__all__ = [
    "ActorSnapshot",
    "AuditConfig",
    "AuditEvent",
    "AuditSpec",
    "AuditStatus",
    "DEFAULT_PUBLISH_TIMEOUT",
    "DEFAULT_SINK",
    "DESTINATION_SUFFIX",
    "EVENTS_DIR",
    "RAW_METADATA_KEY",
    "UNKNOWN_ERROR",
    "UNKNOWN_SERVICE",
]
