"""Exceptions raised inside the audit pipeline.

None of these ever reach the caller of a wrapped function: the pipeline
catches them at its boundary and logs them.
"""

from __future__ import annotations


class AuditError(Exception):
    """Base exception for all audit operations."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class ExpressionError(AuditError):
    """An entity-id expression could not be parsed or evaluated."""


class ActorLookupError(AuditError):
    """The configured actor provider could not be loaded."""


class SinkError(AuditError):
    """A sink is misconfigured or its transport failed."""
