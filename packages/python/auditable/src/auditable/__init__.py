"""auditable: uniform audit events for wrapped business calls."""

from auditable.actor import (
    ActorProvider,
    CallableActorProvider,
    ContextActorProvider,
    load_actor_provider,
    reset_current_actor,
    resolve_actor,
    set_current_actor,
)
from auditable.bootstrap import configure, get_config, get_publisher, reset
from auditable.context import audit_scope, clear, get_entity_id, set_entity_id
from auditable.errors import ActorLookupError, AuditError, ExpressionError, SinkError
from auditable.expressions import ExpressionEvaluator, RestrictedEvaluator
from auditable.extraction import extract_entity_id
from auditable.factory import AuditEventFactory
from auditable.metadata import decode_metadata
from auditable.publisher import AuditPublisher, SinkPublisher
from auditable.resolver import CallArguments, IdentityResolver
from auditable.sinks import HttpSink, JsonlSink, LoggingSink, MemorySink, Sink
from auditable.wrapper import AuditInterceptor, auditable

__all__ = [
    "ActorLookupError",
    "ActorProvider",
    "AuditError",
    "AuditEventFactory",
    "AuditInterceptor",
    "AuditPublisher",
    "CallArguments",
    "CallableActorProvider",
    "ContextActorProvider",
    "ExpressionError",
    "ExpressionEvaluator",
    "HttpSink",
    "IdentityResolver",
    "JsonlSink",
    "LoggingSink",
    "MemorySink",
    "RestrictedEvaluator",
    "Sink",
    "SinkError",
    "SinkPublisher",
    "audit_scope",
    "auditable",
    "clear",
    "configure",
    "decode_metadata",
    "extract_entity_id",
    "get_config",
    "get_entity_id",
    "get_publisher",
    "load_actor_provider",
    "reset",
    "reset_current_actor",
    "resolve_actor",
    "set_current_actor",
    "set_entity_id",
]
