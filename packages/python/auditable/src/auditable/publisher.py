"""Audit publishers.

A publisher routes each finished event to a destination derived from its
entity type (``"Customer"`` -> ``"customer.events"``) and hands it to a sink.
Publishing is best-effort: a rejected or failing send is logged and never
raised.
"""

from __future__ import annotations

import atexit
import logging
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

from audit_common import DESTINATION_SUFFIX, AuditEvent

from auditable.factory import AuditEventFactory
from auditable.sinks import Sink

log = logging.getLogger(__name__)


class AuditPublisher(ABC):
    def __init__(
        self,
        factory: AuditEventFactory | None = None,
        destination_suffix: str = DESTINATION_SUFFIX,
        destination_resolver: Callable[[str], str] | None = None,
    ) -> None:
        self.factory = factory or AuditEventFactory()
        self.destination_suffix = destination_suffix
        self._destination_resolver = destination_resolver

    @abstractmethod
    def publish(self, event: AuditEvent) -> None:
        """Send *event*; must not raise."""

    def destination_for(self, entity_type: str) -> str:
        if self._destination_resolver is not None:
            return self._destination_resolver(entity_type)
        return entity_type.lower() + self.destination_suffix

    def success(
        self,
        entity_type: str,
        entity_id: str | None,
        action: str,
        metadata: dict[str, Any] | None = None,
    ) -> AuditEvent:
        """Build and publish a SUCCESS event outside of a wrapped call."""
        event = self.factory.build_success(entity_type, entity_id, action, metadata)
        self.publish(event)
        return event

    def failed(
        self,
        entity_type: str,
        entity_id: str | None,
        action: str,
        error: BaseException | str | None = None,
    ) -> AuditEvent:
        """Build and publish a FAILED event outside of a wrapped call."""
        event = self.factory.build_failure(entity_type, entity_id, action, error)
        self.publish(event)
        return event


_executor: ThreadPoolExecutor | None = None


def _background_executor() -> ThreadPoolExecutor:
    global _executor
    if _executor is None:
        _executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="audit-publish")
        atexit.register(_executor.shutdown, wait=True)
    return _executor


class SinkPublisher(AuditPublisher):
    """Publishes through a :class:`Sink`, one attempt per event.

    With ``background=True`` the send runs on a small thread pool and
    ``publish`` returns immediately.
    """

    def __init__(
        self,
        sink: Sink,
        factory: AuditEventFactory | None = None,
        destination_suffix: str = DESTINATION_SUFFIX,
        destination_resolver: Callable[[str], str] | None = None,
        background: bool = False,
    ) -> None:
        super().__init__(factory, destination_suffix, destination_resolver)
        self.sink = sink
        self.background = background

    def publish(self, event: AuditEvent) -> None:
        try:
            destination = self.destination_for(event.entity_type)
            document = event.to_document()
        except Exception:
            log.exception("Error preparing audit event %s for %s", event.event_id, event.entity_type)
            return

        if self.background:
            try:
                future = _background_executor().submit(self._send, destination, document, event)
            except RuntimeError as exc:
                log.error("Audit publisher is shut down, dropping event %s: %s", event.event_id, exc)
                return
            future.add_done_callback(_log_unexpected)
            return
        self._send(destination, document, event)

    def _send(self, destination: str, document: dict[str, Any], event: AuditEvent) -> bool:
        try:
            sent = self.sink.send(destination, document)
        except Exception as exc:
            log.error(
                "Error publishing audit event for %s %s: %s",
                event.entity_type,
                event.entity_id,
                exc,
                exc_info=True,
            )
            return False

        if sent:
            log.debug(
                "Audit event published: %s %s for %s %s",
                event.status.value,
                event.action,
                event.entity_type,
                event.entity_id,
            )
        else:
            log.error(
                "Failed to publish audit event: %s %s for %s %s",
                event.status.value,
                event.action,
                event.entity_type,
                event.entity_id,
            )
        return bool(sent)


def _log_unexpected(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        log.error("Background audit publish crashed: %s", exc)
