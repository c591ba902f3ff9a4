"""Interception of wrapped calls.

Every invocation of a wrapped call yields exactly one audit event: SUCCESS
when it returns, FAILED when it raises an ``Exception``. The call's own
result or exception always reaches the caller untouched; nothing that goes
wrong while auditing is ever visible to it.

Usage::

    @auditable(action="CREATED", entity_type="Customer")
    def create_customer(data):
        return repo.save(Customer(**data))

    @auditable(action="DELETED", entity_type="Customer", entity_id_expression="customer_id")
    async def delete_customer(customer_id: str) -> bool:
        ...
"""

from __future__ import annotations

import functools
import inspect
import logging
from typing import Any, Callable, TypeVar

from audit_common import AuditSpec

from auditable.bootstrap import get_publisher
from auditable.context import audit_scope
from auditable.metadata import decode_metadata
from auditable.publisher import AuditPublisher
from auditable.resolver import CallArguments, IdentityResolver

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class AuditInterceptor:
    """Runs a call inside a fresh audit scope and publishes its outcome."""

    def __init__(
        self,
        publisher: AuditPublisher | None = None,
        resolver: IdentityResolver | None = None,
    ) -> None:
        self._publisher = publisher
        self.resolver = resolver or IdentityResolver()

    @property
    def publisher(self) -> AuditPublisher:
        return self._publisher or get_publisher()

    def invoke(self, spec: AuditSpec, fn: Callable[..., Any], args: tuple, kwargs: dict) -> Any:
        with audit_scope():
            try:
                result = fn(*args, **kwargs)
            except Exception as exc:
                self._publish_failure(spec, fn, args, kwargs, exc)
                raise
            self._publish_success(spec, fn, args, kwargs, result)
            return result

    async def ainvoke(self, spec: AuditSpec, fn: Callable[..., Any], args: tuple, kwargs: dict) -> Any:
        with audit_scope():
            try:
                result = await fn(*args, **kwargs)
            except Exception as exc:
                self._publish_failure(spec, fn, args, kwargs, exc)
                raise
            self._publish_success(spec, fn, args, kwargs, result)
            return result

    def _publish_success(self, spec: AuditSpec, fn: Callable[..., Any], args: tuple, kwargs: dict, result: Any) -> None:
        try:
            arguments = CallArguments.from_call(fn, args, kwargs)
            entity_id = self.resolver.resolve_success(spec, result, arguments)
            metadata = decode_metadata(spec.metadata)
            publisher = self.publisher
            event = publisher.factory.build_success(spec.entity_type, entity_id, spec.action, metadata)
            publisher.publish(event)
        except Exception as exc:
            log.exception("Failed to publish success audit event: %s", exc)

    def _publish_failure(self, spec: AuditSpec, fn: Callable[..., Any], args: tuple, kwargs: dict, error: Exception) -> None:
        try:
            arguments = CallArguments.from_call(fn, args, kwargs)
            entity_id = self.resolver.resolve_failure(arguments)
            publisher = self.publisher
            event = publisher.factory.build_failure(spec.entity_type, entity_id, spec.action, error)
            publisher.publish(event)
        except Exception as exc:
            log.exception("Failed to publish failure audit event: %s", exc)


def auditable(
    action: str,
    entity_type: str,
    entity_id_expression: str | None = None,
    metadata: str | None = None,
    *,
    publisher: AuditPublisher | None = None,
    interceptor: AuditInterceptor | None = None,
) -> Callable[[F], F]:
    """Mark a function (sync or ``async def``) as audited.

    Without an explicit *publisher* or *interceptor* the process-wide
    publisher from :mod:`auditable.bootstrap` is used, looked up at call time.
    """
    spec = AuditSpec(
        action=action,
        entity_type=entity_type,
        entity_id_expression=entity_id_expression,
        metadata=metadata,
    )
    runner = interceptor or AuditInterceptor(publisher)

    def decorator(fn: F) -> F:
        if inspect.iscoroutinefunction(fn):

            @functools.wraps(fn)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                return await runner.ainvoke(spec, fn, args, kwargs)

            wrapper = async_wrapper
        else:

            @functools.wraps(fn)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                return runner.invoke(spec, fn, args, kwargs)

        wrapper.__audit_spec__ = spec  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorator
