"""Invocation-scoped entity-id override.

Business code running inside a wrapped call can record the identifier of the
entity it touched when the call's return value does not carry it::

    @auditable(action="CREATED", entity_type="User")
    def add_user(request):
        user = repo.save(User(request))
        set_entity_id(user.id)
        return "user created"

The slot lives in a ``ContextVar``, so threads and asyncio tasks never see
each other's value. The wrapper opens a fresh slot per invocation with
:func:`audit_scope` and restores the previous one on exit.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Generator

_entity_id: ContextVar[str | None] = ContextVar("audit_entity_id", default=None)


def set_entity_id(entity_id: Any) -> None:
    """Store the entity id for the current invocation, replacing any prior value."""
    _entity_id.set(None if entity_id is None else str(entity_id))


def get_entity_id() -> str | None:
    """Return the override for the current invocation, or None."""
    return _entity_id.get()


def clear() -> None:
    """Drop the override. Safe to call when nothing was set."""
    if _entity_id.get() is not None:
        _entity_id.set(None)


@contextmanager
def audit_scope() -> Generator[None, None, None]:
    """Open an empty slot for one invocation and release it on every exit path."""
    token = _entity_id.set(None)
    try:
        yield
    finally:
        _entity_id.reset(token)
