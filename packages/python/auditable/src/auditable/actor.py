"""Actor lookup for audit events.

The actor comes from an optional host-supplied provider. A missing provider,
a provider with no current actor, and a provider that fails are all treated
the same way: the event carries an empty :class:`ActorSnapshot`.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Mapping
from contextvars import ContextVar, Token
from typing import Any, Callable, Protocol

from audit_common import ActorSnapshot
from audit_common.models.actor import ACTOR_FIELDS

from auditable.errors import ActorLookupError

log = logging.getLogger(__name__)


class ActorProvider(Protocol):
    def current_actor(self) -> ActorSnapshot | None: ...


def _field(actor: Any, name: str) -> str | None:
    try:
        if isinstance(actor, Mapping):
            value = actor.get(name)
        else:
            value = getattr(actor, name, None)
    except Exception as exc:
        log.debug("Failed to read actor field %s: %s", name, exc)
        return None
    return None if value is None else str(value)


def to_snapshot(actor: Any) -> ActorSnapshot | None:
    """Coerce a snapshot, a mapping, or an object with actor attributes."""
    if actor is None or isinstance(actor, ActorSnapshot):
        return actor
    return ActorSnapshot(**{name: _field(actor, name) for name in ACTOR_FIELDS})


class CallableActorProvider:
    """Adapts a zero-argument callable (e.g. ``security.get_current_user``)."""

    def __init__(self, fn: Callable[[], Any]):
        self._fn = fn

    def current_actor(self) -> ActorSnapshot | None:
        return to_snapshot(self._fn())


_current_actor: ContextVar[ActorSnapshot | None] = ContextVar("audit_current_actor", default=None)


def set_current_actor(actor: Any) -> Token:
    """Bind the actor for the current request/task; returns a reset token."""
    return _current_actor.set(to_snapshot(actor))


def reset_current_actor(token: Token) -> None:
    _current_actor.reset(token)


class ContextActorProvider:
    """Reads the actor bound with :func:`set_current_actor`."""

    def current_actor(self) -> ActorSnapshot | None:
        return _current_actor.get()


def load_actor_provider(path: str) -> ActorProvider | None:
    """Import a provider from ``"package.module:attribute"``.

    The attribute may be a provider object, a provider class, or a plain
    callable returning the actor. A module that is not installed yields None.
    """
    if not path:
        return None
    module_name, _, attr = path.partition(":")
    if not attr:
        raise ActorLookupError(f"Actor provider path must look like 'module:attribute', got {path!r}")
    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError:
        log.debug("Actor provider module %s not installed, actor info will be empty", module_name)
        return None
    try:
        target = getattr(module, attr)
    except AttributeError as exc:
        raise ActorLookupError(f"Module {module_name!r} has no attribute {attr!r}") from exc

    if isinstance(target, type):
        target = target()
    if hasattr(target, "current_actor"):
        return target
    if callable(target):
        return CallableActorProvider(target)
    raise ActorLookupError(f"{path!r} is neither an actor provider nor a callable")


def resolve_actor(provider: ActorProvider | None) -> ActorSnapshot:
    """Return the current actor, or an empty snapshot. Never raises."""
    if provider is None:
        return ActorSnapshot()
    try:
        actor = to_snapshot(provider.current_actor())
    except Exception as exc:
        log.warning("Failed to extract actor info: %s", exc)
        return ActorSnapshot()
    if actor is None:
        log.debug("No actor info available (provider returned None)")
        return ActorSnapshot()
    return actor
