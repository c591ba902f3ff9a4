"""Best-effort entity-id extraction from arbitrary objects."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from numbers import Number
from typing import Any

log = logging.getLogger(__name__)

_ID_METHODS = ("get_id",)
_SYNONYM_METHODS = ("get_uuid",)
_SYNONYM_ATTRS = ("uuid", "identifier")


def _call_method(obj: Any, name: str) -> str | None:
    try:
        method = getattr(obj, name, None)
        if not callable(method):
            return None
        value = method()
    except Exception:
        return None
    return None if value is None else str(value)


def _read_attr(obj: Any, name: str) -> str | None:
    try:
        value = getattr(obj, name, None)
        if callable(value):
            value = value()
    except Exception:
        return None
    return None if value is None else str(value)


def _read_field(obj: Any, name: str) -> str | None:
    try:
        if isinstance(obj, Mapping):
            value = obj.get(name)
        else:
            value = getattr(obj, name, None)
    except Exception:
        return None
    if value is None or callable(value):
        return None
    return str(value)


def extract_entity_id(entity: Any) -> str | None:
    """Return the identifier of *entity*, or None.

    Plain strings, booleans and numbers are rejected: a wrapped call returning
    ``"customer created"`` or ``True`` says nothing about which entity was
    touched. Objects are probed for ``get_id()``, then ``get_uuid()`` /
    ``uuid`` / ``identifier``, then a raw ``id`` field (attribute or mapping
    key). When all probes fail the object's ``str()`` is used.
    """
    if entity is None:
        return None

    if isinstance(entity, (str, bytes)):
        log.warning(
            "Plain string %r rejected as entity id; use set_entity_id() or entity_id_expression",
            entity,
        )
        return None

    if isinstance(entity, (bool, Number)):
        log.warning(
            "Scalar %s rejected as entity id; use set_entity_id() or entity_id_expression",
            type(entity).__name__,
        )
        return None

    for name in _ID_METHODS:
        entity_id = _call_method(entity, name)
        if entity_id is not None:
            return entity_id

    for name in _SYNONYM_METHODS:
        entity_id = _call_method(entity, name)
        if entity_id is not None:
            return entity_id
    for name in _SYNONYM_ATTRS:
        entity_id = _read_attr(entity, name)
        if entity_id is not None:
            return entity_id

    entity_id = _read_field(entity, "id")
    if entity_id is not None:
        return entity_id

    log.warning("Could not extract entity id from %s, using str()", type(entity).__name__)
    try:
        return str(entity)
    except Exception:
        return None
