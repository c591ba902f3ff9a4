"""Entity-id resolution for wrapped calls.

Strategies run in a fixed order and the first non-None value wins:

1. the invocation's explicit override (:func:`auditable.context.set_entity_id`);
2. the declared ``entity_id_expression``, evaluated against the result and the
   call arguments;
3. reflective extraction on the result (:func:`extract_entity_id`).

When the call raised, only its first argument is inspected.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable

from audit_common import AuditSpec

from auditable.context import get_entity_id
from auditable.expressions import ExpressionEvaluator, default_evaluator
from auditable.extraction import extract_entity_id

log = logging.getLogger(__name__)

_BOUND_NAMES = ("self", "cls")


class CallArguments:
    """Positional and named arguments of one call, minus a bound ``self``/``cls``."""

    def __init__(self, positional: list[Any] | None = None, named: dict[str, Any] | None = None):
        self.positional = positional or []
        self.named = named or {}

    @classmethod
    def from_call(cls, fn: Callable[..., Any], args: tuple, kwargs: dict) -> CallArguments:
        try:
            bound = inspect.signature(fn).bind_partial(*args, **kwargs)
        except (TypeError, ValueError):
            return cls(list(args), dict(kwargs))
        bound.apply_defaults()

        positional: list[Any] = []
        named: dict[str, Any] = {}
        for index, (name, value) in enumerate(bound.arguments.items()):
            kind = bound.signature.parameters[name].kind
            if index == 0 and name in _BOUND_NAMES:
                continue
            if kind is inspect.Parameter.VAR_POSITIONAL:
                positional.extend(value)
            elif kind is inspect.Parameter.VAR_KEYWORD:
                named.update(value)
            elif kind is inspect.Parameter.KEYWORD_ONLY:
                named[name] = value
            else:
                positional.append(value)
                named[name] = value
        return cls(positional, named)

    @property
    def first(self) -> Any:
        return self.positional[0] if self.positional else None

    def variables(self, result: Any) -> dict[str, Any]:
        """Expression bindings: ``p0..pN``, parameter names, then ``result``."""
        bindings: dict[str, Any] = {f"p{i}": value for i, value in enumerate(self.positional)}
        bindings.update(self.named)
        bindings["result"] = result
        return bindings


class IdentityResolver:
    def __init__(self, evaluator: ExpressionEvaluator | None = None):
        self._evaluator = evaluator or default_evaluator

    def resolve_success(self, spec: AuditSpec, result: Any, arguments: CallArguments) -> str | None:
        entity_id = get_entity_id()
        if entity_id is not None:
            log.debug("Entity id taken from audit context: %s", entity_id)
            return entity_id

        if spec.entity_id_expression:
            entity_id = self._evaluate(spec.entity_id_expression, result, arguments)
            if entity_id is not None:
                log.debug("Entity id from expression %r: %s", spec.entity_id_expression, entity_id)
                return entity_id

        entity_id = extract_entity_id(result)
        if entity_id is None:
            log.warning(
                "Could not resolve entity id for %s %s; consider set_entity_id() or entity_id_expression",
                spec.action,
                spec.entity_type,
            )
        return entity_id

    def resolve_failure(self, arguments: CallArguments) -> str | None:
        return extract_entity_id(arguments.first)

    def _evaluate(self, expression: str, result: Any, arguments: CallArguments) -> str | None:
        try:
            value = self._evaluator.evaluate(expression, result, arguments.variables(result))
        except Exception as exc:
            log.warning("Failed to extract entity id using expression %r: %s. Trying fallback extraction.", expression, exc)
            return None
        return None if value is None else str(value)
