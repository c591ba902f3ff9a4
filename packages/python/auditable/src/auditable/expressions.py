"""Restricted entity-id expressions.

Expressions are small attribute paths evaluated against a wrapped call::

    result.id           # attribute of the return value
    #p0.customer_id     # first argument; #name only reads call variables
    #order_id           # named parameter
    order_id            # attribute/key of the result, else a call variable
    get_id()            # zero-argument method of the result
    p1["id"]            # key lookup

Only names, attribute access, constant subscripts and zero-argument method
calls are allowed. Anything else raises :class:`ExpressionError`.
"""

from __future__ import annotations

import ast
import re
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Protocol

from auditable.errors import ExpressionError

_HASH_PREFIX = re.compile(r"#(?=[A-Za-z_])")
_VARIABLE_MARKER = "__var__"


class ExpressionEvaluator(Protocol):
    def evaluate(self, expression: str, root: Any, variables: Mapping[str, Any]) -> Any: ...


@lru_cache(maxsize=256)
def _parse(expression: str) -> ast.expr:
    source = _HASH_PREFIX.sub(_VARIABLE_MARKER, expression.strip())
    if not source:
        raise ExpressionError("Empty expression")
    try:
        return ast.parse(source, mode="eval").body
    except SyntaxError as exc:
        raise ExpressionError(f"Invalid expression {expression!r}: {exc.msg}") from exc


def _check_attr(name: str) -> str:
    if name.startswith("_"):
        raise ExpressionError(f"Access to private attribute {name!r} is not allowed")
    return name


class RestrictedEvaluator:
    """Walks a whitelisted subset of Python expression syntax."""

    def evaluate(self, expression: str, root: Any, variables: Mapping[str, Any]) -> Any:
        node = _parse(expression)
        return self._eval(node, root, variables)

    def _eval(self, node: ast.expr, root: Any, variables: Mapping[str, Any]) -> Any:
        if isinstance(node, ast.Constant):
            return node.value
        if isinstance(node, ast.Name):
            return self._lookup(node.id, root, variables)
        if isinstance(node, ast.Attribute):
            target = self._eval(node.value, root, variables)
            return _get_attr(target, _check_attr(node.attr))
        if isinstance(node, ast.Subscript):
            target = self._eval(node.value, root, variables)
            key = self._eval(node.slice, root, variables)
            try:
                return target[key]
            except (KeyError, IndexError, TypeError) as exc:
                raise ExpressionError(f"Cannot subscript {type(target).__name__} with {key!r}") from exc
        if isinstance(node, ast.Call):
            if node.args or node.keywords:
                raise ExpressionError("Only zero-argument method calls are allowed")
            func = self._eval(node.func, root, variables)
            if not callable(func):
                raise ExpressionError(f"{ast.unparse(node.func)!r} is not callable")
            try:
                return func()
            except Exception as exc:
                raise ExpressionError(f"Call to {ast.unparse(node.func)!r} failed: {exc}") from exc
        raise ExpressionError(f"Unsupported expression element: {type(node).__name__}")

    @staticmethod
    def _lookup(name: str, root: Any, variables: Mapping[str, Any]) -> Any:
        if name.startswith(_VARIABLE_MARKER):
            variable = name[len(_VARIABLE_MARKER):]
            if variable in variables:
                return variables[variable]
            raise ExpressionError(f"Unknown variable #{variable}")
        if root is not None and not name.startswith("_"):
            if isinstance(root, Mapping):
                if name in root:
                    return root[name]
            else:
                try:
                    return getattr(root, name)
                except AttributeError:
                    pass
        if name in variables:
            return variables[name]
        _check_attr(name)
        raise ExpressionError(f"Unknown name {name!r}")


def _get_attr(target: Any, name: str) -> Any:
    if target is None:
        raise ExpressionError(f"Cannot read {name!r} of None")
    try:
        return getattr(target, name)
    except AttributeError:
        pass
    if isinstance(target, Mapping) and name in target:
        return target[name]
    raise ExpressionError(f"{type(target).__name__} has no attribute {name!r}")


default_evaluator = RestrictedEvaluator()
