"""Placeholder discovery and substitution for templated call arguments.

Templated strings reference context values with ``{root.nested.key}``
placeholders. A string that consists of exactly one placeholder is replaced
by the raw context value (keeping its type); placeholders embedded in a
longer string are formatted with ``str()``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..config import ARG_PATH_SEPARATOR, ARG_PLACEHOLDER_PATTERN
from .exceptions import UnresolvedArgumentError

_MISSING = object()


def get_path(value: Any, path: str, default: Any = None) -> Any:
    """Read a dotted path from nested mappings and sequences.

    Examples:
        >>> get_path({"a": {"b": [10, 20]}}, "a.b.1")
        20
        >>> get_path({"a": 1}, "a.b") is None
        True
    """
    current = value
    for part in path.split(ARG_PATH_SEPARATOR):
        if isinstance(current, Mapping):
            if part not in current:
                return default
            current = current[part]
        elif isinstance(current, list) and part.isdigit():
            index = int(part)
            if index >= len(current):
                return default
            current = current[index]
        else:
            return default
    return current


def find_all_unresolved_args(value: Any) -> list[str]:
    """Collect distinct placeholder names in nested strings, in discovery order."""
    found: dict[str, None] = {}
    _collect_args(value, found)
    return list(found)


def _collect_args(value: Any, found: dict[str, None]) -> None:
    if isinstance(value, str):
        for match in ARG_PLACEHOLDER_PATTERN.finditer(value):
            found.setdefault(match.group(1), None)
    elif isinstance(value, Mapping):
        for nested in value.values():
            _collect_args(nested, found)
    elif isinstance(value, (list, tuple)):
        for nested in value:
            _collect_args(nested, found)


def arg_roots(args: Iterable[str]) -> list[str]:
    """Top-level roots of dotted argument names, deduplicated.

    Examples:
        >>> arg_roots(["parent.id", "parent.name", "org"])
        ['parent', 'org']
    """
    roots: dict[str, None] = {}
    for arg in args:
        root = arg.split(ARG_PATH_SEPARATOR)[0]
        if root:
            roots.setdefault(root, None)
    return list(roots)


def replace_all_args(value: Any, context: Mapping[str, Any], *, strict: bool = True) -> Any:
    """Return a copy of ``value`` with every placeholder filled from ``context``.

    Args:
        value: Nested structure of strings, mappings and lists
        context: Argument root -> value bindings
        strict: Raise when a placeholder cannot be resolved; otherwise the
            placeholder text is left in place

    Raises:
        UnresolvedArgumentError: If ``strict`` and any placeholder is unresolved
    """
    unresolved: dict[str, None] = {}
    replaced = _replace(value, context, unresolved)
    if strict and unresolved:
        names = list(unresolved)
        raise UnresolvedArgumentError(
            f"Could not resolve arguments {names} from context keys {sorted(context)}",
            args=names,
        )
    return replaced


def _replace(value: Any, context: Mapping[str, Any], unresolved: dict[str, None]) -> Any:
    if isinstance(value, str):
        return _replace_in_string(value, context, unresolved)
    if isinstance(value, Mapping):
        return {key: _replace(nested, context, unresolved) for key, nested in value.items()}
    if isinstance(value, list):
        return [_replace(nested, context, unresolved) for nested in value]
    return value


def _replace_in_string(value: str, context: Mapping[str, Any], unresolved: dict[str, None]) -> Any:
    whole = ARG_PLACEHOLDER_PATTERN.fullmatch(value)
    if whole is not None:
        resolved = get_path(context, whole.group(1), _MISSING)
        if resolved is _MISSING:
            unresolved.setdefault(whole.group(1), None)
            return value
        return resolved

    def substitute(match: Any) -> str:
        resolved = get_path(context, match.group(1), _MISSING)
        if resolved is _MISSING:
            unresolved.setdefault(match.group(1), None)
            return match.group(0)
        return str(resolved)

    return ARG_PLACEHOLDER_PATTERN.sub(substitute, value)
