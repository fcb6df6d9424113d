"""Deep merge for layered definitions."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any


def deep_merge(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge mappings in ascending precedence (later layers win).

    Overlapping mapping values are merged recursively. Any other overlapping
    value (scalars, lists) is replaced wholesale by the higher layer; lists
    are never concatenated. A ``None`` value in a higher layer means "not
    set" and leaves the lower value in place.

    Inputs are never mutated; the result shares no containers with them.

    Examples:
        >>> deep_merge({"a": 1, "b": 2}, {"b": 3, "c": 4}, {"c": 5})
        {'a': 1, 'b': 3, 'c': 5}
    """
    result: dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        _merge_into(result, layer)
    return result


def _merge_into(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        if value is None:
            continue
        current = target.get(key)
        if isinstance(value, Mapping) and isinstance(current, dict):
            _merge_into(current, value)
        elif isinstance(value, Mapping):
            nested: dict[str, Any] = {}
            _merge_into(nested, value)
            target[key] = nested
        else:
            target[key] = copy.deepcopy(value)
