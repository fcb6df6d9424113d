"""Default-with-customizations lookup for declarative definitions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from ..core.merge import deep_merge


def as_layer(value: Any) -> Any:
    """Turn a definition layer into plain data that ``deep_merge`` understands.

    Pydantic models keep only explicitly set fields, so unset defaults never
    mask a lower-precedence layer.
    """
    if isinstance(value, BaseModel):
        return value.model_dump(exclude_unset=True)
    if isinstance(value, list):
        return [as_layer(item) for item in value]
    return value


class DefQuery:
    """Keyed definitions with a shared default layer.

    The default is deep-merged under a customization when it is queried.
    List-valued customizations get the default merged into each element.

    Example:
        >>> q = DefQuery(default={"a": 1}, customizations={"x": {"b": 2}})
        >>> q.query("x")
        {'a': 1, 'b': 2}
        >>> q.query("missing") is None
        True
    """

    def __init__(
        self,
        *,
        default: Mapping[str, Any] | BaseModel | None = None,
        customizations: Mapping[str, Any] | None = None,
    ) -> None:
        self._default = as_layer(default) or {}
        self._customizations = {key: as_layer(value) for key, value in (customizations or {}).items()}

    def query(self, key: str) -> Any:
        """Merged definition for ``key``, or None if it is not customized."""
        if key not in self._customizations:
            return None
        value = self._customizations[key]
        if isinstance(value, list):
            return [deep_merge(self._default, item) for item in value]
        return deep_merge(self._default, value)

    def all_keys(self) -> list[str]:
        return list(self._customizations)

    def __contains__(self, key: object) -> bool:
        return key in self._customizations
