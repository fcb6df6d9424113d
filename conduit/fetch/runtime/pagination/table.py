"""Immutable pagination-strategy table.

The table maps strategy ids to PaginationDefinitions. It is built once,
before any fetch starts, and is shared read-only by every request. The
trivial ``none`` strategy is always present.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ...config import NO_PAGINATION
from ...core.exceptions import DefinitionError, PaginationNotFoundError
from .definitions import PaginationDefinition
from .strategies import STRATEGY_FACTORIES, no_pagination

logger = logging.getLogger(__name__)

NONE_DEFINITION = PaginationDefinition(strategy_id=NO_PAGINATION, func=no_pagination())


class PaginationConfig(BaseModel):
    """Config entry for one strategy id."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str
    params: dict[str, Any] = Field(default_factory=dict)
    client_args: dict[str, Any] = Field(default_factory=dict)


class PaginationTable:
    """Lookup from strategy id to PaginationDefinition."""

    def __init__(self, definitions: Mapping[str, PaginationDefinition] | None = None) -> None:
        definitions = dict(definitions or {})
        if NO_PAGINATION in definitions:
            raise DefinitionError(f"Pagination id '{NO_PAGINATION}' is reserved")
        definitions[NO_PAGINATION] = NONE_DEFINITION
        self._definitions = MappingProxyType(definitions)

    def lookup(self, strategy_id: str | None) -> PaginationDefinition:
        """Resolve a strategy id; None means no pagination.

        Raises:
            PaginationNotFoundError: If the id is not registered
        """
        if strategy_id is None:
            return NONE_DEFINITION
        definition = self._definitions.get(strategy_id)
        if definition is None:
            logger.error("pagination_not_found", extra={"strategy_id": strategy_id})
            raise PaginationNotFoundError(
                f"Pagination strategy '{strategy_id}' is not defined", strategy_id=strategy_id
            )
        return definition

    def ids(self) -> list[str]:
        return list(self._definitions)

    def __contains__(self, strategy_id: object) -> bool:
        return strategy_id in self._definitions

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> PaginationTable:
        """Build a table from ``{id: {"type": ..., "params": {...}, "client_args": {...}}}``.

        Raises:
            DefinitionError: On unknown strategy types or invalid parameters
        """
        definitions: dict[str, PaginationDefinition] = {}
        for strategy_id, raw in (config or {}).items():
            try:
                entry = PaginationConfig.model_validate(raw)
            except PydanticValidationError as e:
                raise DefinitionError(f"Invalid pagination config '{strategy_id}': {e}") from e
            factory = STRATEGY_FACTORIES.get(entry.type)
            if factory is None:
                raise DefinitionError(
                    f"Unknown pagination type '{entry.type}' for '{strategy_id}'; "
                    f"expected one of {sorted(STRATEGY_FACTORIES)}"
                )
            try:
                func = factory(**entry.params)
            except TypeError as e:
                raise DefinitionError(
                    f"Invalid params for pagination '{strategy_id}': {e}"
                ) from e
            definitions[strategy_id] = PaginationDefinition(
                strategy_id=strategy_id, func=func, client_args=entry.client_args
            )
        return cls(definitions)
