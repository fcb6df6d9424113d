"""Pagination metadata definitions.

This module defines the contract every pagination strategy implements and
the immutable definition the traversal engine resolves per request.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from ...core.types import CallArgs, Context, Response


@dataclass(frozen=True)
class TraversalState:
    """Accumulated state handed to a continuation function.

    Attributes:
        context: Context the traversal was started for
        pages_fetched: Number of pages fetched so far, including the current one
        calls: Calls issued so far in this traversal, oldest first; the last
            one produced the current page
    """

    context: Context
    pages_fetched: int
    calls: tuple[CallArgs, ...] = ()


class PaginationFunction(Protocol):
    """Decides the next call from the page just fetched.

    Returns the next call's arguments, or None when traversal is done.
    """

    def __call__(
        self, *, response: Response, current: CallArgs, state: TraversalState
    ) -> CallArgs | None: ...


@dataclass(frozen=True)
class PaginationDefinition:
    """A pagination strategy as resolved from the pagination table.

    Attributes:
        strategy_id: Identifier the strategy is registered under
        func: Continuation function
        client_args: Lowest-precedence call arguments every endpoint using
            this strategy receives, shaped like endpoint args
            (e.g. ``{"query_args": {"per_page": 100}}``)
    """

    strategy_id: str
    func: PaginationFunction
    client_args: Mapping[str, Any] = field(default_factory=dict)
