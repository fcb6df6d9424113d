"""Pagination strategies and page traversal.

Architecture:
    The pagination layer consists of:
    - definitions.py: Continuation contract (PaginationFunction, TraversalState)
      and the resolved PaginationDefinition
    - strategies.py: Built-in strategy factories (none, token, cursor, offset,
      page_number)
    - table.py: Immutable strategy-id -> definition table, buildable from config
    - traversal.py: PageTraverser running the per-context fetch loops

Usage:
    Endpoints opt into pagination by naming a strategy id; the id is resolved
    once per request against the PaginationTable and the traverser drives the
    strategy's continuation function until it returns None.
"""

from __future__ import annotations

from .definitions import PaginationDefinition, PaginationFunction, TraversalState
from .strategies import (
    STRATEGY_FACTORIES,
    cursor_pagination,
    no_pagination,
    offset_pagination,
    page_number_pagination,
    same_path,
    token_pagination,
)
from .table import NONE_DEFINITION, PaginationConfig, PaginationTable
from .traversal import PagesWithContext, PageTraverser, substitute_call_args

__all__ = [
    "PaginationDefinition",
    "PaginationFunction",
    "TraversalState",
    "PaginationTable",
    "PaginationConfig",
    "NONE_DEFINITION",
    "STRATEGY_FACTORIES",
    "no_pagination",
    "token_pagination",
    "cursor_pagination",
    "offset_pagination",
    "page_number_pagination",
    "same_path",
    "PageTraverser",
    "PagesWithContext",
    "substitute_call_args",
]
