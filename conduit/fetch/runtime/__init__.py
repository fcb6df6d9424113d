"""Runtime orchestration components."""

from typing import Any

from .combinations import compute_arg_combinations
from .extraction import create_extractor, create_value_transformer, validate_items
from .pagination import (
    PagesWithContext,
    PageTraverser,
    PaginationDefinition,
    PaginationTable,
    TraversalState,
)

__all__ = [
    "compute_arg_combinations",
    "create_extractor",
    "create_value_transformer",
    "validate_items",
    "PageTraverser",
    "PagesWithContext",
    "PaginationDefinition",
    "PaginationTable",
    "TraversalState",
    # Resolved lazily; these depend on the definitions package, which in
    # turn imports the pagination table from this package
    "MergedDefinition",
    "merge_request_definition",
    "Requester",
]

_MERGER_EXPORTS = {"MergedDefinition", "merge_request_definition"}
_REQUESTER_EXPORTS = {"Requester"}


def __getattr__(name: str) -> Any:
    if name in _MERGER_EXPORTS:
        from . import merger as _merger

        value = getattr(_merger, name)
    elif name in _REQUESTER_EXPORTS:
        from . import requester as _requester

        value = getattr(_requester, name)
    else:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(set(globals().keys()) | _MERGER_EXPORTS | _REQUESTER_EXPORTS)
