"""Requester facade over the declarative fetch engine.

The Requester is the only component callers talk to. It coordinates:
1. Definition merging (registry endpoint + pagination defaults + overrides)
2. Argument combination (for resource-wide fetches)
3. Page traversal per context
4. Item extraction and validation

Request Flow:
    1. Merge -> fail fast on unknown / non-readonly endpoints, before any call
    2. Substitute each context into the templated call args
    3. Traverse pages for all contexts concurrently
    4. Extract items page by page, tag them with their traversal context
    5. Drop and log items that are not plain records

Concurrency:
    Contexts of one request, and request definitions of one resource, run
    concurrently via gather_or_cancel. The first failure cancels the
    siblings still running and aborts the batch; there is no partial-result
    mode.

See Also:
    - FetchDefinitions: The immutable configuration the requester runs on
    - PageTraverser: Per-context pagination loops
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from ..core.types import Context, RequestDefinition, ResourceIdentifier, ValueGeneratedItem
from ..definitions.registry import FetchDefinitions
from .combinations import compute_arg_combinations
from .extraction import create_extractor, validate_items
from .merger import MergedDefinition, merge_request_definition
from .pagination.traversal import PageTraverser
from .tasks import gather_or_cancel
from .telemetry import log_request_complete

logger = logging.getLogger(__name__)


class Requester:
    """Fetches validated records for request definitions and resource types."""

    def __init__(self, definitions: FetchDefinitions) -> None:
        """Initialize the requester.

        Args:
            definitions: Clients, endpoints, pagination strategies and request
                definitions; never mutated by the requester
        """
        self._definitions = definitions

    async def request(
        self,
        *,
        request_def: RequestDefinition,
        contexts: Sequence[Context],
        type_name: str,
    ) -> list[ValueGeneratedItem]:
        """Fetch and extract items for one request definition.

        Args:
            request_def: Definition to fetch
            contexts: Argument bindings; one paginated traversal each
            type_name: Resource type the items are tagged with

        Returns:
            Valid items, each carrying the context it was fetched under

        Raises:
            DefinitionError: On misconfigured endpoints or unresolvable
                placeholders; raised before any network call
            TransportError: Propagated from the HTTP client
        """
        merged = merge_request_definition(request_def, self._definitions)
        return await self._request_merged(merged, contexts, type_name)

    async def request_all_for_resource(
        self,
        *,
        context_possible_args: Mapping[str, Iterable[Any]],
        caller_identifier: ResourceIdentifier,
    ) -> list[ValueGeneratedItem]:
        """Fetch items from every request definition registered for a resource type.

        Each definition only varies the argument roots its templates reference.

        Args:
            context_possible_args: Candidate values per argument root
            caller_identifier: Resource whose request definitions are used

        Returns:
            Items from all definitions, concatenated
        """
        type_name = caller_identifier.type_name
        plans: list[tuple[MergedDefinition, list[Context]]] = []
        for request_def in self._definitions.query_request_definitions(type_name):
            merged = merge_request_definition(request_def, self._definitions)
            contexts = compute_arg_combinations(
                context_possible_args, merged.relevant_arg_roots()
            )
            plans.append((merged, contexts))

        if not plans:
            logger.debug("no request definitions for type %s", type_name)
            return []

        results = await gather_or_cancel(
            *(self._request_merged(merged, contexts, type_name) for merged, contexts in plans)
        )
        return [item for items in results for item in items]

    async def _request_merged(
        self,
        merged: MergedDefinition,
        contexts: Sequence[Context],
        type_name: str,
    ) -> list[ValueGeneratedItem]:
        # TODO reuse in-flight traversals for identical (endpoint, context) pairs
        # requested by several resource flows
        logger.debug(
            "traversing pages for adapter %s endpoint %s",
            self._definitions.adapter_name,
            merged.endpoint_id,
        )
        traverser = PageTraverser(
            self._definitions.http_client(merged.client_name),
            merged.pagination,
            endpoint_id=merged.endpoint_id,
        )
        pages_with_context = await traverser.traverse(
            contexts=contexts, call_args=merged.call_args
        )

        extractor = create_extractor(merged.request, type_name)
        items = (
            item.model_copy(update={"context": dict(entry.context)})
            for entry in pages_with_context
            for item in extractor(entry.pages)
        )
        valid = list(
            validate_items(
                items,
                client=merged.client_name,
                path=merged.endpoint.path,
                method=merged.endpoint.method.value,
                type_name=type_name,
            )
        )
        log_request_complete(
            endpoint_id=merged.endpoint_id,
            type_name=type_name,
            contexts=len(contexts),
            items=len(valid),
        )
        return valid
