"""Page traversal across contexts.

This module provides the PageTraverser class that issues paginated HTTP
calls for every context of a request and groups the raw pages per context.

Each context runs its own INIT -> FETCHING -> DONE loop. Calls within a
context are strictly sequential because each depends on the previous
page; different contexts are traversed concurrently.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from time import perf_counter

from ...core.enums import TraversalStage
from ...core.templates import replace_all_args
from ...core.types import CallArgs, Context, HttpClientLike, Response
from ..tasks import gather_or_cancel
from ..telemetry import (
    log_page_fetched,
    log_traversal_complete,
    log_traversal_error,
    log_traversal_loop_detected,
    log_traversal_started,
)
from .definitions import PaginationDefinition, TraversalState


@dataclass
class PagesWithContext:
    """Ordered pages fetched for one context."""

    context: Context
    pages: list[Response]


def substitute_call_args(call: CallArgs, context: Context) -> CallArgs:
    """Fill the templated parts of ``call`` from ``context``.

    Raises:
        UnresolvedArgumentError: If a placeholder has no value in ``context``
    """
    replaced = replace_all_args(
        {
            "path": call.path,
            "query_args": call.query_args,
            "headers": call.headers,
            "body": call.body,
        },
        context,
    )
    return CallArgs(
        path=str(replaced["path"]),
        method=call.method,
        query_args=replaced["query_args"],
        headers=replaced["headers"],
        body=replaced["body"],
    )


class PageTraverser:
    """Fetches all pages of one endpoint for a set of contexts.

    The traverser takes the HTTP client of the endpoint's client definition
    and the resolved pagination strategy, then loops each context until its
    continuation function signals termination.
    """

    def __init__(
        self,
        client: HttpClientLike,
        pagination: PaginationDefinition,
        *,
        endpoint_id: str = "unknown",
    ) -> None:
        """Initialize page traverser.

        Args:
            client: HTTP collaborator executing the calls
            pagination: Strategy deciding continuation
            endpoint_id: Identifier used in telemetry
        """
        self._client = client
        self._pagination = pagination
        self._endpoint_id = endpoint_id

    async def traverse(
        self, *, contexts: Sequence[Context], call_args: CallArgs
    ) -> list[PagesWithContext]:
        """Traverse pages for every context concurrently.

        Args:
            contexts: Argument bindings, one traversal each
            call_args: Templated base call arguments

        Returns:
            Pages grouped per context, in the order of ``contexts``

        Raises:
            UnresolvedArgumentError: If a context cannot fill the templates;
                raised for all contexts before any call is made
            Exception: Whatever the HTTP client raises; the first failure
                cancels the remaining contexts and aborts the whole batch
        """
        first_calls = [substitute_call_args(call_args, context) for context in contexts]
        return await gather_or_cancel(
            *(self._traverse_context(context, call) for context, call in zip(contexts, first_calls))
        )

    async def _traverse_context(self, context: Context, first_call: CallArgs) -> PagesWithContext:
        stage = TraversalStage.INIT
        pages: list[Response] = []
        current = first_call
        calls = [current]
        seen = {current.fingerprint()}
        log_traversal_started(endpoint_id=self._endpoint_id, context_keys=sorted(context))

        stage = TraversalStage.FETCHING
        while stage is TraversalStage.FETCHING:
            page_start = perf_counter()
            try:
                response = await self._client.execute(current)
            except Exception as e:
                log_traversal_error(
                    endpoint_id=self._endpoint_id,
                    page_index=len(pages),
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise
            pages.append(response)
            log_page_fetched(
                endpoint_id=self._endpoint_id,
                page_index=len(pages) - 1,
                status=response.status,
                latency_ms=(perf_counter() - page_start) * 1000.0,
            )

            next_call = self._pagination.func(
                response=response,
                current=current,
                state=TraversalState(
                    context=context, pages_fetched=len(pages), calls=tuple(calls)
                ),
            )
            if next_call is None:
                stage = TraversalStage.DONE
                continue

            fingerprint = next_call.fingerprint()
            if fingerprint in seen:
                log_traversal_loop_detected(
                    endpoint_id=self._endpoint_id, page_index=len(pages) - 1
                )
                stage = TraversalStage.DONE
                continue
            seen.add(fingerprint)
            calls.append(next_call)
            current = next_call

        log_traversal_complete(endpoint_id=self._endpoint_id, pages=len(pages))
        return PagesWithContext(context=context, pages=pages)
