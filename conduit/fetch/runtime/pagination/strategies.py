"""Built-in pagination strategies.

Each factory returns a PaginationFunction closed over its parameters.
Strategies never mutate the current CallArgs; they return an updated copy
for the next call, or None to stop.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import parse_qsl, urlsplit

from ...config import DEFAULT_FIRST_PAGE, DEFAULT_PAGE_SIZE, NO_PAGINATION
from ...core.templates import get_path
from ...core.types import CallArgs, Response
from .definitions import PaginationFunction, TraversalState

logger = logging.getLogger(__name__)


def _with_query_args(current: CallArgs, **updates: Any) -> CallArgs:
    return current.model_copy(update={"query_args": {**current.query_args, **updates}})


def _page_items(response: Response, items_field: str | None) -> list[Any]:
    items = get_path(response.data, items_field) if items_field else response.data
    return items if isinstance(items, list) else []


def same_path(current_path: str, next_path: str) -> bool:
    """Default path check for cursor links: the link must stay on the same endpoint."""
    return current_path.rstrip("/") == next_path.rstrip("/")


def no_pagination() -> PaginationFunction:
    """Single page, never continues."""

    def next_page(
        *, response: Response, current: CallArgs, state: TraversalState
    ) -> CallArgs | None:
        return None

    return next_page


def token_pagination(*, token_field: str, query_arg: str) -> PaginationFunction:
    """Continue while the page carries a continuation token.

    Args:
        token_field: Dotted path of the token in the response body
        query_arg: Query argument the token is sent back in
    """

    def next_page(
        *, response: Response, current: CallArgs, state: TraversalState
    ) -> CallArgs | None:
        token = get_path(response.data, token_field)
        if token is None or token == "":
            return None
        return _with_query_args(current, **{query_arg: token})

    return next_page


def cursor_pagination(
    *,
    cursor_field: str,
    path_checker: Callable[[str, str], bool] = same_path,
) -> PaginationFunction:
    """Follow a next-page link returned in the response body.

    The link may be an absolute URL or a path with a query string. Its query
    arguments are layered over the current ones.

    Args:
        cursor_field: Dotted path of the next-page link in the response body
        path_checker: Decides whether the link's path may be followed from
            the current path
    """

    def next_page(
        *, response: Response, current: CallArgs, state: TraversalState
    ) -> CallArgs | None:
        link = get_path(response.data, cursor_field)
        if not isinstance(link, str) or not link:
            return None
        parsed = urlsplit(link)
        next_path = parsed.path or current.path
        if not path_checker(current.path, next_path):
            logger.error(
                "pagination_path_mismatch",
                extra={"current_path": current.path, "next_path": next_path},
            )
            return None
        query = dict(parse_qsl(parsed.query, keep_blank_values=True))
        return current.model_copy(
            update={"path": next_path, "query_args": {**current.query_args, **query}}
        )

    return next_page


def offset_pagination(
    *,
    offset_arg: str = "offset",
    limit_arg: str = "limit",
    items_field: str | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> PaginationFunction:
    """Advance an offset by the number of items received.

    Stops on an empty page or a page shorter than the requested limit.

    Args:
        offset_arg: Query argument holding the offset
        limit_arg: Query argument holding the page size
        items_field: Dotted path of the item list (None: the body is the list)
        page_size: Page size assumed when the call carries no limit
    """

    def next_page(
        *, response: Response, current: CallArgs, state: TraversalState
    ) -> CallArgs | None:
        items = _page_items(response, items_field)
        limit = int(current.query_args.get(limit_arg, page_size))
        if not items or len(items) < limit:
            return None
        offset = int(current.query_args.get(offset_arg, 0)) + len(items)
        return _with_query_args(current, **{offset_arg: offset})

    return next_page


def page_number_pagination(
    *,
    page_arg: str = "page",
    items_field: str | None = None,
    first_page: int = DEFAULT_FIRST_PAGE,
) -> PaginationFunction:
    """Request the next page number while pages keep returning items."""

    def next_page(
        *, response: Response, current: CallArgs, state: TraversalState
    ) -> CallArgs | None:
        if not _page_items(response, items_field):
            return None
        page = int(current.query_args.get(page_arg, first_page)) + 1
        return _with_query_args(current, **{page_arg: page})

    return next_page


# Strategy type tag -> factory, used to build pagination tables from config
STRATEGY_FACTORIES: dict[str, Callable[..., PaginationFunction]] = {
    NO_PAGINATION: no_pagination,
    "token": token_pagination,
    "cursor": cursor_pagination,
    "offset": offset_pagination,
    "page_number": page_number_pagination,
}
