"""Structured logging for fetch operations.

This module provides telemetry hooks for page traversal and item
extraction, emitting structured log records whose fields travel in
``extra`` for observability backends.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_traversal_started(*, endpoint_id: str, context_keys: list[str]) -> None:
    """Log the start of one context's page traversal.

    Args:
        endpoint_id: Endpoint identifier, ``[client]path:method``
        context_keys: Argument roots bound in the context
    """
    logger.debug(
        "traversal_started",
        extra={"endpoint_id": endpoint_id, "context_keys": context_keys},
    )


def log_page_fetched(
    *,
    endpoint_id: str,
    page_index: int,
    status: int,
    latency_ms: float | None = None,
) -> None:
    """Log a single fetched page.

    Args:
        endpoint_id: Endpoint identifier
        page_index: Zero-based index of the page within its context
        status: HTTP status of the response
        latency_ms: Latency in milliseconds (optional)
    """
    logger.debug(
        "page_fetched",
        extra={
            "endpoint_id": endpoint_id,
            "page_index": page_index,
            "status": status,
            "latency_ms": latency_ms,
        },
    )


def log_traversal_complete(*, endpoint_id: str, pages: int) -> None:
    logger.debug("traversal_complete", extra={"endpoint_id": endpoint_id, "pages": pages})


def log_traversal_loop_detected(*, endpoint_id: str, page_index: int) -> None:
    """Log a continuation that asked for a call already made in this traversal."""
    logger.warning(
        "traversal_loop_detected",
        extra={"endpoint_id": endpoint_id, "page_index": page_index},
    )


def log_traversal_error(
    *,
    endpoint_id: str,
    page_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a failed page fetch.

    Args:
        endpoint_id: Endpoint identifier
        page_index: Zero-based index of the page that failed
        error_type: Type of error (e.g., "TransportError")
        error_message: Error message
    """
    logger.error(
        "traversal_error",
        extra={
            "endpoint_id": endpoint_id,
            "page_index": page_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_invalid_item_dropped(*, client: str, path: str, method: str, type_name: str) -> None:
    """Log an extracted item that is not a plain record.

    Args:
        client: Client name the request was made through
        path: Endpoint path
        method: Endpoint method
        type_name: Resource type the item was extracted for
    """
    logger.warning(
        "extracted invalid item for endpoint %s.%s:%s %s",
        client,
        path,
        method,
        type_name,
        extra={
            "event": "invalid_item_dropped",
            "client": client,
            "path": path,
            "method": method,
            "type_name": type_name,
        },
    )


def log_invalid_adjust_result(*, type_name: str, result_type: str) -> None:
    """Log an adjust hook result that is neither None, a mapping nor an item."""
    logger.warning(
        "adjust_result_dropped",
        extra={"type_name": type_name, "result_type": result_type},
    )


def log_request_complete(*, endpoint_id: str, type_name: str, contexts: int, items: int) -> None:
    logger.info(
        "request_complete",
        extra={
            "endpoint_id": endpoint_id,
            "type_name": type_name,
            "contexts": contexts,
            "items": items,
        },
    )
