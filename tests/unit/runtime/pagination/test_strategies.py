"""Unit tests for built-in pagination strategies."""

from conduit.fetch.core import CallArgs, Response
from conduit.fetch.runtime.pagination import (
    TraversalState,
    cursor_pagination,
    no_pagination,
    offset_pagination,
    page_number_pagination,
    token_pagination,
)

STATE = TraversalState(context={}, pages_fetched=1)


def _next(func, data, current):
    return func(response=Response(data=data), current=current, state=STATE)


class TestNoPagination:
    def test_always_stops(self):
        assert _next(no_pagination(), {"next": "t1"}, CallArgs(path="/a")) is None


class TestTokenPagination:
    """Test continuation-token pagination."""

    def test_token_sent_back_as_query_arg(self):
        func = token_pagination(token_field="meta.next", query_arg="cursor")
        current = CallArgs(path="/tickets", query_args={"per_page": 10})

        next_call = _next(func, {"meta": {"next": "t1"}}, current)

        assert next_call.query_args == {"per_page": 10, "cursor": "t1"}
        assert next_call.path == "/tickets"
        assert current.query_args == {"per_page": 10}

    def test_missing_or_empty_token_stops(self):
        func = token_pagination(token_field="next", query_arg="cursor")
        assert _next(func, {"next": None}, CallArgs(path="/a")) is None
        assert _next(func, {"next": ""}, CallArgs(path="/a")) is None
        assert _next(func, {}, CallArgs(path="/a")) is None


class TestCursorPagination:
    """Test next-link pagination."""

    def test_follows_absolute_url(self):
        func = cursor_pagination(cursor_field="links.next")
        current = CallArgs(path="/api/tickets", query_args={"per_page": 10})

        next_call = _next(
            func,
            {"links": {"next": "https://example.com/api/tickets?page%5Bafter%5D=abc&per_page=10"}},
            current,
        )

        assert next_call.path == "/api/tickets"
        assert next_call.query_args == {"per_page": "10", "page[after]": "abc"}

    def test_relative_link_with_query_only(self):
        func = cursor_pagination(cursor_field="next")
        next_call = _next(func, {"next": "?cursor=xyz"}, CallArgs(path="/api/tickets"))
        assert next_call.path == "/api/tickets"
        assert next_call.query_args == {"cursor": "xyz"}

    def test_different_path_is_rejected(self, caplog):
        func = cursor_pagination(cursor_field="next")
        assert _next(func, {"next": "/api/users?page=2"}, CallArgs(path="/api/tickets")) is None
        assert "pagination_path_mismatch" in caplog.text

    def test_custom_path_checker(self):
        func = cursor_pagination(cursor_field="next", path_checker=lambda current, nxt: True)
        next_call = _next(func, {"next": "/v2/tickets?page=2"}, CallArgs(path="/tickets"))
        assert next_call.path == "/v2/tickets"

    def test_no_link_stops(self):
        func = cursor_pagination(cursor_field="next")
        assert _next(func, {"next": None}, CallArgs(path="/a")) is None
        assert _next(func, {"next": 5}, CallArgs(path="/a")) is None


class TestOffsetPagination:
    """Test offset/limit pagination."""

    def test_full_page_advances_offset(self):
        func = offset_pagination(items_field="values")
        current = CallArgs(path="/a", query_args={"limit": 2, "offset": 4})
        next_call = _next(func, {"values": [1, 2]}, current)
        assert next_call.query_args == {"limit": 2, "offset": 6}

    def test_missing_offset_starts_at_zero(self):
        func = offset_pagination(page_size=2)
        next_call = _next(func, [1, 2], CallArgs(path="/a"))
        assert next_call.query_args == {"offset": 2}

    def test_short_or_empty_page_stops(self):
        func = offset_pagination(items_field="values")
        current = CallArgs(path="/a", query_args={"limit": 3})
        assert _next(func, {"values": [1, 2]}, current) is None
        assert _next(func, {"values": []}, current) is None
        assert _next(func, {"other": 1}, current) is None


class TestPageNumberPagination:
    """Test page-number pagination."""

    def test_increments_page_while_items(self):
        func = page_number_pagination(items_field="data")
        next_call = _next(func, {"data": [1]}, CallArgs(path="/a", query_args={"page": "3"}))
        assert next_call.query_args == {"page": 4}

    def test_first_page_default(self):
        func = page_number_pagination(page_arg="p", first_page=0)
        assert _next(func, [1], CallArgs(path="/a")).query_args == {"p": 1}

    def test_empty_page_stops(self):
        func = page_number_pagination(items_field="data")
        assert _next(func, {"data": []}, CallArgs(path="/a")) is None
