"""Unit tests for page traversal."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from conduit.fetch.core import (
    CallArgs,
    Response,
    TransportError,
    UnresolvedArgumentError,
)
from conduit.fetch.runtime.pagination import (
    NONE_DEFINITION,
    PageTraverser,
    PaginationDefinition,
    TraversalState,
    token_pagination,
)

TOKEN = PaginationDefinition(
    strategy_id="token", func=token_pagination(token_field="next", query_arg="cursor")
)


@pytest.fixture
def client():
    """Create mock HTTP client."""
    mock = MagicMock()
    mock.execute = AsyncMock(return_value=Response(data={"items": []}))
    return mock


class TestPageTraverser:
    """Test the per-context fetch loop."""

    @pytest.mark.asyncio
    async def test_none_strategy_fetches_one_page_per_context(self, client):
        traverser = PageTraverser(client, NONE_DEFINITION)

        result = await traverser.traverse(
            contexts=[{"id": 1}, {"id": 2}],
            call_args=CallArgs(path="/tickets/{id}"),
        )

        assert [entry.context for entry in result] == [{"id": 1}, {"id": 2}]
        assert [len(entry.pages) for entry in result] == [1, 1]
        paths = sorted(call.args[0].path for call in client.execute.call_args_list)
        assert paths == ["/tickets/1", "/tickets/2"]

    @pytest.mark.asyncio
    async def test_token_strategy_stops_after_null_token(self, client):
        client.execute.side_effect = [
            Response(data={"items": [1], "next": "t1"}),
            Response(data={"items": [2], "next": "t2"}),
            Response(data={"items": [3], "next": None}),
        ]
        traverser = PageTraverser(client, TOKEN)

        (entry,) = await traverser.traverse(contexts=[{}], call_args=CallArgs(path="/items"))

        assert [page.data["items"] for page in entry.pages] == [[1], [2], [3]]
        sent = [call.args[0].query_args for call in client.execute.call_args_list]
        assert sent == [{}, {"cursor": "t1"}, {"cursor": "t2"}]

    @pytest.mark.asyncio
    async def test_context_substituted_into_all_call_parts(self, client):
        traverser = PageTraverser(client, NONE_DEFINITION)

        await traverser.traverse(
            contexts=[{"group": {"id": 7, "org": "acme"}}],
            call_args=CallArgs(
                path="/groups/{group.id}/users",
                query_args={"org": "{group.org}"},
                headers={"X-Group": "{group.id}"},
                body={"group_id": "{group.id}"},
            ),
        )

        call = client.execute.call_args.args[0]
        assert call.path == "/groups/7/users"
        assert call.query_args == {"org": "acme"}
        assert call.headers == {"X-Group": 7}
        assert call.body == {"group_id": 7}

    @pytest.mark.asyncio
    async def test_unresolved_args_fail_before_any_call(self, client):
        traverser = PageTraverser(client, NONE_DEFINITION)

        with pytest.raises(UnresolvedArgumentError):
            await traverser.traverse(
                contexts=[{"id": 1}, {}], call_args=CallArgs(path="/tickets/{id}")
            )

        client.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, client, caplog):
        client.execute.side_effect = TransportError("boom", status_code=500)
        traverser = PageTraverser(client, NONE_DEFINITION, endpoint_id="[main]/a:get")

        with pytest.raises(TransportError):
            await traverser.traverse(contexts=[{}], call_args=CallArgs(path="/a"))

        assert "traversal_error" in caplog.text

    @pytest.mark.asyncio
    async def test_failing_context_cancels_siblings(self):
        """Test no calls are issued for other contexts once one context fails."""
        pages_served = 0

        async def execute(call: CallArgs) -> Response:
            nonlocal pages_served
            if call.path == "/a/bad":
                raise TransportError("boom", status_code=500)
            await asyncio.sleep(0.01)
            pages_served += 1
            return Response(data={"next": f"t{pages_served}"})

        client = MagicMock()
        client.execute = AsyncMock(side_effect=execute)
        traverser = PageTraverser(client, TOKEN)

        with pytest.raises(TransportError):
            await traverser.traverse(
                contexts=[{"id": "ok"}, {"id": "bad"}], call_args=CallArgs(path="/a/{id}")
            )
        calls_at_failure = client.execute.call_count
        await asyncio.sleep(0.1)

        assert client.execute.call_count == calls_at_failure
        assert pages_served == 0

    @pytest.mark.asyncio
    async def test_all_sibling_contexts_joined_on_failure(self):
        """Test siblings are finished, not left pending, when the batch fails."""
        started: list[asyncio.Task] = []

        async def execute(call: CallArgs) -> Response:
            started.append(asyncio.current_task())
            if call.path == "/a/2":
                raise TransportError("boom")
            await asyncio.sleep(10)
            return Response(data={})

        client = MagicMock()
        client.execute = AsyncMock(side_effect=execute)
        traverser = PageTraverser(client, NONE_DEFINITION)

        with pytest.raises(TransportError):
            await traverser.traverse(
                contexts=[{"id": 1}, {"id": 2}, {"id": 3}], call_args=CallArgs(path="/a/{id}")
            )

        assert len(started) == 3
        assert all(task.done() for task in started)

    @pytest.mark.asyncio
    async def test_repeated_call_stops_traversal(self, client, caplog):
        """Test a continuation that keeps asking for the same call cannot loop."""

        def stuck(*, response: Response, current: CallArgs, state: TraversalState):
            return current.model_copy(update={"query_args": {"page": 2}})

        traverser = PageTraverser(client, PaginationDefinition(strategy_id="stuck", func=stuck))

        (entry,) = await traverser.traverse(contexts=[{}], call_args=CallArgs(path="/a"))

        assert len(entry.pages) == 2
        assert client.execute.call_count == 2
        assert "traversal_loop_detected" in caplog.text

    @pytest.mark.asyncio
    async def test_state_reports_pages_fetched(self, client):
        seen: list[TraversalState] = []

        def recording(*, response: Response, current: CallArgs, state: TraversalState):
            seen.append(state)
            if state.pages_fetched < 3:
                return current.model_copy(update={"query_args": {"page": state.pages_fetched + 1}})
            return None

        traverser = PageTraverser(client, PaginationDefinition(strategy_id="rec", func=recording))
        await traverser.traverse(contexts=[{"id": 1}], call_args=CallArgs(path="/a"))

        assert [state.pages_fetched for state in seen] == [1, 2, 3]
        assert all(state.context == {"id": 1} for state in seen)
        assert [call.query_args for call in seen[-1].calls] == [{}, {"page": 2}, {"page": 3}]
        assert len(seen[0].calls) == 1

    @pytest.mark.asyncio
    async def test_contexts_are_fetched_concurrently(self):
        """Test one context's call can wait on another context's call."""
        second_started = asyncio.Event()

        async def execute(call: CallArgs) -> Response:
            if call.path == "/a/1":
                await second_started.wait()
            else:
                second_started.set()
            return Response(data={})

        client = MagicMock()
        client.execute = AsyncMock(side_effect=execute)
        traverser = PageTraverser(client, NONE_DEFINITION)

        result = await asyncio.wait_for(
            traverser.traverse(contexts=[{"id": 1}, {"id": 2}], call_args=CallArgs(path="/a/{id}")),
            timeout=1.0,
        )

        assert len(result) == 2

    @pytest.mark.asyncio
    async def test_no_contexts(self, client):
        traverser = PageTraverser(client, NONE_DEFINITION)
        assert await traverser.traverse(contexts=[], call_args=CallArgs(path="/a")) == []
        client.execute.assert_not_called()
