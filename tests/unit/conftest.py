"""Shared fixtures for unit tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from conduit.fetch.core import Response
from conduit.fetch.definitions import (
    ClientDefinition,
    EndpointRegistry,
    FetchDefinitions,
    RequestDefinitionRegistry,
)
from conduit.fetch.runtime.pagination import PaginationTable


@pytest.fixture
def http_client():
    """Create mock HTTP collaborator returning an empty page."""
    client = MagicMock()
    client.execute = AsyncMock(return_value=Response(data={}))
    return client


@pytest.fixture
def build_definitions(http_client):
    """Factory building FetchDefinitions around the mock HTTP client."""

    def _build(
        *,
        endpoints=None,
        endpoint_default=None,
        requests=None,
        pagination=None,
    ) -> FetchDefinitions:
        return FetchDefinitions(
            adapter_name="tracker",
            default_client="main",
            clients={
                "main": ClientDefinition(
                    http_client=http_client,
                    endpoints=EndpointRegistry(
                        default=endpoint_default, customizations=endpoints or {}
                    ),
                )
            },
            requests=RequestDefinitionRegistry(customizations=requests or {}),
            pagination=pagination or PaginationTable(),
        )

    return _build
