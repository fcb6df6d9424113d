"""Custom exception hierarchy."""

from __future__ import annotations


class FetchError(Exception):
    """Base exception for all library errors."""

    pass


class DefinitionError(FetchError):
    """Fetch definitions are wired incorrectly.

    Raised before any network call is made. These errors indicate a mistake
    in the declarative configuration, not a runtime condition, and must not
    be swallowed by callers.
    """

    pass


class EndpointError(DefinitionError):
    """Base for errors about a specific (client, path, method) endpoint."""

    def __init__(self, message: str, *, client: str, path: str, method: str) -> None:
        super().__init__(message)
        self.client = client
        self.path = path
        self.method = method


class EndpointNotFoundError(EndpointError):
    """No endpoint is registered for the requested (client, path, method)."""

    pass


class EndpointNotReadonlyError(EndpointError):
    """Endpoint exists but is not marked readonly, so it cannot be fetched from."""

    pass


class PaginationNotFoundError(DefinitionError):
    """Pagination strategy id is not present in the pagination table."""

    def __init__(self, message: str, strategy_id: str) -> None:
        super().__init__(message)
        self.strategy_id = strategy_id


class UnresolvedArgumentError(DefinitionError):
    """Templated call arguments reference placeholders the context cannot fill."""

    def __init__(self, message: str, args: list[str] | None = None) -> None:
        super().__init__(message)
        self.unresolved_args = args or []


class TransportError(FetchError):
    """HTTP call failed at the transport or status level."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
