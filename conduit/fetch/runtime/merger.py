"""Resolution of a request definition into an executable endpoint definition.

Precedence, lowest first: pagination client args -> registry endpoint
definition -> request-specific endpoint overrides. The registry endpoint
must be marked readonly; fetches are never wired to mutating endpoints.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import DefinitionError, EndpointNotFoundError, EndpointNotReadonlyError
from ..core.merge import deep_merge
from ..core.templates import arg_roots, find_all_unresolved_args
from ..core.types import CallArgs, MergedEndpoint, RequestDefinition
from ..definitions.registry import FetchDefinitions
from .pagination.definitions import PaginationDefinition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergedDefinition:
    """A request definition bound to its endpoint, client and pagination."""

    request: RequestDefinition
    endpoint: MergedEndpoint
    client_name: str
    pagination: PaginationDefinition
    call_args: CallArgs

    @property
    def endpoint_id(self) -> str:
        return f"[{self.client_name}]{self.endpoint.path}:{self.endpoint.method.value}"

    def unresolved_args(self) -> list[str]:
        """Placeholders referenced by the templated call arguments."""
        return find_all_unresolved_args(
            [
                self.call_args.path,
                self.call_args.query_args,
                self.call_args.headers,
                self.call_args.body,
            ]
        )

    def relevant_arg_roots(self) -> list[str]:
        return arg_roots(self.unresolved_args())


def merge_request_definition(
    request_def: RequestDefinition, definitions: FetchDefinitions
) -> MergedDefinition:
    """Merge ``request_def`` with its registry endpoint and pagination defaults.

    Raises:
        EndpointNotFoundError: If (client, path, method) is not registered
        EndpointNotReadonlyError: If the registered endpoint is not readonly
        PaginationNotFoundError: If the pagination id is unknown
        DefinitionError: If the merged arguments do not form a valid endpoint
    """
    reference = request_def.endpoint
    client_name = reference.client or definitions.default_client
    method = reference.method
    endpoint_id = f"[{client_name}]{reference.path}:{method.value}"

    endpoint_def = definitions.query_endpoint(client_name, reference.path, method)
    if endpoint_def is None:
        logger.error("Endpoint %s is not defined, cannot use in fetch", endpoint_id)
        raise EndpointNotFoundError(
            f"Endpoint {endpoint_id} is not defined, cannot use in fetch",
            client=client_name,
            path=reference.path,
            method=method.value,
        )
    if endpoint_def.readonly is not True:
        logger.error("Endpoint %s is not marked as readonly, cannot use in fetch", endpoint_id)
        raise EndpointNotReadonlyError(
            f"Endpoint {endpoint_id} is not marked as readonly, cannot use in fetch",
            client=client_name,
            path=reference.path,
            method=method.value,
        )

    pagination = definitions.pagination.lookup(reference.pagination or endpoint_def.pagination)

    merged = deep_merge(
        pagination.client_args,
        endpoint_def.model_dump(exclude_unset=True, exclude={"readonly"}),
        reference.model_dump(exclude_unset=True),
    )
    merged.update(
        path=reference.path,
        method=method,
        client=client_name,
        pagination=pagination.strategy_id,
        readonly=endpoint_def.readonly,
    )
    try:
        endpoint = MergedEndpoint.model_validate(merged)
    except PydanticValidationError as e:
        raise DefinitionError(f"Invalid merged endpoint {endpoint_id}: {e}") from e

    return MergedDefinition(
        request=request_def,
        endpoint=endpoint,
        client_name=client_name,
        pagination=pagination,
        call_args=endpoint.call_args(),
    )
