"""Conduit Fetch - declarative multi-context resource fetching over HTTP APIs."""

from .core import (
    CallArgs,
    Context,
    DefinitionError,
    EndpointDefinition,
    EndpointNotFoundError,
    EndpointNotReadonlyError,
    EndpointReference,
    FetchError,
    GeneratedItem,
    HttpClientLike,
    HTTPMethod,
    PaginationNotFoundError,
    RequestDefinition,
    ResourceIdentifier,
    Response,
    TransformationDefinition,
    TransportError,
    UnresolvedArgumentError,
    ValueGeneratedItem,
    deep_merge,
)
from .definitions import (
    ClientDefinition,
    EndpointRegistry,
    FetchDefinitions,
    RequestDefinitionRegistry,
)
from .runtime.combinations import compute_arg_combinations
from .runtime.merger import MergedDefinition, merge_request_definition
from .runtime.pagination import (
    PaginationDefinition,
    PaginationTable,
    TraversalState,
    cursor_pagination,
    no_pagination,
    offset_pagination,
    page_number_pagination,
    token_pagination,
)
from .runtime.requester import Requester
from .utils.http import HTTPClient

__version__ = "0.1.0"

__all__ = [
    # Facade
    "Requester",
    # Definitions
    "FetchDefinitions",
    "ClientDefinition",
    "EndpointRegistry",
    "RequestDefinitionRegistry",
    "EndpointDefinition",
    "EndpointReference",
    "RequestDefinition",
    "TransformationDefinition",
    "ResourceIdentifier",
    "HTTPMethod",
    # Runtime
    "MergedDefinition",
    "merge_request_definition",
    "compute_arg_combinations",
    "PaginationDefinition",
    "PaginationTable",
    "TraversalState",
    "no_pagination",
    "token_pagination",
    "cursor_pagination",
    "offset_pagination",
    "page_number_pagination",
    # Items
    "CallArgs",
    "Context",
    "Response",
    "GeneratedItem",
    "ValueGeneratedItem",
    # HTTP
    "HTTPClient",
    "HttpClientLike",
    # Errors
    "FetchError",
    "DefinitionError",
    "EndpointNotFoundError",
    "EndpointNotReadonlyError",
    "PaginationNotFoundError",
    "UnresolvedArgumentError",
    "TransportError",
    # Helpers
    "deep_merge",
]
