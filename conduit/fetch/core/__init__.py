"""Core components."""

from .enums import HTTPMethod, TraversalStage
from .exceptions import (
    DefinitionError,
    EndpointError,
    EndpointNotFoundError,
    EndpointNotReadonlyError,
    FetchError,
    PaginationNotFoundError,
    TransportError,
    UnresolvedArgumentError,
)
from .merge import deep_merge
from .templates import arg_roots, find_all_unresolved_args, get_path, replace_all_args
from .types import (
    CallArgs,
    Context,
    EndpointArgs,
    EndpointDefinition,
    EndpointReference,
    GeneratedItem,
    HttpClientLike,
    MergedEndpoint,
    RequestDefinition,
    ResourceIdentifier,
    Response,
    TransformationDefinition,
    ValueGeneratedItem,
)

__all__ = [
    "HTTPMethod",
    "TraversalStage",
    # Exceptions
    "FetchError",
    "DefinitionError",
    "EndpointError",
    "EndpointNotFoundError",
    "EndpointNotReadonlyError",
    "PaginationNotFoundError",
    "UnresolvedArgumentError",
    "TransportError",
    # Definitions and items
    "Context",
    "EndpointArgs",
    "EndpointDefinition",
    "EndpointReference",
    "MergedEndpoint",
    "CallArgs",
    "Response",
    "GeneratedItem",
    "ValueGeneratedItem",
    "TransformationDefinition",
    "RequestDefinition",
    "ResourceIdentifier",
    "HttpClientLike",
    # Helpers
    "deep_merge",
    "get_path",
    "find_all_unresolved_args",
    "arg_roots",
    "replace_all_args",
]
