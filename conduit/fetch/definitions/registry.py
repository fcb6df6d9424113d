"""Endpoint and request-definition registries.

Architecture:
    FetchDefinitions is the single, explicitly constructed configuration
    object the fetch engine runs against. It bundles:
    - one ClientDefinition per named client (HTTP client + EndpointRegistry)
    - the default client name
    - the PaginationTable
    - the RequestDefinitionRegistry (resource type -> request definitions)

Design Decisions:
    - Built once: every definition is validated and frozen at construction,
      so config mistakes fail at load time rather than mid-fetch
    - No globals: the engine receives this object; nothing is registered
      into module-level state
    - Defaults: registry-wide defaults are deep-merged under each
      customization when the registry is built (endpoints) or queried
      (requests)

See Also:
    - Requester: Consumes FetchDefinitions
    - DefQuery: Default-with-customizations lookup
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..core.enums import HTTPMethod
from ..core.exceptions import DefinitionError
from ..core.merge import deep_merge
from ..core.types import EndpointDefinition, HttpClientLike, RequestDefinition
from ..runtime.pagination.table import PaginationTable
from .query import DefQuery, as_layer

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_definition(model: type[ModelT], data: Any, what: str) -> ModelT:
    """Validate config data into ``model``, reporting failures as DefinitionError."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise DefinitionError(f"Invalid {what}: {e}") from e


class EndpointRegistry:
    """Per-client lookup from (path, method) to EndpointDefinition.

    Example:
        >>> registry = EndpointRegistry(
        ...     default={"readonly": True},
        ...     customizations={"/api/tickets": {"get": {"query_args": {"sort": "id"}}}},
        ... )
        >>> registry.query("/api/tickets").readonly
        True
    """

    def __init__(
        self,
        *,
        default: Mapping[str, Any] | EndpointDefinition | None = None,
        customizations: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> None:
        default_layer = as_layer(default)
        endpoints: dict[tuple[str, HTTPMethod], EndpointDefinition] = {}
        for path, by_method in (customizations or {}).items():
            for method_name, definition in by_method.items():
                try:
                    method = HTTPMethod(method_name)
                except ValueError as e:
                    raise DefinitionError(f"Invalid method '{method_name}' for {path}") from e
                endpoints[(path, method)] = validate_definition(
                    EndpointDefinition,
                    deep_merge(default_layer, as_layer(definition)),
                    f"endpoint {path}:{method.value}",
                )
        self._endpoints = MappingProxyType(endpoints)

    def query(self, path: str, method: HTTPMethod | str = HTTPMethod.GET) -> EndpointDefinition | None:
        return self._endpoints.get((path, HTTPMethod(method)))

    def keys(self) -> list[tuple[str, HTTPMethod]]:
        return list(self._endpoints)

    def __len__(self) -> int:
        return len(self._endpoints)


class RequestDefinitionRegistry:
    """Resource type name -> request definitions contributing to it."""

    def __init__(
        self,
        *,
        default: Mapping[str, Any] | None = None,
        customizations: Mapping[str, list[Any]] | None = None,
    ) -> None:
        query = DefQuery(default=default, customizations=customizations)
        definitions: dict[str, tuple[RequestDefinition, ...]] = {}
        for type_name in query.all_keys():
            merged = query.query(type_name)
            if not isinstance(merged, list):
                raise DefinitionError(f"Request definitions for '{type_name}' must be a list")
            definitions[type_name] = tuple(
                validate_definition(
                    RequestDefinition, item, f"request definition {type_name}[{index}]"
                )
                for index, item in enumerate(merged)
            )
        self._definitions = MappingProxyType(definitions)

    def query(self, type_name: str) -> list[RequestDefinition]:
        return list(self._definitions.get(type_name, ()))


@dataclass(frozen=True)
class ClientDefinition:
    """A named HTTP client together with the endpoints it exposes."""

    http_client: HttpClientLike
    endpoints: EndpointRegistry


@dataclass(frozen=True)
class FetchDefinitions:
    """Immutable configuration the fetch engine runs against."""

    adapter_name: str
    default_client: str
    clients: Mapping[str, ClientDefinition]
    requests: RequestDefinitionRegistry = field(default_factory=RequestDefinitionRegistry)
    pagination: PaginationTable = field(default_factory=PaginationTable)

    def __post_init__(self) -> None:
        if self.default_client not in self.clients:
            raise DefinitionError(
                f"Default client '{self.default_client}' is not one of {sorted(self.clients)}"
            )
        object.__setattr__(self, "clients", MappingProxyType(dict(self.clients)))

    def query_endpoint(
        self, client: str, path: str, method: HTTPMethod | str = HTTPMethod.GET
    ) -> EndpointDefinition | None:
        """Endpoint definition for (client, path, method), or None if unknown."""
        client_def = self.clients.get(client)
        if client_def is None:
            return None
        return client_def.endpoints.query(path, method)

    def query_request_definitions(self, type_name: str) -> list[RequestDefinition]:
        return self.requests.query(type_name)

    def http_client(self, client: str) -> HttpClientLike:
        client_def = self.clients.get(client)
        if client_def is None:
            raise DefinitionError(f"Client '{client}' is not defined for {self.adapter_name}")
        return client_def.http_client

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        *,
        http_clients: Mapping[str, HttpClientLike],
    ) -> FetchDefinitions:
        """Build definitions from plain config data.

        Expected shape::

            {
                "adapter_name": "tracker",
                "clients": {
                    "default": "main",
                    "options": {
                        "main": {"endpoints": {"default": {...}, "customizations": {...}}},
                    },
                },
                "pagination": {"cursor": {"type": "cursor", "params": {...}}},
                "requests": {"default": {...}, "customizations": {"Ticket": [...]}},
            }

        Args:
            config: Parsed configuration mapping
            http_clients: HTTP client per client name in ``clients.options``

        Raises:
            DefinitionError: If any part of the config is invalid
        """
        clients_config = config.get("clients") or {}
        options = clients_config.get("options") or {}
        clients: dict[str, ClientDefinition] = {}
        for name, client_config in options.items():
            if name not in http_clients:
                raise DefinitionError(f"No HTTP client provided for client '{name}'")
            endpoints_config = (client_config or {}).get("endpoints") or {}
            clients[name] = ClientDefinition(
                http_client=http_clients[name],
                endpoints=EndpointRegistry(
                    default=endpoints_config.get("default"),
                    customizations=endpoints_config.get("customizations"),
                ),
            )

        default_client = clients_config.get("default")
        if default_client is None:
            if len(clients) != 1:
                raise DefinitionError("clients.default is required when several clients exist")
            default_client = next(iter(clients))

        requests_config = config.get("requests") or {}
        return cls(
            adapter_name=config.get("adapter_name", "unknown"),
            default_client=default_client,
            clients=clients,
            requests=RequestDefinitionRegistry(
                default=requests_config.get("default"),
                customizations=requests_config.get("customizations"),
            ),
            pagination=PaginationTable.from_config(config.get("pagination")),
        )
