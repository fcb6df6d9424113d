"""Declarative definition registries."""

from .query import DefQuery, as_layer
from .registry import (
    ClientDefinition,
    EndpointRegistry,
    FetchDefinitions,
    RequestDefinitionRegistry,
    validate_definition,
)

__all__ = [
    "DefQuery",
    "as_layer",
    "ClientDefinition",
    "EndpointRegistry",
    "FetchDefinitions",
    "RequestDefinitionRegistry",
    "validate_definition",
]
