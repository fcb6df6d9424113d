"""Declarative fetch definitions and the items produced from them.

Architecture:
    Definitions are pydantic models so plain config mappings (e.g. parsed
    JSON) validate straight into them. All definition models are frozen:
    they are built once when the adapter configuration is loaded and shared
    read-only by every concurrent fetch.

    Endpoint-level fields live on EndpointArgs and are shared by three
    layers that get deep-merged at request time:
    - EndpointDefinition: registry-owned defaults, carries ``readonly``
    - EndpointReference: a request's pointer to an endpoint, plus overrides
    - MergedEndpoint: the union of both, ready to build CallArgs

    EndpointReference forbids extra fields, so a request definition can
    never flag an endpoint as readonly on its own.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Annotated, Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, Strict

from .enums import HTTPMethod

Context = dict[str, Any]


class EndpointArgs(BaseModel):
    """Call arguments and behaviour flags shared by all endpoint layers."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    query_args: dict[str, Any] | None = None
    headers: dict[str, Any] | None = None
    body: Any = None
    omit_body: bool | None = None
    pagination: str | None = None


class EndpointDefinition(EndpointArgs):
    """Registry entry for one (client, path, method)."""

    readonly: bool = False


class EndpointReference(EndpointArgs):
    """Endpoint a request definition targets, with request-specific overrides."""

    path: str = Field(..., min_length=1)
    method: HTTPMethod = HTTPMethod.GET
    client: str | None = None


class CallArgs(BaseModel):
    """Fully resolved arguments for a single HTTP call."""

    model_config = ConfigDict(frozen=True)

    path: str
    method: HTTPMethod = HTTPMethod.GET
    query_args: dict[str, Any] = Field(default_factory=dict)
    headers: dict[str, Any] = Field(default_factory=dict)
    body: Any = None

    def fingerprint(self) -> str:
        """Stable string identity, used to detect repeated pagination calls."""
        return json.dumps(self.model_dump(), sort_keys=True, default=str)


class MergedEndpoint(EndpointReference):
    """EndpointReference merged over its registry definition and pagination defaults."""

    readonly: bool = False

    def call_args(self) -> CallArgs:
        """Build the base (still templated) call arguments.

        Endpoints flagged with ``omit_body`` only carry query args and headers.
        """
        args: dict[str, Any] = {
            "path": self.path,
            "method": self.method,
            "query_args": self.query_args or {},
            "headers": self.headers or {},
        }
        if not self.omit_body:
            args["body"] = self.body
        return CallArgs(**args)


class Response(BaseModel):
    """One raw page returned by the HTTP client."""

    model_config = ConfigDict(frozen=True)

    data: Any = None
    status: int = 200
    headers: dict[str, str] = Field(default_factory=dict)


class GeneratedItem(BaseModel):
    """Candidate record extracted from a page, before validation."""

    model_config = ConfigDict(frozen=True)

    value: Any
    type_name: str
    context: Context = Field(default_factory=dict)


class ValueGeneratedItem(GeneratedItem):
    """Extracted record whose value is guaranteed to be a plain dict."""

    value: Annotated[dict[str, Any], Strict()]


class TransformationDefinition(BaseModel):
    """Declarative rule turning one page into zero or more candidate records.

    Attributes:
        root: Dotted path of the sub-structure holding the records
        single: Take only the first element when the root is a list
        pick: Keep only these keys on dict records
        omit: Drop these keys from dict records
        nest_under_field: Wrap each record as ``{field: record}``
        adjust: Code hook receiving each GeneratedItem; may return a
            replacement item (or mapping of item fields), or None to drop it
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    root: str | None = None
    single: bool = False
    pick: list[str] | None = None
    omit: list[str] | None = None
    nest_under_field: str | None = None
    adjust: Callable[..., Any] | None = None


class RequestDefinition(BaseModel):
    """One logical fetch contributing records to a resource type."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    endpoint: EndpointReference
    transformation: TransformationDefinition = Field(default_factory=TransformationDefinition)
    context: Context = Field(default_factory=dict)


class ResourceIdentifier(BaseModel):
    """Identifies the resource type a fetch flow is collecting."""

    model_config = ConfigDict(frozen=True)

    type_name: str = Field(..., min_length=1)


class HttpClientLike(Protocol):
    """HTTP collaborator contract; implementations own retries and throttling."""

    async def execute(self, call: CallArgs) -> Response: ...
