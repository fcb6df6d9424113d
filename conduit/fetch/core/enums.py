"""Core enumerations shared by definitions and runtime.

Design Decisions:
    - String enums: values match the lowercase method names used in
      declarative endpoint configuration, so plain config dicts validate
      directly into the enum
    - Safety: the method never decides whether an endpoint may be fetched;
      only EndpointDefinition.readonly does
"""

from enum import Enum


class HTTPMethod(str, Enum):
    """HTTP verbs an endpoint can be registered under."""

    GET = "get"
    HEAD = "head"
    OPTIONS = "options"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"

    @classmethod
    def _missing_(cls, value: object) -> "HTTPMethod | None":
        # Accept "GET", "Get", etc.
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class TraversalStage(str, Enum):
    """Lifecycle of a single context's page traversal."""

    INIT = "init"
    FETCHING = "fetching"
    DONE = "done"
