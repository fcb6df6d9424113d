"""Shared defaults for fetch definitions and the HTTP client.

Centralizes the constants used by the definition layer and the runtime so
individual modules can stay small and focused.
"""

from __future__ import annotations

import re

# Strategy id used when an endpoint declares no pagination
NO_PAGINATION = "none"

# Placeholders look like {parent.id}; the first segment is the argument root
ARG_PLACEHOLDER_PATTERN = re.compile(r"\{([\w.\-]+)\}")
ARG_PATH_SEPARATOR = "."

# HTTP client
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_HEADERS = {"Accept": "application/json"}

# Pagination defaults
DEFAULT_PAGE_SIZE = 100
DEFAULT_FIRST_PAGE = 1
