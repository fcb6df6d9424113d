"""HTTP client helper."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import aiohttp

from ..config import DEFAULT_HEADERS, DEFAULT_TIMEOUT_SECONDS
from ..core.exceptions import TransportError
from ..core.types import CallArgs, Response


def encode_query_args(query_args: Mapping[str, Any]) -> dict[str, Any]:
    """Make query args acceptable to aiohttp.

    None values are dropped and booleans become ``"true"``/``"false"``.
    """
    encoded: dict[str, Any] = {}
    for key, value in query_args.items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        elif isinstance(value, (str, int, float)):
            encoded[key] = value
        else:
            encoded[key] = str(value)
    return encoded


class HTTPClient:
    """Async HTTP client wrapper executing CallArgs."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = {**DEFAULT_HEADERS, **(headers or {})}
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self._session

    def url_for(self, path: str) -> str:
        # Absolute URLs (e.g. cursor links) bypass base_url
        if self.base_url and not path.startswith(("http://", "https://")):
            return f"{self.base_url}/{path.lstrip('/')}"
        return path

    async def execute(self, call: CallArgs) -> Response:
        """Send one request.

        Raises:
            TransportError: On connection failures, non-2xx statuses and
                bodies that are not JSON
        """
        url = self.url_for(call.path)
        kwargs: dict[str, Any] = {
            "params": encode_query_args(call.query_args),
            "headers": {key: str(value) for key, value in call.headers.items()},
        }
        if call.body is not None:
            kwargs["json"] = call.body

        try:
            async with self.session.request(call.method.value.upper(), url, **kwargs) as response:
                response.raise_for_status()
                try:
                    data = await response.json(content_type=None)
                except ValueError as e:
                    raise TransportError(
                        f"{call.method.value.upper()} {url} returned a non-JSON body: {e}",
                        status_code=response.status,
                    ) from e
                return Response(data=data, status=response.status, headers=dict(response.headers))
        except aiohttp.ClientResponseError as e:
            raise TransportError(
                f"{call.method.value.upper()} {url} failed with status {e.status}: {e.message}",
                status_code=e.status,
            ) from e
        except (aiohttp.ClientError, TimeoutError) as e:
            raise TransportError(f"{call.method.value.upper()} {url} failed: {e}") from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
