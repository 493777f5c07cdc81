"""
GraphQL transport over HTTPS.

One operation: POST ``{"query": ..., "variables": ...}`` with a bearer token
and return the ``data`` member of the response. Everything that is not a
clean ``data`` payload raises a ``TransportError`` subclass:

- connection failures, timeouts and non-2xx statuses -> ``NetworkError``
- a body that is not JSON, or carries a non-empty ``errors`` array, or has
  no ``data`` -> ``GraphQLError``

The transport does not retry. Whether a failure is fatal is decided by the
caller (see ``estimate_spine.gateway.board``).

Usage:
    async with HttpxGraphQLTransport.from_settings(settings) as transport:
        data = await transport.execute(QUERY, {"projectId": "PVT_1"})
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx

from estimate_spine.core.errors import GraphQLError, NetworkError
from estimate_spine.core.logging import get_logger
from estimate_spine.core.settings import EstimateSettings

logger = get_logger(__name__)


@runtime_checkable
class GraphQLTransport(Protocol):
    """Anything that can execute a GraphQL document and return its ``data``."""

    async def execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        ...


class HttpxGraphQLTransport:
    """``GraphQLTransport`` backed by ``httpx.AsyncClient``.

    Args:
        url: GraphQL endpoint
        token: bearer token
        timeout: client timeout in seconds
        client: optional pre-built client (tests inject a mock here)
    """

    def __init__(
        self,
        url: str,
        token: str,
        *,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.url = url
        self._token = token
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(
        cls,
        settings: EstimateSettings,
        client: httpx.AsyncClient | None = None,
    ) -> HttpxGraphQLTransport:
        return cls(
            settings.graphql_url,
            settings.token.get_secret_value(),
            timeout=settings.http_timeout,
            client=client,
        )

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }

    async def execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.post(
                self.url,
                json={"query": query, "variables": variables},
                headers=self.headers,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NetworkError(
                f"GraphQL endpoint returned HTTP {e.response.status_code}",
                cause=e,
            ).with_context(url=self.url, http_status=e.response.status_code)
        except httpx.HTTPError as e:
            raise NetworkError(f"GraphQL request failed: {e}", cause=e).with_context(url=self.url)

        try:
            body = response.json()
        except ValueError as e:
            raise GraphQLError("GraphQL response is not valid JSON", cause=e).with_context(url=self.url)

        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            logger.error("graphql_error", url=self.url, errors=errors)
            raise GraphQLError(
                f"GraphQL error. {_summarise(errors)}",
                errors=errors,
            ).with_context(url=self.url)

        data = body.get("data") if isinstance(body, dict) else None
        if data is None:
            raise GraphQLError("GraphQL response has no data").with_context(url=self.url)
        return data

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpxGraphQLTransport:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()


def _summarise(errors: list[Any]) -> str:
    messages = [e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors]
    return "; ".join(messages)


__all__ = ["GraphQLTransport", "HttpxGraphQLTransport"]
