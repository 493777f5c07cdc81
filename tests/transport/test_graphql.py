"""Tests for HttpxGraphQLTransport.

Uses ``httpx.MockTransport`` so the real client code path runs without a
network; the handler inspects the request and returns a canned response.
"""

import json

import httpx
import pytest

from estimate_spine.core.errors import GraphQLError, NetworkError
from estimate_spine.transport.graphql import GraphQLTransport, HttpxGraphQLTransport

URL = "https://api.example.test/graphql"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _transport(handler) -> HttpxGraphQLTransport:
    return HttpxGraphQLTransport(URL, "ghp_secret", client=_client(handler))


class TestRequest:
    @pytest.mark.asyncio
    async def test_posts_query_and_variables_with_bearer_token(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {"ok": True}})

        data = await _transport(handler).execute("query { ok }", {"a": 1})

        assert data == {"ok": True}
        [request] = seen
        assert request.method == "POST"
        assert str(request.url) == URL
        assert request.headers["Authorization"] == "Bearer ghp_secret"
        assert json.loads(request.content) == {"query": "query { ok }", "variables": {"a": 1}}

    def test_from_settings(self, settings):
        transport = HttpxGraphQLTransport.from_settings(settings, client=_client(lambda r: None))
        assert transport.url == "https://api.github.com/graphql"
        assert transport.headers["Authorization"] == "Bearer ghp_test_token_1234"

    def test_satisfies_protocol(self):
        assert isinstance(_transport(lambda r: None), GraphQLTransport)


class TestFailures:
    @pytest.mark.asyncio
    async def test_http_status_is_network_error(self):
        transport = _transport(lambda r: httpx.Response(502, text="bad gateway"))

        with pytest.raises(NetworkError) as exc_info:
            await transport.execute("query", {})

        assert exc_info.value.context.http_status == 502
        assert exc_info.value.context.url == URL
        assert "502" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_connection_failure_is_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError) as exc_info:
            await _transport(handler).execute("query", {})
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_graphql_errors_are_raised(self):
        errors = [{"message": "Could not resolve to a ProjectV2"}, {"message": "second"}]
        transport = _transport(lambda r: httpx.Response(200, json={"data": None, "errors": errors}))

        with pytest.raises(GraphQLError) as exc_info:
            await transport.execute("query", {})

        assert exc_info.value.errors == errors
        assert exc_info.value.message == "GraphQL error. Could not resolve to a ProjectV2; second"

    @pytest.mark.asyncio
    async def test_errors_win_over_partial_data(self):
        body = {"data": {"user": None}, "errors": [{"message": "nope"}]}
        with pytest.raises(GraphQLError):
            await _transport(lambda r: httpx.Response(200, json=body)).execute("query", {})

    @pytest.mark.asyncio
    async def test_empty_errors_array_is_success(self):
        body = {"data": {"x": 1}, "errors": []}
        assert await _transport(lambda r: httpx.Response(200, json=body)).execute("q", {}) == {"x": 1}

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        transport = _transport(lambda r: httpx.Response(200, text="<html>"))
        with pytest.raises(GraphQLError, match="not valid JSON"):
            await transport.execute("query", {})

    @pytest.mark.asyncio
    async def test_missing_data(self):
        transport = _transport(lambda r: httpx.Response(200, json={}))
        with pytest.raises(GraphQLError, match="no data"):
            await transport.execute("query", {})


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_injected_client_is_left_open(self):
        client = _client(lambda r: httpx.Response(200, json={"data": {}}))
        async with HttpxGraphQLTransport(URL, "t", client=client):
            pass
        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_is_closed(self):
        transport = HttpxGraphQLTransport(URL, "t")
        await transport.aclose()
        assert transport._client.is_closed
