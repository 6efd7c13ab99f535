"""
Tests for the GraphQL-over-HTTP client helpers.
"""

import json
import re

import aiohttp
import pytest
from aioresponses import aioresponses
from yarl import URL

from graphql_http import (
    ClientConfig,
    GraphQLHTTPClient,
    HTTPResponse,
    create_request,
    gql_fetch,
    is_valid_content_type,
    resolve_response,
)
from graphql_http.exceptions import (
    GraphQLNetworkError,
    GraphQLRequestFailedError,
    GraphQLResponseError,
)
from graphql_http.http.extraction import extract_get_parameters, extract_post_parameters

ENDPOINT = "https://api.test/graphql"


class TestCreateRequest:
    """Test request construction."""

    def test_get_round_trip(self):
        """Test the extractor recovers what a GET request carries."""
        result = create_request(
            ENDPOINT,
            "query Q($who: String) { test(who: $who) }",
            method="GET",
            variables={"who": "Dolly & co"},
            operation_name="Q",
        )

        assert result.success
        request = result.value
        assert request.method == "GET"
        assert request.headers["Accept"] == "application/graphql-response+json, application/json"

        params = extract_get_parameters(request).unwrap()
        assert params.query == "query Q($who: String) { test(who: $who) }"
        assert params.variables == {"who": "Dolly & co"}
        assert params.operation_name == "Q"

    def test_get_keeps_empty_objects(self):
        """Test empty variables and extensions survive a GET request."""
        request = create_request(
            ENDPOINT, "{ test }", method="GET", variables={}, extensions={}
        ).unwrap()

        assert request.url.query["variables"] == "{}"
        params = extract_get_parameters(request).unwrap()
        assert params.variables == {}
        assert params.extensions == {}

    @pytest.mark.asyncio
    async def test_post_round_trip(self):
        """Test the extractor recovers what a POST request carries."""
        request = create_request(
            ENDPOINT, "{ test }", variables={"a": [1, 2]}, extensions={"trace": True}
        ).unwrap()

        assert request.headers["Content-Type"] == "application/json; charset=UTF-8"
        params = (await extract_post_parameters(request)).unwrap()
        assert params.query == "{ test }"
        assert params.variables == {"a": [1, 2]}
        assert params.extensions == {"trace": True}

    def test_existing_query_string_kept(self):
        """Test parameters are added to an existing query string."""
        request = create_request(f"{ENDPOINT}?token=abc", "{ test }", method="GET").unwrap()

        assert request.url.query["token"] == "abc"
        assert request.url.query["query"] == "{ test }"

    @pytest.mark.parametrize("url", ["", "/graphql", "api.test/graphql"])
    def test_invalid_url(self, url):
        """Test relative URLs are rejected."""
        result = create_request(url, "{ test }")

        assert not result.success
        assert result.error == "Invalid URL"

    def test_unencodable_variables(self):
        """Test variables that cannot be serialized fail."""
        result = create_request(ENDPOINT, "{ test }", variables={"a": object()})

        assert not result.success
        assert result.error.startswith("Failed to encode request")


class TestResolveResponse:
    """Test response interpretation."""

    def test_success(self):
        """Test a 200 GraphQL response is decoded."""
        response = HTTPResponse(
            status=200,
            headers={"Content-Type": "application/graphql-response+json; charset=utf-8"},
            body=b'{"data":{"a":1}}',
        )

        assert resolve_response(response) == {"data": {"a": 1}}

    def test_missing_content_type(self):
        """Test a response without Content-Type."""
        with pytest.raises(GraphQLResponseError, match='"Content-Type" header is required'):
            resolve_response(HTTPResponse(status=200, body=b"{}"))

    def test_invalid_content_type(self):
        """Test a non-GraphQL content type."""
        response = HTTPResponse(status=200, headers={"Content-Type": "text/html"}, body=b"<html>")

        with pytest.raises(GraphQLResponseError) as exc_info:
            resolve_response(response)
        assert exc_info.value.content_type == "text/html"

    def test_invalid_body(self):
        """Test a body that is not JSON."""
        response = HTTPResponse(
            status=200, headers={"Content-Type": "application/json"}, body=b"not json"
        )

        with pytest.raises(json.JSONDecodeError):
            resolve_response(response)

    def test_request_error(self):
        """Test a 4xx response carrying GraphQL errors."""
        response = HTTPResponse(
            status=400,
            headers={"Content-Type": "application/graphql-response+json"},
            body=b'{"errors":[{"message":"Syntax Error"}]}',
        )

        with pytest.raises(GraphQLRequestFailedError) as exc_info:
            resolve_response(response)
        assert exc_info.value.status == 400
        assert exc_info.value.errors == [{"message": "Syntax Error"}]

    def test_unknown_error(self):
        """Test a non-2xx response without errors."""
        response = HTTPResponse(
            status=502, headers={"Content-Type": "application/json"}, body=b"{}"
        )

        with pytest.raises(GraphQLResponseError, match="Unknown error has occurred"):
            resolve_response(response)

    def test_is_valid_content_type(self):
        """Test content type recognition."""
        assert is_valid_content_type("application/json")
        assert is_valid_content_type("application/graphql-response+json; charset=UTF-8")
        assert not is_valid_content_type("application/graphql+json")
        assert not is_valid_content_type("text/plain")


class TestGraphQLHTTPClient:
    """Test the aiohttp client."""

    @pytest.mark.asyncio
    async def test_post(self):
        """Test a POST request and its headers."""
        config = ClientConfig(endpoint=ENDPOINT, headers={"Authorization": "Bearer t"})

        with aioresponses() as m:
            m.post(
                ENDPOINT,
                body='{"data":{"test":"Hello World"}}',
                content_type="application/graphql-response+json",
            )

            async with GraphQLHTTPClient(config) as client:
                result = await client.execute("{ test }")

            call = m.requests[("POST", URL(ENDPOINT))][0]

        assert result == {"data": {"test": "Hello World"}}
        headers = call.kwargs["headers"]
        assert headers["Authorization"] == "Bearer t"
        assert headers["Accept"] == "application/graphql-response+json, application/json"
        assert json.loads(call.kwargs["data"]) == {"query": "{ test }"}

    @pytest.mark.asyncio
    async def test_get(self):
        """Test a GET request."""
        config = ClientConfig(endpoint=ENDPOINT, method="GET")

        with aioresponses() as m:
            m.get(re.compile(r"^https://api\.test/graphql\?.*$"), payload={"data": {"test": "x"}})

            async with GraphQLHTTPClient(config) as client:
                result = await client.execute("{ test }", variables={"a": 1})

        assert result == {"data": {"test": "x"}}

    @pytest.mark.asyncio
    async def test_request_failed(self):
        """Test GraphQL request errors are raised."""
        with aioresponses() as m:
            m.post(
                ENDPOINT,
                status=400,
                body='{"errors":[{"message":"Cannot query field"}]}',
                content_type="application/graphql-response+json",
            )

            async with GraphQLHTTPClient(ClientConfig(endpoint=ENDPOINT)) as client:
                with pytest.raises(GraphQLRequestFailedError) as exc_info:
                    await client.execute("{ nope }")

        assert exc_info.value.errors == [{"message": "Cannot query field"}]

    @pytest.mark.asyncio
    async def test_network_error(self):
        """Test transport failures are wrapped."""
        with aioresponses() as m:
            m.post(ENDPOINT, exception=aiohttp.ClientConnectionError("refused"))

            async with GraphQLHTTPClient(ClientConfig(endpoint=ENDPOINT)) as client:
                with pytest.raises(GraphQLNetworkError) as exc_info:
                    await client.execute("{ test }")

        assert exc_info.value.url == ENDPOINT
        assert isinstance(exc_info.value.original_error, aiohttp.ClientConnectionError)

    @pytest.mark.asyncio
    async def test_external_session_not_closed(self):
        """Test a session passed in is left open."""
        async with aiohttp.ClientSession() as session:
            async with GraphQLHTTPClient(ClientConfig(endpoint=ENDPOINT), session=session):
                pass

            assert not session.closed

    @pytest.mark.asyncio
    async def test_gql_fetch(self):
        """Test the one-shot helper."""
        with aioresponses() as m:
            m.post(ENDPOINT, payload={"data": {"test": "Hello World"}})

            result = await gql_fetch(ENDPOINT, "{ test }")

        assert result == {"data": {"test": "Hello World"}}
