"""
Tests for request validation.
"""

import pytest

from graphql_http import HTTPRequest, MediaType, resolve_request, validate_request
from graphql_http.exceptions import InvalidHeaderError, MissingParameterError


class TestValidateRequest:
    """Test negotiation and extraction combined."""

    @pytest.mark.asyncio
    async def test_success(self):
        """Test parameters and media type are returned together."""
        request = HTTPRequest(
            url="https://test.test/graphql?query=%7Btest%7D",
            headers={"Accept": "application/graphql-response+json"},
        )
        result = await validate_request(request)

        assert result.success
        assert result.value.parameters.query == "{test}"
        assert result.value.media_type == MediaType.APPLICATION_GRAPHQL_RESPONSE_JSON

    @pytest.mark.asyncio
    async def test_negotiation_failure_leaves_body_unread(self):
        """Test the body is not read when negotiation fails."""
        request = HTTPRequest(
            method="POST",
            url="https://test.test/graphql",
            headers={"Accept": "text/plain", "Content-Type": "application/json"},
            body=b'{"query": "{ test }"}',
        )
        result = await validate_request(request)

        assert isinstance(result.error.error, InvalidHeaderError)
        assert result.error.media_type == MediaType.APPLICATION_JSON
        assert not request.body_used

    @pytest.mark.asyncio
    async def test_extraction_failure(self):
        """Test extraction errors carry the negotiated media type."""
        request = HTTPRequest(
            url="https://test.test/graphql",
            headers={"Accept": "application/graphql-response+json"},
        )
        result = await validate_request(request)

        assert isinstance(result.error.error, MissingParameterError)
        assert result.error.media_type == MediaType.APPLICATION_GRAPHQL_RESPONSE_JSON


class TestResolveRequest:
    """Test the parameters-only variant."""

    @pytest.mark.asyncio
    async def test_parameters(self):
        """Test only the parameters are returned."""
        request = HTTPRequest(
            method="POST",
            url="https://test.test/graphql",
            headers={"Content-Type": "application/json"},
            body='{"query": "query A { test }", "operationName": "A"}',
        )
        result = await resolve_request(request)

        assert result.success
        assert result.value.operation_name == "A"

    @pytest.mark.asyncio
    async def test_protocol_error(self):
        """Test failures return the protocol error alone."""
        result = await resolve_request(HTTPRequest(url="https://test.test/graphql"))

        assert isinstance(result.error, MissingParameterError)
