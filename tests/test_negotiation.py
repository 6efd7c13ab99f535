"""
Tests for content negotiation.
"""

import pytest

from graphql_http import HTTPRequest, MediaType
from graphql_http.exceptions import InvalidHeaderError
from graphql_http.http.negotiation import (
    NOT_ACCEPTABLE_MESSAGE,
    is_playground_request,
    negotiate,
    parse_accept,
    parse_media_type,
    select_media_type,
)

GRAPHQL_RESPONSE = MediaType.APPLICATION_GRAPHQL_RESPONSE_JSON
JSON = MediaType.APPLICATION_JSON


def make_request(accept=None, method="GET"):
    headers = {"Accept": accept} if accept is not None else {}
    return HTTPRequest(method=method, url="https://test.test/graphql", headers=headers)


class TestParseMediaType:
    """Test media type parsing."""

    def test_essence_and_parameters(self):
        """Test type, subtype and parameters are split."""
        essence, params = parse_media_type("Application/JSON; Charset=utf-8")

        assert essence == "application/json"
        assert params == {"charset": "utf-8"}

    def test_structured_suffix(self):
        """Test the +json suffix is kept in the essence."""
        essence, params = parse_media_type("application/graphql-response+json")

        assert essence == "application/graphql-response+json"
        assert params == {}

    def test_malformed(self):
        """Test a value without subtype has an empty essence."""
        assert parse_media_type("")[0] == ""
        assert parse_media_type("json")[0] == ""


class TestParseAccept:
    """Test Accept header parsing."""

    def test_quality_values(self):
        """Test q parameters are parsed and default to 1."""
        entries = parse_accept("application/json;q=0.5, text/html")

        assert [(e.type, e.subtype, e.quality) for e in entries] == [
            ("application", "json", 0.5),
            ("text", "html", 1.0),
        ]

    def test_invalid_quality_skipped(self):
        """Test ranges with an unusable q value are ignored."""
        entries = parse_accept("application/json;q=abc, application/*;q=2, */*")

        assert [(e.type, e.subtype) for e in entries] == [("*", "*")]


class TestSelectMediaType:
    """Test media type selection."""

    @pytest.mark.parametrize(
        "accept,expected",
        [
            ("application/graphql-response+json", GRAPHQL_RESPONSE),
            ("application/json", JSON),
            ("*/*", GRAPHQL_RESPONSE),
            ("application/*", GRAPHQL_RESPONSE),
            ("application/json, application/graphql-response+json", JSON),
            ("application/json;q=0.5, application/graphql-response+json", GRAPHQL_RESPONSE),
            ("application/graphql-response+json;q=0, */*", JSON),
            ("text/html, */*;q=0.8", GRAPHQL_RESPONSE),
        ],
    )
    def test_selection(self, accept, expected):
        """Test quality, specificity, header order and server preference."""
        assert select_media_type(accept) == expected

    @pytest.mark.parametrize(
        "accept", ["plain/text", "text/html", "application/xml", "application/json;q=0", ""]
    )
    def test_nothing_acceptable(self, accept):
        """Test headers naming no supported type select nothing."""
        assert select_media_type(accept) is None


class TestNegotiate:
    """Test request negotiation."""

    def test_missing_accept_defaults_to_json(self):
        """Test a request without Accept is answered with application/json."""
        result = negotiate(make_request())

        assert result.success
        assert result.value == JSON

    def test_graphql_response_type(self):
        """Test the GraphQL response type is negotiated."""
        result = negotiate(make_request("application/graphql-response+json"))

        assert result.value == GRAPHQL_RESPONSE

    def test_not_acceptable(self):
        """Test an unsupported Accept fails with 406."""
        result = negotiate(make_request("plain/text"))

        assert not result.success
        assert isinstance(result.error, InvalidHeaderError)
        assert result.error.status_hint == 406
        assert result.error.message == NOT_ACCEPTABLE_MESSAGE


class TestIsPlaygroundRequest:
    """Test playground request detection."""

    def test_browser_navigation(self):
        """Test a GET accepting text/html is a playground request."""
        accept = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
        assert is_playground_request(make_request(accept))

    def test_post_is_not_playground(self):
        """Test POST requests are never playground requests."""
        assert not is_playground_request(make_request("text/html", method="POST"))

    def test_refused_html(self):
        """Test text/html with q=0 is not a playground request."""
        assert not is_playground_request(make_request("text/html;q=0, application/json"))
        assert is_playground_request(make_request("application/json, text/html;q=0.1"))

    def test_json_client(self):
        """Test API clients are not playground requests."""
        assert not is_playground_request(make_request("application/json"))
        assert not is_playground_request(make_request())
