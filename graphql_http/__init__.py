"""
GraphQL-over-HTTP for Python, built on aiohttp and graphql-core.

This package turns an executable GraphQL schema into an async HTTP handler
following the GraphQL over HTTP protocol draft.

Features:
- Parameter extraction from GET query strings and POST bodies
  (JSON objects or raw GraphQL documents)
- Content negotiation between ``application/graphql-response+json`` and
  ``application/json``, with the matching status code policy
- Transport-independent ``HTTPRequest``/``HTTPResponse`` models and an
  aiohttp server adapter
- Optional GraphQL Playground page
- Client helpers for building requests and interpreting responses
"""

__version__ = "0.1.0"

from .client import (
    ClientConfig,
    GraphQLHTTPClient,
    create_request,
    gql_fetch,
    is_valid_content_type,
    resolve_response,
)
from .constants import ACCEPT, CONTENT_TYPES, MediaType
from .exceptions import (
    BodyAlreadyConsumedError,
    GraphQLHTTPError,
    GraphQLHTTPException,
    GraphQLNetworkError,
    GraphQLRequestFailedError,
    GraphQLResponseError,
    InvalidBodyError,
    InvalidHeaderError,
    InvalidHTTPMethodError,
    InvalidParameterError,
    MissingBodyError,
    MissingHeaderError,
    MissingParameterError,
    SchemaValidationError,
)
from .handler import GraphQLHTTPHandler, HandlerOptions, RequestContext, create_handler
from .http import (
    create_response,
    resolve_request,
    validate_request,
)
from .models import ExecutionOutcome, GraphQLParameters, HTTPRequest, HTTPResponse, Result
from .playground import PlaygroundOptions, render_playground_page, use_graphql_playground
from .server import create_app, to_aiohttp_handler

__all__ = [
    # Handler
    "create_handler",
    "GraphQLHTTPHandler",
    "HandlerOptions",
    "RequestContext",
    # Protocol
    "validate_request",
    "resolve_request",
    "create_response",
    # Models
    "HTTPRequest",
    "HTTPResponse",
    "GraphQLParameters",
    "ExecutionOutcome",
    "Result",
    "MediaType",
    "ACCEPT",
    "CONTENT_TYPES",
    # Playground
    "PlaygroundOptions",
    "render_playground_page",
    "use_graphql_playground",
    # Server
    "create_app",
    "to_aiohttp_handler",
    # Client
    "create_request",
    "resolve_response",
    "is_valid_content_type",
    "ClientConfig",
    "GraphQLHTTPClient",
    "gql_fetch",
    # Exceptions
    "GraphQLHTTPException",
    "GraphQLHTTPError",
    "MissingParameterError",
    "MissingBodyError",
    "MissingHeaderError",
    "InvalidParameterError",
    "InvalidHTTPMethodError",
    "InvalidHeaderError",
    "InvalidBodyError",
    "SchemaValidationError",
    "BodyAlreadyConsumedError",
    "GraphQLResponseError",
    "GraphQLRequestFailedError",
    "GraphQLNetworkError",
]
