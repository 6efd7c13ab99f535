"""
GraphQL-over-HTTP protocol core.

This package contains the request-side protocol rules (content negotiation,
parameter extraction, request validation) and the response builder.
"""

from .extraction import (
    extract_get_parameters,
    extract_parameters,
    extract_post_parameters,
    parse_graphql_parameters,
)
from .negotiation import is_playground_request, negotiate, parse_accept, parse_media_type
from .responses import (
    create_error_response,
    create_json_response,
    create_response,
    request_error_status,
)
from .validation import RejectedRequest, ValidatedRequest, resolve_request, validate_request

__all__ = [
    # Negotiation
    "negotiate",
    "is_playground_request",
    "parse_accept",
    "parse_media_type",
    # Extraction
    "extract_parameters",
    "extract_get_parameters",
    "extract_post_parameters",
    "parse_graphql_parameters",
    # Validation
    "validate_request",
    "resolve_request",
    "ValidatedRequest",
    "RejectedRequest",
    # Responses
    "create_response",
    "create_error_response",
    "create_json_response",
    "request_error_status",
]
