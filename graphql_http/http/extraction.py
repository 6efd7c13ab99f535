"""
Extraction of GraphQL parameters from HTTP requests.

GET requests carry the parameters in the URL query string. POST requests carry
them either as a JSON object (``application/json``) or as a raw GraphQL
document (``application/graphql-response+json``).
"""

from __future__ import annotations

import json
import logging
from http import HTTPStatus
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import ValidationError

from ..constants import UTF_8, MediaType
from ..exceptions import (
    GraphQLHTTPError,
    InvalidBodyError,
    InvalidHeaderError,
    InvalidHTTPMethodError,
    InvalidParameterError,
    MissingBodyError,
    MissingHeaderError,
    MissingParameterError,
)
from ..models import GraphQLParameters, HTTPRequest, Result
from .negotiation import parse_media_type

logger = logging.getLogger(__name__)

ParametersResult = Result[GraphQLParameters, GraphQLHTTPError]

QUERY_REQUIRED = 'The parameter is required. "query"'
INVALID_METHOD = "Invalid HTTP method. GraphQL only supports GET and POST requests."
CONTENT_TYPE_REQUIRED = 'The header is required. "Content-Type"'
INVALID_CHARSET = 'The header is invalid. Supported media type charset is "UTF-8".'
UNSUPPORTED_CONTENT_TYPE = (
    'The header is invalid. "Content-Type" must be "application/json" '
    'or "application/graphql-response+json"'
)
INVALID_JSON = "The message body is invalid. Invalid JSON format."
NOT_JSON_OBJECT = "The message body is invalid. Must be JSON object format."
INVALID_ENCODING = "The message body is invalid. Must be UTF-8 encoded."
BODY_REQUIRED = 'The message body is required. "GraphQL query"'

# Messages for fields of a JSON request body.
_BODY_FIELD_MESSAGES = {
    "query": 'The parameter is invalid. "query" must be string.',
    "variables": 'The parameter is invalid. "variables" must be JSON object format',
    "operationName": 'The parameter is invalid. "operationName" must be string or null.',
    "extensions": 'The parameter is invalid. "extensions" must be JSON object format',
}

# Messages for fields of an arbitrary decoded payload.
_PAYLOAD_FIELD_MESSAGES = {
    "query": 'Invalid field. "query" must be string.',
    "variables": 'Invalid field. "variables" must be plain object or null',
    "operationName": 'Invalid field. "operationName" must be string or null.',
    "extensions": 'Invalid field. "extensions" must be plain object or null',
}

_REQUIRED_ERROR_TYPES = ("missing", "string_too_short")


def _decode(payload: Mapping[str, Any]) -> Result[GraphQLParameters, Tuple[str, str]]:
    """Validate a payload, reporting the first offending field and error type."""
    try:
        # Untrusted payloads are matched by the wire names only.
        params = GraphQLParameters.model_validate(payload, by_alias=True, by_name=False)
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "payload"
        return Result.fail((field, error["type"]))
    return Result.ok(params)


def parse_graphql_parameters(value: Any) -> Result[GraphQLParameters, str]:
    """
    Decode an untrusted value as GraphQL parameters.

    Args:
        value: Decoded JSON value

    Returns:
        Result holding the parameters or a message naming the invalid field
    """
    if not isinstance(value, dict):
        return Result.fail('Invalid field. "payload" must be plain object.')

    result = _decode(value)
    if result.success:
        return Result.ok(result.value)

    field, error_type = result.error
    if field == "query" and error_type == "missing":
        return Result.fail('Missing field. "query"')
    return Result.fail(_PAYLOAD_FIELD_MESSAGES.get(field, f'Invalid field. "{field}"'))


def _json_object_param(
    params: Mapping[str, str], name: str
) -> Result[Optional[Dict[str, Any]], GraphQLHTTPError]:
    raw = params.get(name)
    if raw is None:
        return Result.ok(None)

    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return Result.fail(
            InvalidParameterError(f'The parameter is invalid. "{name}" are invalid JSON.')
        )

    if value is not None and not isinstance(value, dict):
        return Result.fail(
            InvalidParameterError(
                f'The parameter is invalid. "{name}" must be JSON object format.'
            )
        )
    return Result.ok(value)


def extract_get_parameters(request: HTTPRequest) -> ParametersResult:
    """Read parameters from the URL query string of a GET request."""
    params = request.query_params

    query = params.get("query")
    if not query:
        return Result.fail(MissingParameterError(QUERY_REQUIRED))

    variables = _json_object_param(params, "variables")
    if not variables.success:
        return Result.fail(variables.error)

    extensions = _json_object_param(params, "extensions")
    if not extensions.success:
        return Result.fail(extensions.error)

    return Result.ok(
        GraphQLParameters(
            query=query,
            variables=variables.value,
            operation_name=params.get("operationName") or None,
            extensions=extensions.value,
        )
    )


async def extract_post_parameters(request: HTTPRequest) -> ParametersResult:
    """Read parameters from the body of a POST request."""
    content_type = request.headers.get("Content-Type")
    if not content_type:
        return Result.fail(MissingHeaderError(CONTENT_TYPE_REQUIRED))

    media_type, media_params = parse_media_type(content_type)
    charset = media_params.get("charset") or UTF_8
    if charset.upper() != UTF_8:
        return Result.fail(
            InvalidHeaderError(INVALID_CHARSET, HTTPStatus.UNSUPPORTED_MEDIA_TYPE)
        )

    if media_type == MediaType.APPLICATION_JSON.value:
        return await _extract_json_body(request)
    if media_type == MediaType.APPLICATION_GRAPHQL_RESPONSE_JSON.value:
        return await _extract_graphql_body(request)

    return Result.fail(
        InvalidHeaderError(UNSUPPORTED_CONTENT_TYPE, HTTPStatus.UNSUPPORTED_MEDIA_TYPE)
    )


async def _extract_json_body(request: HTTPRequest) -> ParametersResult:
    try:
        payload = json.loads(await request.text())
    except (json.JSONDecodeError, UnicodeDecodeError):
        return Result.fail(InvalidBodyError(INVALID_JSON))

    if not isinstance(payload, dict):
        return Result.fail(InvalidBodyError(NOT_JSON_OBJECT))

    if payload.get("query") is None:
        payload = {key: value for key, value in payload.items() if key != "query"}
        fallback = request.query_params.get("query")
        if fallback is not None:
            payload["query"] = fallback

    result = _decode(payload)
    if result.success:
        return Result.ok(result.value)

    field, error_type = result.error
    if field == "query" and error_type in _REQUIRED_ERROR_TYPES:
        return Result.fail(InvalidBodyError(QUERY_REQUIRED))
    return Result.fail(
        InvalidBodyError(_BODY_FIELD_MESSAGES.get(field, f'The parameter is invalid. "{field}"'))
    )


async def _extract_graphql_body(request: HTTPRequest) -> ParametersResult:
    try:
        body = await request.text()
    except UnicodeDecodeError:
        return Result.fail(InvalidBodyError(INVALID_ENCODING))

    query = body or request.query_params.get("query")
    if not query:
        return Result.fail(MissingBodyError(BODY_REQUIRED))

    return Result.ok(GraphQLParameters(query=query))


async def extract_parameters(request: HTTPRequest) -> ParametersResult:
    """
    Extract GraphQL parameters according to the request method.

    Only GET and POST are supported; other methods fail with a 405 error.
    """
    if request.method == "GET":
        return extract_get_parameters(request)
    if request.method == "POST":
        return await extract_post_parameters(request)

    logger.debug("Rejecting unsupported HTTP method %s", request.method)
    return Result.fail(InvalidHTTPMethodError(INVALID_METHOD))
