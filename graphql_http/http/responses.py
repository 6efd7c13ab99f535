"""
GraphQL-over-HTTP response construction.

Runs a validated request through the GraphQL engine (parse, operation
resolution, validation, execution) and wraps the outcome in an HTTP response
whose status code follows the negotiated media type:

- ``application/json``: request errors are reported with 200.
- ``application/graphql-response+json``: request errors, and results without
  a ``data`` entry, are reported with 400.
"""

from __future__ import annotations

import json
import logging
from http import HTTPStatus
from inspect import isawaitable
from types import MappingProxyType
from typing import Any, Mapping, Optional

from graphql import (
    GraphQLError,
    GraphQLFieldResolver,
    GraphQLSchema,
    GraphQLTypeResolver,
    OperationType,
    execute,
    get_operation_ast,
    parse,
    specified_rules,
    validate,
)
from multidict import CIMultiDict

from ..constants import ALLOW_GET_POST, ALLOW_POST, MediaType, content_type_for
from ..exceptions import GraphQLHTTPError, InvalidHTTPMethodError
from ..models import ExecutionOutcome, GraphQLParameters, HTTPResponse

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "Unexpected error has occurred."
SERIALIZATION_ERROR = "Failed to serialize the response."
DOCUMENT_PARSE_ERROR = "Syntax Error: The GraphQL document could not be parsed."
DOCUMENT_VALIDATION_ERROR = "The GraphQL document could not be validated."

# Status of a request error (parse or validation failure) per media type.
REQUEST_ERROR_STATUS: Mapping[MediaType, int] = MappingProxyType(
    {
        MediaType.APPLICATION_JSON: HTTPStatus.OK,
        MediaType.APPLICATION_GRAPHQL_RESPONSE_JSON: HTTPStatus.BAD_REQUEST,
    }
)

_SERIALIZATION_FAILURE_BODY = json.dumps(
    {"errors": [{"message": SERIALIZATION_ERROR}]}, separators=(",", ":")
).encode("utf-8")


def request_error_status(media_type: MediaType) -> int:
    """HTTP status for a GraphQL request error under ``media_type``."""
    return int(REQUEST_ERROR_STATUS[MediaType(media_type)])


def outcome_status(outcome: ExecutionOutcome, media_type: MediaType) -> int:
    """HTTP status for a completed execution."""
    if outcome.has_data:
        return HTTPStatus.OK
    return request_error_status(media_type)


def create_json_response(
    payload: Any,
    status: int,
    media_type: MediaType = MediaType.APPLICATION_JSON,
    headers: Optional[Mapping[str, str]] = None,
) -> HTTPResponse:
    """
    Serialize ``payload`` as a JSON response.

    A payload that cannot be serialized yields a 500 response with a fixed
    error body instead of raising.
    """
    response_headers = CIMultiDict({"Content-Type": content_type_for(media_type)})

    try:
        body = json.dumps(
            payload, ensure_ascii=False, separators=(",", ":"), allow_nan=False
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        logger.error("Failed to serialize GraphQL response: %s", e)
        return HTTPResponse(
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            headers=response_headers,
            body=_SERIALIZATION_FAILURE_BODY,
        )

    if headers:
        response_headers.extend(headers)
    return HTTPResponse(status=int(status), headers=response_headers, body=body)


def create_error_response(
    error: GraphQLHTTPError,
    media_type: MediaType = MediaType.APPLICATION_JSON,
) -> HTTPResponse:
    """Build the response for a protocol error."""
    headers = {"Allow": ALLOW_GET_POST} if isinstance(error, InvalidHTTPMethodError) else None
    return create_json_response(
        {"errors": [{"message": error.message}]},
        error.status_hint,
        media_type,
        headers,
    )


async def execute_operation(
    schema: GraphQLSchema,
    document: Any,
    parameters: GraphQLParameters,
    root_value: Any = None,
    context_value: Any = None,
    field_resolver: Optional[GraphQLFieldResolver] = None,
    type_resolver: Optional[GraphQLTypeResolver] = None,
) -> ExecutionOutcome:
    """Execute a validated document, awaiting asynchronous resolvers."""
    result = execute(
        schema,
        document,
        root_value=root_value,
        context_value=context_value,
        variable_values=parameters.variables,
        operation_name=parameters.operation_name,
        field_resolver=field_resolver,
        type_resolver=type_resolver,
    )
    if isawaitable(result):
        result = await result

    return ExecutionOutcome.from_result(result)


async def create_response(
    schema: GraphQLSchema,
    parameters: GraphQLParameters,
    media_type: MediaType = MediaType.APPLICATION_GRAPHQL_RESPONSE_JSON,
    method: str = "POST",
    root_value: Any = None,
    context_value: Any = None,
    field_resolver: Optional[GraphQLFieldResolver] = None,
    type_resolver: Optional[GraphQLTypeResolver] = None,
) -> HTTPResponse:
    """
    Create a GraphQL-over-HTTP compliant response.

    Args:
        schema: Executable schema
        parameters: Validated request parameters
        media_type: Negotiated response media type
        method: HTTP method of the request; GET only allows queries
        root_value: Root value passed to the engine
        context_value: Context value passed to resolvers
        field_resolver: Default field resolver override
        type_resolver: Default type resolver override

    Returns:
        HTTP response; this function does not raise for engine failures

    Example:
        ```python
        schema = build_schema("type Query { hello: String }")
        response = await create_response(
            schema,
            GraphQLParameters(query="{ hello }"),
            root_value={"hello": "world"},
        )
        ```
    """
    media_type = MediaType(media_type)
    error_status = request_error_status(media_type)

    try:
        document = parse(parameters.query)
    except GraphQLError as error:
        return create_json_response(
            ExecutionOutcome.from_errors([error]).to_dict(), error_status, media_type
        )
    except Exception:
        # e.g. RecursionError on deeply nested documents
        logger.exception("Failed to parse GraphQL document")
        return create_json_response(
            {"errors": [{"message": DOCUMENT_PARSE_ERROR}]}, error_status, media_type
        )

    operation = get_operation_ast(document, parameters.operation_name)
    if (
        method.upper() == "GET"
        and operation is not None
        and operation.operation != OperationType.QUERY
    ):
        message = (
            f"Invalid GraphQL operation. Can only perform a "
            f"{operation.operation.value} operation from a POST request."
        )
        return create_json_response(
            {"errors": [{"message": message}]},
            HTTPStatus.METHOD_NOT_ALLOWED,
            media_type,
            {"Allow": ALLOW_POST},
        )

    try:
        validation_errors = validate(schema, document, specified_rules)
    except Exception:
        logger.exception("Failed to validate GraphQL document")
        return create_json_response(
            {"errors": [{"message": DOCUMENT_VALIDATION_ERROR}]}, error_status, media_type
        )
    if validation_errors:
        return create_json_response(
            ExecutionOutcome.from_errors(validation_errors).to_dict(),
            error_status,
            media_type,
        )

    try:
        outcome = await execute_operation(
            schema,
            document,
            parameters,
            root_value=root_value,
            context_value=context_value,
            field_resolver=field_resolver,
            type_resolver=type_resolver,
        )
    except Exception:
        logger.exception("Unexpected error during GraphQL execution")
        return create_json_response(
            {"errors": [{"message": UNEXPECTED_ERROR}]},
            HTTPStatus.INTERNAL_SERVER_ERROR,
            media_type,
        )

    return create_json_response(
        outcome.to_dict(), outcome_status(outcome, media_type), media_type
    )
