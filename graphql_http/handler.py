"""
GraphQL-over-HTTP request handler.

``create_handler`` builds the single entry point of the package: an async
callable that turns an ``HTTPRequest`` into an ``HTTPResponse``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus
from inspect import isawaitable
from typing import Any, Callable, Optional, Tuple

from graphql import GraphQLSchema, assert_valid_schema
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import SchemaValidationError
from .http.negotiation import is_playground_request
from .http.responses import (
    UNEXPECTED_ERROR,
    create_error_response,
    create_json_response,
    create_response,
)
from .http.validation import validate_request
from .models import HTTPRequest, HTTPResponse
from .playground import PlaygroundOptions, create_playground_response

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """
    Context passed to the response hook.

    Attributes:
        request: The request being answered
        playground: Whether the response is a playground page
    """

    request: HTTPRequest
    playground: bool = False


def _identity(response: HTTPResponse, context: RequestContext) -> HTTPResponse:
    return response


class HandlerOptions(BaseModel):
    """
    Options for ``create_handler``.

    The engine options are passed to ``graphql.execute`` unchanged.
    ``context_factory`` takes precedence over ``context_value`` and receives
    the request. ``response`` is called once per request with the final
    response and a ``RequestContext``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    # Engine pass-through
    root_value: Any = Field(default=None, description="Root value for execution")
    context_value: Any = Field(default=None, description="Context value for resolvers")
    context_factory: Optional[Callable[..., Any]] = Field(
        default=None, description="Builds the context value from the request"
    )
    field_resolver: Optional[Callable[..., Any]] = Field(
        default=None, description="Default field resolver"
    )
    type_resolver: Optional[Callable[..., Any]] = Field(
        default=None, description="Default abstract type resolver"
    )

    # Playground
    playground: bool = Field(default=False, description="Serve the playground to browsers")
    playground_options: PlaygroundOptions = Field(
        default_factory=PlaygroundOptions, description="Playground page options"
    )

    # Post-processing
    response: Callable[..., Any] = Field(
        default=_identity, description="Response hook (response, context) -> response"
    )


class GraphQLHTTPHandler:
    """
    Async GraphQL-over-HTTP handler.

    The handler holds no per-request state and may be awaited concurrently.
    It does not raise for malformed requests or engine failures; those are
    answered with error responses.
    """

    def __init__(self, schema: GraphQLSchema, options: Optional[HandlerOptions] = None):
        """
        Initialize the handler.

        Args:
            schema: Executable schema
            options: Handler options

        Raises:
            SchemaValidationError: If the schema is invalid
        """
        try:
            assert_valid_schema(schema)
        except TypeError as e:
            raise SchemaValidationError(
                f"Schema validation error: {e}", errors=str(e).split("\n\n")
            ) from e

        self.schema = schema
        self.options = options or HandlerOptions()

    async def __call__(self, request: HTTPRequest) -> HTTPResponse:
        response, playground = await self._handle(request)

        result = self.options.response(response, RequestContext(request, playground))
        if isawaitable(result):
            result = await result

        logger.debug("%s %s -> %d", request.method, request.url.path, result.status)
        return result

    async def _handle(self, request: HTTPRequest) -> Tuple[HTTPResponse, bool]:
        validated = await validate_request(request)

        if not validated.success:
            if self.options.playground and is_playground_request(request):
                return create_playground_response(self.options.playground_options), True

            rejected = validated.error
            return create_error_response(rejected.error, rejected.media_type), False

        media_type = validated.value.media_type
        try:
            context_value = await self._context_value(request)
        except Exception:
            logger.exception("Failed to build the GraphQL context value")
            return (
                create_json_response(
                    {"errors": [{"message": UNEXPECTED_ERROR}]},
                    HTTPStatus.INTERNAL_SERVER_ERROR,
                    media_type,
                ),
                False,
            )

        response = await create_response(
            self.schema,
            validated.value.parameters,
            media_type=media_type,
            method=request.method,
            root_value=self.options.root_value,
            context_value=context_value,
            field_resolver=self.options.field_resolver,
            type_resolver=self.options.type_resolver,
        )
        return response, False

    async def _context_value(self, request: HTTPRequest) -> Any:
        if self.options.context_factory is None:
            return self.options.context_value

        value = self.options.context_factory(request)
        if isawaitable(value):
            value = await value
        return value


def create_handler(
    schema: GraphQLSchema,
    options: Optional[HandlerOptions] = None,
    **kwargs: Any,
) -> GraphQLHTTPHandler:
    """
    Create a handler for GraphQL-over-HTTP requests.

    Args:
        schema: Executable schema, validated immediately
        options: Handler options
        **kwargs: ``HandlerOptions`` fields, overriding ``options``

    Returns:
        Async callable ``(HTTPRequest) -> HTTPResponse``

    Raises:
        SchemaValidationError: If the schema is invalid

    Example:
        ```python
        from graphql import build_schema

        schema = build_schema("type Query { hello: String }")
        handler = create_handler(schema, root_value={"hello": "world"})

        response = await handler(
            HTTPRequest(url="http://localhost/graphql?query={hello}")
        )
        ```
    """
    if kwargs:
        options = options.model_copy(update=kwargs) if options else HandlerOptions(**kwargs)
    return GraphQLHTTPHandler(schema, options)
