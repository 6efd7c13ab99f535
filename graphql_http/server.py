"""
aiohttp server adapter.

Mounts a GraphQL-over-HTTP handler on an ``aiohttp.web.Application``.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional

from aiohttp import web
from graphql import GraphQLSchema

from .handler import GraphQLHTTPHandler, HandlerOptions, create_handler
from .models import HTTPRequest, HTTPResponse

logger = logging.getLogger(__name__)

GRAPHQL_HANDLER_KEY = web.AppKey("graphql_handler", GraphQLHTTPHandler)


def to_aiohttp_handler(
    handler: Callable[[HTTPRequest], Awaitable[HTTPResponse]],
) -> Callable[[web.Request], Awaitable[web.Response]]:
    """Adapt a GraphQL-over-HTTP handler to an aiohttp request handler."""

    async def aiohttp_handler(request: web.Request) -> web.Response:
        response = await handler(HTTPRequest.from_aiohttp(request))
        return response.to_aiohttp()

    return aiohttp_handler


def create_app(
    schema: GraphQLSchema,
    options: Optional[HandlerOptions] = None,
    path: str = "/graphql",
    **kwargs: Any,
) -> web.Application:
    """
    Create an aiohttp application serving GraphQL at ``path``.

    Every HTTP method is routed to the handler so that unsupported methods
    get a GraphQL-over-HTTP error response.

    Example:
        ```python
        app = create_app(schema, playground=True)
        web.run_app(app, port=8080)
        ```
    """
    handler = create_handler(schema, options, **kwargs)

    app = web.Application()
    app[GRAPHQL_HANDLER_KEY] = handler
    app.router.add_route("*", path, to_aiohttp_handler(handler))

    logger.info("GraphQL endpoint mounted at %s", path)
    return app


def run_server(app: web.Application, host: str = "127.0.0.1", port: int = 8080) -> None:
    """Run ``app`` until interrupted."""
    logger.info("Serving GraphQL on http://%s:%d", host, port)
    web.run_app(app, host=host, port=port, print=None)
