"""
GraphQL Playground support.

Renders the interactive GraphQL Playground page and provides a wrapper that
serves it in front of any handler.
"""

from __future__ import annotations

import html
import json
from http import HTTPStatus
from inspect import isawaitable
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from multidict import CIMultiDict
from pydantic import BaseModel, Field

from .constants import TEXT_HTML, content_type_for
from .http.negotiation import is_playground_request
from .models import HTTPRequest, HTTPResponse

Handler = Callable[[HTTPRequest], Union[HTTPResponse, Awaitable[HTTPResponse]]]

_PAGE_TEMPLATE = """
  <!DOCTYPE html>
  <html>
  <head>
    <meta charset=utf-8 />
    <meta name="viewport" content="user-scalable=no, initial-scale=1.0, minimum-scale=1.0, maximum-scale=1.0, minimal-ui">
    <title>{title}</title>
    <link rel="stylesheet" href="{cdn_url}/graphql-playground-react{version}/build/static/css/index.css" />
    <link rel="shortcut icon" href="{cdn_url}/graphql-playground-react{version}/build/favicon.png" />
    <script src="{cdn_url}/graphql-playground-react{version}/build/static/js/middleware.js"></script>
  </head>
  <body>
    <div id="root"></div>
    <script>
      window.addEventListener('load', function (event) {{
        GraphQLPlayground.init(document.getElementById('root'), {options});
      }})
    </script>
  </body>
  </html>
"""


class PlaygroundOptions(BaseModel):
    """Options for the rendered GraphQL Playground page."""

    endpoint: str = Field(default="/graphql", description="GraphQL endpoint URL")
    subscription_endpoint: Optional[str] = Field(
        default=None, description="WebSocket endpoint for subscriptions"
    )
    title: str = Field(default="GraphQL Playground", description="Page title")
    version: Optional[str] = Field(
        default=None, description="graphql-playground-react version, latest if unset"
    )
    cdn_url: str = Field(
        default="https://cdn.jsdelivr.net/npm", description="Base URL of the asset CDN"
    )
    settings: Dict[str, Any] = Field(
        default_factory=dict, description="Playground editor settings"
    )

    def init_options(self) -> Dict[str, Any]:
        """Options passed to ``GraphQLPlayground.init``."""
        options: Dict[str, Any] = {"endpoint": self.endpoint}
        if self.subscription_endpoint:
            options["subscriptionEndpoint"] = self.subscription_endpoint
        if self.settings:
            options["settings"] = self.settings
        return options


def render_playground_page(options: Optional[PlaygroundOptions] = None) -> str:
    """
    Render the GraphQL Playground HTML page.

    Args:
        options: Page options; defaults to the ``/graphql`` endpoint

    Returns:
        Complete HTML document
    """
    options = options or PlaygroundOptions()
    # "</" must not appear inside the inline script.
    init_options = json.dumps(options.init_options()).replace("</", "<\\/")

    return _PAGE_TEMPLATE.format(
        title=html.escape(options.title),
        cdn_url=html.escape(options.cdn_url.rstrip("/"), quote=True),
        version=f"@{html.escape(options.version)}" if options.version else "",
        options=init_options,
    )


def create_playground_response(options: Optional[PlaygroundOptions] = None) -> HTTPResponse:
    """Build a 200 ``text/html`` response holding the playground page."""
    return HTTPResponse(
        status=HTTPStatus.OK,
        headers=CIMultiDict({"Content-Type": content_type_for(TEXT_HTML)}),
        body=render_playground_page(options),
    )


def use_graphql_playground(
    handler: Handler,
    options: Optional[PlaygroundOptions] = None,
) -> Callable[[HTTPRequest], Awaitable[HTTPResponse]]:
    """
    Serve the playground in front of ``handler``.

    GET requests accepting ``text/html`` receive the playground page; every
    other request is passed to ``handler``.

    Example:
        ```python
        handler = use_graphql_playground(create_handler(schema))
        response = await handler(request)
        ```
    """

    async def playground_handler(request: HTTPRequest) -> HTTPResponse:
        if is_playground_request(request):
            return create_playground_response(options)

        response = handler(request)
        if isawaitable(response):
            response = await response
        return response

    return playground_handler
