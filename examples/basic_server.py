#!/usr/bin/env python3
"""
Basic GraphQL-over-HTTP server.

Run it and open http://127.0.0.1:8080/graphql in a browser for the
playground, or query it with the client:

    graphql-http query http://127.0.0.1:8080/graphql '{ hello(name: "you") }'
"""

import logging

from graphql import build_schema

from graphql_http import HTTPResponse, RequestContext, create_app
from graphql_http.config import LoggingConfig, LogLevel
from graphql_http.logging import setup_logging
from graphql_http.server import run_server

schema = build_schema(
    """
    type Query {
      hello(name: String): String
    }
    """
)


def hello(info, name=None):
    return f"Hello {name or 'world'}"


def add_cors(response: HTTPResponse, context: RequestContext) -> HTTPResponse:
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


def main() -> None:
    setup_logging(LoggingConfig(level=LogLevel.DEBUG))
    app = create_app(
        schema,
        root_value={"hello": hello},
        playground=True,
        response=add_cors,
    )
    logging.getLogger(__name__).info("Starting example server")
    run_server(app, host="127.0.0.1", port=8080)


if __name__ == "__main__":
    main()
