"""
GraphQL-over-HTTP client helpers.

This module builds GraphQL-over-HTTP requests, interprets responses and sends
requests with aiohttp.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Dict, Literal, Optional, Union

import aiohttp
from multidict import CIMultiDict
from pydantic import BaseModel, Field, HttpUrl
from yarl import URL

from .constants import ACCEPT, SUPPORTED_MEDIA_TYPES, MediaType, content_type_for
from .exceptions import (
    GraphQLHTTPException,
    GraphQLNetworkError,
    GraphQLRequestFailedError,
    GraphQLResponseError,
)
from .http.negotiation import parse_media_type
from .models import HTTPRequest, HTTPResponse, Result

logger = logging.getLogger(__name__)

_COMPACT = (",", ":")


def create_request(
    url: Union[str, URL],
    query: str,
    method: str = "POST",
    variables: Optional[Dict[str, Any]] = None,
    operation_name: Optional[str] = None,
    extensions: Optional[Dict[str, Any]] = None,
) -> Result[HTTPRequest, str]:
    """
    Create a GraphQL-over-HTTP request.

    GET requests carry the parameters in the query string; POST requests send
    them as a JSON body. Other methods produce a bare request.

    Args:
        url: Absolute GraphQL endpoint URL
        query: GraphQL document source
        method: HTTP method
        variables: Variable values
        operation_name: Operation to execute
        extensions: Protocol extensions

    Returns:
        Result holding the request, or an error message

    Example:
        ```python
        result = create_request(
            "https://api.example.com/graphql",
            "query Greet($name: String) { hello(name: $name) }",
            method="GET",
            variables={"name": "Bob"},
        )
        if result.success:
            request = result.value
        ```
    """
    try:
        target = url if isinstance(url, URL) else URL(str(url))
    except (TypeError, ValueError):
        return Result.fail("Invalid URL")
    if not target.is_absolute():
        return Result.fail("Invalid URL")

    method = method.upper()
    try:
        if method == "GET":
            params = {"query": query}
            if variables is not None:
                params["variables"] = json.dumps(variables, separators=_COMPACT)
            if operation_name is not None:
                params["operationName"] = operation_name
            if extensions is not None:
                params["extensions"] = json.dumps(extensions, separators=_COMPACT)
            return Result.ok(
                HTTPRequest(
                    method=method,
                    url=target.update_query(params),
                    headers={"Accept": ACCEPT},
                )
            )

        if method == "POST":
            payload: Dict[str, Any] = {"query": query}
            if variables is not None:
                payload["variables"] = variables
            if operation_name is not None:
                payload["operationName"] = operation_name
            if extensions is not None:
                payload["extensions"] = extensions
            return Result.ok(
                HTTPRequest(
                    method=method,
                    url=target,
                    headers={
                        "Accept": ACCEPT,
                        "Content-Type": content_type_for(MediaType.APPLICATION_JSON),
                    },
                    body=json.dumps(payload, separators=_COMPACT),
                )
            )
    except (TypeError, ValueError) as e:
        return Result.fail(f"Failed to encode request: {e}")

    return Result.ok(HTTPRequest(method=method, url=target))


def is_valid_content_type(value: str) -> bool:
    """Whether ``value`` names a GraphQL-over-HTTP response media type."""
    essence, _ = parse_media_type(value)
    return essence in {media_type.value for media_type in SUPPORTED_MEDIA_TYPES}


def resolve_response(response: HTTPResponse) -> Dict[str, Any]:
    """
    Interpret a GraphQL-over-HTTP response.

    Args:
        response: Response to interpret

    Returns:
        The decoded GraphQL response body

    Raises:
        GraphQLResponseError: If the content type is missing or unsupported,
            or a non-2xx response carries no GraphQL errors
        GraphQLRequestFailedError: If a non-2xx response carries GraphQL errors
        json.JSONDecodeError: If the body is not JSON
    """
    content_type = response.content_type
    if not content_type:
        raise GraphQLResponseError('"Content-Type" header is required', status=response.status)

    if not is_valid_content_type(content_type):
        raise GraphQLResponseError(
            'Valid "Content-Type" is application/graphql-response+json or application/json',
            status=response.status,
            content_type=content_type,
        )

    payload = response.json()
    if response.ok:
        return payload

    errors = payload.get("errors") if isinstance(payload, dict) else None
    if errors:
        raise GraphQLRequestFailedError(
            "GraphQL request error has occurred",
            errors=errors,
            status=response.status,
            content_type=content_type,
        )
    raise GraphQLResponseError(
        "Unknown error has occurred", status=response.status, content_type=content_type
    )


class ClientConfig(BaseModel):
    """Configuration for ``GraphQLHTTPClient``."""

    endpoint: HttpUrl = Field(description="GraphQL endpoint URL")
    method: Literal["GET", "POST"] = Field(default="POST", description="Default HTTP method")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    headers: Dict[str, str] = Field(
        default_factory=dict, description="Extra headers for every request"
    )


class GraphQLHTTPClient:
    """
    Async GraphQL-over-HTTP client.

    Examples:
        ```python
        config = ClientConfig(endpoint="https://api.example.com/graphql")

        async with GraphQLHTTPClient(config) as client:
            result = await client.execute(
                "query GetUser($id: ID!) { user(id: $id) { name } }",
                variables={"id": "123"},
            )
            print(result["data"])
        ```
    """

    def __init__(
        self,
        config: ClientConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration
            session: Existing session to use; the client creates and owns one
                otherwise
        """
        self.config = config
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "GraphQLHTTPClient":
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout)
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the session if the client created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def execute(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        method: Optional[str] = None,
        extensions: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Send a GraphQL request and return the decoded response body.

        Raises:
            GraphQLHTTPException: If the request cannot be built
            GraphQLNetworkError: If the transport fails or times out
            GraphQLResponseError: If the response is not a valid GraphQL response
        """
        endpoint = str(self.config.endpoint)
        built = create_request(
            endpoint,
            query,
            method=method or self.config.method,
            variables=variables,
            operation_name=operation_name,
            extensions=extensions,
        )
        if not built.success:
            raise GraphQLHTTPException(built.error, url=endpoint)

        request = built.value
        headers = CIMultiDict(request.headers)
        headers.update(self.config.headers)
        body = await request.read() if request.method == "POST" else None

        session = await self._ensure_session()
        start_time = time.time()
        try:
            async with session.request(
                request.method, str(request.url), headers=headers, data=body
            ) as resp:
                response = await HTTPResponse.from_client_response(resp)
        except asyncio.TimeoutError as e:
            raise GraphQLNetworkError(
                f"GraphQL request timeout: {e}", url=endpoint, original_error=e
            ) from e
        except aiohttp.ClientError as e:
            raise GraphQLNetworkError(
                f"GraphQL network error: {e}", url=endpoint, original_error=e
            ) from e

        logger.debug(
            "%s %s -> %d in %.3fs",
            request.method,
            endpoint,
            response.status,
            time.time() - start_time,
        )
        return resolve_response(response)


async def gql_fetch(
    url: str,
    query: str,
    variables: Optional[Dict[str, Any]] = None,
    operation_name: Optional[str] = None,
    method: Literal["GET", "POST"] = "POST",
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 30.0,
) -> Dict[str, Any]:
    """
    Send one GraphQL request with a short-lived client.

    Example:
        ```python
        result = await gql_fetch(
            "https://api.example.com/graphql",
            "query Greet($name: String) { hello(name: $name) }",
            variables={"name": "Bob"},
            method="GET",
        )
        ```
    """
    config = ClientConfig(endpoint=url, method=method, timeout=timeout, headers=headers or {})
    async with GraphQLHTTPClient(config) as client:
        return await client.execute(query, variables=variables, operation_name=operation_name)
