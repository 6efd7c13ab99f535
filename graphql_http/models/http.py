"""
HTTP request and response models.

These are transport-independent containers: any HTTP server can build an
``HTTPRequest`` and send back an ``HTTPResponse``. Adapters for aiohttp are
provided as ``HTTPRequest.from_aiohttp`` and ``HTTPResponse.to_aiohttp``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from aiohttp import web
from multidict import CIMultiDict
from yarl import URL

from ..exceptions import BodyAlreadyConsumedError

BodySource = Union[bytes, str, Callable[[], Awaitable[bytes]], None]
HeadersInit = Union[Mapping[str, str], CIMultiDict, list, None]


@dataclass
class HTTPRequest:
    """
    An incoming HTTP request.

    The body may be given as bytes, text, or a zero-argument coroutine
    function that reads it lazily (e.g. ``aiohttp.web.Request.read``). It can
    be consumed only once.

    Attributes:
        method: HTTP method, upper-cased
        url: Request URL
        headers: Case-insensitive request headers
        body: Request body source
    """

    method: str = "GET"
    url: URL = field(default_factory=lambda: URL("/"))
    headers: CIMultiDict = field(default_factory=CIMultiDict)
    body: BodySource = None
    _body_used: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        if not isinstance(self.url, URL):
            self.url = URL(str(self.url))
        if not isinstance(self.headers, CIMultiDict):
            self.headers = CIMultiDict(self.headers or {})

    @property
    def body_used(self) -> bool:
        """Whether the body has been read."""
        return self._body_used

    @property
    def query_params(self) -> Mapping[str, str]:
        """Parsed URL query string."""
        return self.url.query

    async def read(self) -> bytes:
        """
        Read the request body.

        Raises:
            BodyAlreadyConsumedError: If the body was read before
        """
        if self._body_used:
            raise BodyAlreadyConsumedError("Request body has already been read")
        self._body_used = True

        body = self.body
        if body is None:
            return b""
        if isinstance(body, bytes):
            return body
        if isinstance(body, str):
            return body.encode("utf-8")
        return await body()

    async def text(self) -> str:
        """Read the body and decode it as UTF-8."""
        return (await self.read()).decode("utf-8")

    async def json(self) -> Any:
        """Read the body and decode it as JSON."""
        return json.loads(await self.text())

    @classmethod
    def from_aiohttp(cls, request: web.Request) -> "HTTPRequest":
        """Wrap an aiohttp request without reading its body."""
        return cls(
            method=request.method,
            url=request.url,
            headers=CIMultiDict(request.headers),
            body=request.read,
        )


@dataclass
class HTTPResponse:
    """
    An outgoing HTTP response.

    Attributes:
        status: HTTP status code
        headers: Case-insensitive response headers
        body: Encoded response body
    """

    status: int = 200
    headers: CIMultiDict = field(default_factory=CIMultiDict)
    body: bytes = b""

    def __post_init__(self) -> None:
        if not isinstance(self.headers, CIMultiDict):
            self.headers = CIMultiDict(self.headers or {})
        if isinstance(self.body, str):
            self.body = self.body.encode("utf-8")

    @property
    def ok(self) -> bool:
        """Whether the status is 2xx."""
        return 200 <= self.status < 300

    @property
    def content_type(self) -> Optional[str]:
        """Value of the ``Content-Type`` header."""
        return self.headers.get("Content-Type")

    @property
    def text(self) -> str:
        """Body decoded as UTF-8."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """Body decoded as JSON."""
        return json.loads(self.text)

    def to_aiohttp(self) -> web.Response:
        """Convert to an aiohttp response."""
        return web.Response(status=self.status, body=self.body, headers=self.headers)

    @classmethod
    async def from_client_response(cls, response: Any) -> "HTTPResponse":
        """Read an ``aiohttp.ClientResponse`` into an ``HTTPResponse``."""
        body = await response.read()
        return cls(
            status=response.status,
            headers=CIMultiDict(response.headers),
            body=body,
        )
