"""
Exceptions for the graphql_http package.

This module defines two families of errors:

- Protocol errors (``GraphQLHTTPError`` and subclasses) describe requests that
  are rejected before they reach the GraphQL engine. They are returned as
  values inside a ``Result`` on the request path and rendered to the client
  verbatim; each one carries the HTTP status code to answer with.
- Programmer and client errors (``SchemaValidationError``,
  ``BodyAlreadyConsumedError``, the client ``GraphQLResponseError`` family)
  are raised like ordinary exceptions.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, List, Optional


class GraphQLHTTPException(Exception):
    """
    Base exception for all graphql_http errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details as keyword arguments
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = kwargs


class GraphQLHTTPError(GraphQLHTTPException):
    """
    A GraphQL-over-HTTP protocol error.

    Protocol errors never reach the GraphQL engine. The ``status_hint`` is the
    HTTP status code the handler answers with unless the caller overrides it.

    Attributes:
        status_hint: HTTP status code to respond with
    """

    def __init__(self, message: str, status_hint: int = HTTPStatus.BAD_REQUEST) -> None:
        super().__init__(message)
        self.status_hint = int(status_hint)

    @property
    def kind(self) -> str:
        """Error kind, e.g. ``MissingParameter``."""
        name = type(self).__name__
        return name[: -len("Error")] if name.endswith("Error") else name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, status_hint={self.status_hint})"


class MissingParameterError(GraphQLHTTPError):
    """A required URL parameter is missing."""

    pass


class MissingBodyError(GraphQLHTTPError):
    """The request body is required but empty."""

    pass


class MissingHeaderError(GraphQLHTTPError):
    """A required header is missing."""

    pass


class InvalidParameterError(GraphQLHTTPError):
    """A URL parameter is malformed."""

    pass


class InvalidHTTPMethodError(GraphQLHTTPError):
    """The HTTP method is neither GET nor POST."""

    def __init__(
        self,
        message: str,
        status_hint: int = HTTPStatus.METHOD_NOT_ALLOWED,
    ) -> None:
        super().__init__(message, status_hint)


class InvalidHeaderError(GraphQLHTTPError):
    """A header is present but not acceptable."""

    pass


class InvalidBodyError(GraphQLHTTPError):
    """The request body is malformed."""

    pass


class SchemaValidationError(GraphQLHTTPException):
    """Raised when a handler is created with an invalid schema."""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message, errors=errors or [])
        self.errors = errors or []


class BodyAlreadyConsumedError(GraphQLHTTPException):
    """Raised when a request body is read a second time."""

    pass


# Client-side exceptions


class GraphQLResponseError(GraphQLHTTPException):
    """Raised when an HTTP response is not a GraphQL-over-HTTP response."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        content_type: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, content_type=content_type)
        self.status = status
        self.content_type = content_type


class GraphQLRequestFailedError(GraphQLResponseError):
    """
    Raised when the server reports a GraphQL request error with a non-2xx status.

    Attributes:
        errors: Serialized GraphQL errors from the response body
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
        status: Optional[int] = None,
        content_type: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, content_type=content_type)
        self.errors = errors or []


class GraphQLNetworkError(GraphQLHTTPException):
    """Raised when the HTTP transport fails."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, url=url)
        self.url = url
        self.original_error = original_error
