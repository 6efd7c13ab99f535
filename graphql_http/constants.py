"""
Media types and header constants.

The content-type table is built once at import time and exposed read-only.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class MediaType(str, Enum):
    """Response media types supported by the GraphQL-over-HTTP binding."""

    APPLICATION_JSON = "application/json"
    APPLICATION_GRAPHQL_RESPONSE_JSON = "application/graphql-response+json"

    def __str__(self) -> str:
        return self.value


CHARSET = "charset=UTF-8"
UTF_8 = "UTF-8"

TEXT_HTML = "text/html"

# Supported types in server preference order.
SUPPORTED_MEDIA_TYPES = (
    MediaType.APPLICATION_GRAPHQL_RESPONSE_JSON,
    MediaType.APPLICATION_JSON,
)

CONTENT_TYPES: Mapping[str, str] = MappingProxyType(
    {
        MediaType.APPLICATION_JSON.value: f"{MediaType.APPLICATION_JSON.value}; {CHARSET}",
        MediaType.APPLICATION_GRAPHQL_RESPONSE_JSON.value: (
            f"{MediaType.APPLICATION_GRAPHQL_RESPONSE_JSON.value}; {CHARSET}"
        ),
        TEXT_HTML: f"{TEXT_HTML}; {CHARSET}",
    }
)

# Default "Accept" header sent by the client helpers.
ACCEPT = ", ".join(media_type.value for media_type in SUPPORTED_MEDIA_TYPES)

ALLOW_GET_POST = "GET,POST"
ALLOW_POST = "POST"


def content_type_for(media_type: str) -> str:
    """Return the ``Content-Type`` header value for a media type."""
    return CONTENT_TYPES[str(media_type)]
