"""
Content negotiation for GraphQL-over-HTTP.

Selects the response media type from the ``Accept`` header and detects
requests that should be answered with the playground page.
"""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Dict, List, Optional, Tuple

from aiohttp.helpers import parse_mimetype

from ..constants import SUPPORTED_MEDIA_TYPES, TEXT_HTML, MediaType
from ..exceptions import GraphQLHTTPError, InvalidHeaderError
from ..models import HTTPRequest, Result

NOT_ACCEPTABLE_MESSAGE = (
    'The header is invalid. "Accept" must include '
    '"application/graphql-response+json" or "application/json"'
)


@dataclass(frozen=True)
class AcceptEntry:
    """One media range of an ``Accept`` header."""

    type: str
    subtype: str
    quality: float
    index: int

    def specificity(self, media_type: str) -> Optional[int]:
        """
        How specifically this range matches ``media_type``.

        Returns:
            2 for an exact match, 1 for ``type/*``, 0 for ``*/*`` and None if
            the range does not match
        """
        type_, _, subtype = media_type.partition("/")
        if self.type == "*" and self.subtype == "*":
            return 0
        if self.type != type_:
            return None
        if self.subtype == "*":
            return 1
        if self.subtype == subtype:
            return 2
        return None


def parse_media_type(value: str) -> Tuple[str, Dict[str, str]]:
    """
    Split a media type into its essence and parameters.

    Args:
        value: Header value such as ``application/json; charset=utf-8``

    Returns:
        Tuple of the lower-cased ``type/subtype`` (empty if unparsable) and
        the parameters keyed by lower-cased name
    """
    mimetype = parse_mimetype(value)
    if not mimetype.type or not mimetype.subtype:
        return "", dict(mimetype.parameters)

    essence = f"{mimetype.type}/{mimetype.subtype}"
    if mimetype.suffix:
        essence = f"{essence}+{mimetype.suffix}"
    return essence, dict(mimetype.parameters)


def parse_accept(value: str) -> List[AcceptEntry]:
    """Parse an ``Accept`` header, skipping malformed ranges."""
    entries: List[AcceptEntry] = []
    for index, part in enumerate(value.split(",")):
        essence, params = parse_media_type(part.strip())
        if not essence:
            continue

        try:
            quality = float(params.get("q", "1"))
        except ValueError:
            continue
        if not 0 <= quality <= 1:
            continue

        type_, _, subtype = essence.partition("/")
        entries.append(AcceptEntry(type=type_, subtype=subtype, quality=quality, index=index))
    return entries


def select_media_type(accept: str) -> Optional[MediaType]:
    """
    Choose the preferred supported media type for an ``Accept`` value.

    Candidates are ranked by quality, then by how specific the matching range
    is, then by the range's position in the header and finally by server
    preference.
    """
    entries = parse_accept(accept)
    best: Optional[Tuple[Tuple[float, int, int, int], MediaType]] = None

    for order, media_type in enumerate(SUPPORTED_MEDIA_TYPES):
        matches = [
            (specificity, entry)
            for entry in entries
            if (specificity := entry.specificity(media_type.value)) is not None
        ]
        if not matches:
            continue

        # The most specific range decides the quality.
        specificity, entry = max(matches, key=lambda m: (m[0], -m[1].index))
        if entry.quality <= 0:
            continue

        rank = (entry.quality, specificity, -entry.index, -order)
        if best is None or rank > best[0]:
            best = (rank, media_type)

    return best[1] if best else None


def negotiate(request: HTTPRequest) -> Result[MediaType, GraphQLHTTPError]:
    """
    Negotiate the response media type of a request.

    A request without ``Accept`` is treated as ``Accept: application/json``.
    """
    accept = request.headers.get("Accept")
    if accept is None:
        return Result.ok(MediaType.APPLICATION_JSON)

    media_type = select_media_type(accept)
    if media_type is None:
        return Result.fail(
            InvalidHeaderError(NOT_ACCEPTABLE_MESSAGE, HTTPStatus.NOT_ACCEPTABLE)
        )
    return Result.ok(media_type)


def is_playground_request(request: HTTPRequest) -> bool:
    """True for GET requests whose ``Accept`` lists ``text/html`` with a non-zero quality."""
    if request.method != "GET":
        return False

    accept = request.headers.get("Accept")
    if not accept:
        return False

    return any(
        f"{entry.type}/{entry.subtype}" == TEXT_HTML and entry.quality > 0
        for entry in parse_accept(accept)
    )
