"""
Request validation for GraphQL-over-HTTP.

Combines content negotiation and parameter extraction into one step that
either yields the parameters and the negotiated media type, or a protocol
error together with the media type to render it in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..constants import MediaType
from ..exceptions import GraphQLHTTPError
from ..models import GraphQLParameters, HTTPRequest, Result
from .extraction import extract_parameters
from .negotiation import negotiate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidatedRequest:
    """A request that passed protocol validation."""

    parameters: GraphQLParameters
    media_type: MediaType


@dataclass(frozen=True)
class RejectedRequest:
    """
    A request that failed protocol validation.

    ``media_type`` is the negotiated response type, or ``application/json``
    when negotiation itself failed.
    """

    error: GraphQLHTTPError
    media_type: MediaType = MediaType.APPLICATION_JSON


async def validate_request(request: HTTPRequest) -> Result[ValidatedRequest, RejectedRequest]:
    """
    Validate a GraphQL-over-HTTP request.

    Negotiation runs first; its failure is returned without touching the
    body.
    """
    negotiated = negotiate(request)
    if not negotiated.success:
        logger.debug("Negotiation failed: %s", negotiated.error.message)
        return Result.fail(RejectedRequest(negotiated.error))

    extracted = await extract_parameters(request)
    if not extracted.success:
        logger.debug(
            "Invalid %s request: %s (%s)",
            request.method,
            extracted.error.message,
            extracted.error.kind,
        )
        return Result.fail(RejectedRequest(extracted.error, negotiated.value))

    return Result.ok(ValidatedRequest(parameters=extracted.value, media_type=negotiated.value))


async def resolve_request(request: HTTPRequest) -> Result[GraphQLParameters, GraphQLHTTPError]:
    """Validate a request and return only its GraphQL parameters."""
    result = await validate_request(request)
    if not result.success:
        return Result.fail(result.error.error)
    return Result.ok(result.value.parameters)
