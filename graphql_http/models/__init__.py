"""
Data models for graphql_http.
"""

from .base import Result
from .graphql import ExecutionOutcome, GraphQLParameters
from .http import HTTPRequest, HTTPResponse

__all__ = [
    "Result",
    "GraphQLParameters",
    "ExecutionOutcome",
    "HTTPRequest",
    "HTTPResponse",
]
