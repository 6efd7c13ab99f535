"""
Command-line interface for graphql_http.
"""

from .main import cli

__all__ = ["cli"]
