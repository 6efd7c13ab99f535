"""
GraphQL request parameters and execution outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from graphql import ExecutionResult, GraphQLError
from pydantic import BaseModel, ConfigDict, Field


class GraphQLParameters(BaseModel):
    """
    Parameters of a GraphQL-over-HTTP request.

    Validation is strict: ``query`` must be a non-empty string, ``variables``
    and ``extensions`` must be JSON objects or null and ``operationName`` a
    string or null. Instances are immutable.
    """

    model_config = ConfigDict(
        frozen=True, strict=True, validate_by_alias=True, validate_by_name=True
    )

    query: str = Field(min_length=1, description="GraphQL document source")
    variables: Optional[Dict[str, Any]] = Field(default=None, description="Variable values")
    operation_name: Optional[str] = Field(
        default=None, alias="operationName", description="Operation to execute"
    )
    extensions: Optional[Dict[str, Any]] = Field(
        default=None, description="Protocol extensions"
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON request body shape, omitting null fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass
class ExecutionOutcome:
    """
    Result of running a document through the GraphQL engine.

    ``has_data`` tells a response that carries a ``data`` entry (possibly
    null) apart from one that does not: request errors, variable coercion
    errors and unknown operations produce no ``data`` entry.
    """

    data: Optional[Dict[str, Any]] = None
    errors: Optional[List[GraphQLError]] = None
    extensions: Optional[Dict[str, Any]] = None
    has_data: bool = True

    @classmethod
    def from_result(cls, result: ExecutionResult) -> "ExecutionOutcome":
        """Wrap an engine result produced by execution."""
        errors = result.errors
        # Errors raised before execution (variable coercion, unknown
        # operation) carry no path, and the engine then returns no data.
        has_data = result.data is not None or not errors or any(error.path for error in errors)
        return cls(
            data=result.data,
            errors=errors,
            extensions=result.extensions,
            has_data=has_data,
        )

    @classmethod
    def from_errors(cls, errors: List[GraphQLError]) -> "ExecutionOutcome":
        """Outcome for errors raised before execution started."""
        return cls(errors=list(errors), has_data=False)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form, keyed ``errors``, ``extensions``, ``data`` in that order."""
        payload: Dict[str, Any] = {}
        if self.errors:
            payload["errors"] = [error.formatted for error in self.errors]
        if self.extensions is not None:
            payload["extensions"] = self.extensions
        if self.has_data:
            payload["data"] = self.data
        return payload
