"""
Base models shared across graphql_http.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """
    Outcome of an operation that can fail in an expected way.

    Expected failures (a malformed request, an unacceptable header) are
    returned as values instead of being raised.

    Example:
        ```python
        result = extract_get_parameters(request)
        if result.success:
            params = result.value
        else:
            print(result.error.message)
        ```
    """

    success: bool
    value: Optional[T] = None
    error: Optional[E] = None

    @classmethod
    def ok(cls, value: T) -> "Result[T, E]":
        """Create successful result."""
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: E) -> "Result[T, E]":
        """Create failed result."""
        return cls(success=False, error=error)

    def unwrap(self) -> T:
        """Return the value, raising the error (or ``ValueError``) on failure."""
        if self.success:
            return self.value  # type: ignore[return-value]
        if isinstance(self.error, BaseException):
            raise self.error
        raise ValueError(str(self.error))
