"""
Shared error handling for the movie metadata proxy.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    message: Optional[str] = None
    path: Optional[str] = None

    def to_content(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ProxyException(Exception):
    """Base exception for proxy services."""

    status_code: int = 500

    def __init__(
        self,
        code: str,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(error=self.message)


class MissingParameterError(ProxyException):
    """A required query parameter was not supplied by the caller."""

    def __init__(self, name: str):
        super().__init__(
            "MISSING_PARAMETER",
            f"{name.capitalize()} parameter is required",
            status_code=400,
            details={"parameter": name},
        )


class UpstreamError(ProxyException):
    """
    The upstream API answered with a non-2xx status or could not be reached.

    ``upstream_status`` is None for transport failures, in which case the
    caller sees a 500.
    """

    def __init__(
        self,
        path: str,
        upstream_status: Optional[int] = None,
        message: str = "Upstream request failed",
        description: str = "data",
    ):
        self.path = path
        self.upstream_status = upstream_status
        self.description = description
        super().__init__(
            "UPSTREAM_ERROR",
            message,
            status_code=upstream_status or 500,
            details={"path": path, "upstream_status": upstream_status},
        )

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error=f"Failed to fetch {self.description}",
            message=self.message,
            path=self.path,
        )
