"""Problem Details (RFC 9457) implementation for the docpager API."""

from typing import Optional, Any
from pydantic import BaseModel, Field
from fastapi import Request
from fastapi.responses import JSONResponse

from .exceptions import (
    MalformedIdentifierError, InvalidLimitError, StoreConnectionError, QueryError
)


class ProblemDetail(BaseModel):
    """Problem Details as defined in RFC 9457."""

    type: str = Field(default="about:blank", description="A URI reference that identifies the problem type")
    title: str = Field(description="A short, human-readable summary of the problem type")
    status: int = Field(description="The HTTP status code")
    detail: Optional[str] = Field(default=None, description="A human-readable explanation specific to this occurrence")
    instance: Optional[str] = Field(default=None, description="A URI reference that identifies the specific occurrence")

    # Allow additional properties for extensions
    model_config = {"extra": "allow"}


class ProblemDetailException(Exception):
    """Base exception for Problem Details responses."""

    def __init__(
        self,
        status: int,
        title: str,
        detail: Optional[str] = None,
        type_uri: str = "about:blank",
        instance: Optional[str] = None,
        **extensions: Any
    ):
        self.status = status
        self.title = title
        self.detail = detail
        self.type_uri = type_uri
        self.instance = instance
        self.extensions = extensions
        super().__init__(detail or title)

    def to_problem_detail(self, request: Optional[Request] = None) -> ProblemDetail:
        """Convert to ProblemDetail model."""
        instance = self.instance
        if instance is None and request:
            instance = str(request.url.path)

        return ProblemDetail(
            type=self.type_uri,
            title=self.title,
            status=self.status,
            detail=self.detail,
            instance=instance,
            **self.extensions
        )

    def to_response(self, request: Optional[Request] = None) -> JSONResponse:
        """Convert to JSONResponse with Problem Details format."""
        problem = self.to_problem_detail(request)
        return JSONResponse(
            status_code=self.status,
            content=problem.model_dump(exclude_none=True),
            headers={"Content-Type": "application/problem+json"}
        )


class BadRequestError(ProblemDetailException):
    """400 Bad Request error."""

    def __init__(self, detail: str, **extensions: Any):
        super().__init__(
            status=400,
            title="Bad Request",
            detail=detail,
            **extensions
        )


class InternalServerError(ProblemDetailException):
    """500 Internal Server Error."""

    def __init__(self, detail: str = "Internal server error", **extensions: Any):
        super().__init__(
            status=500,
            title="Internal Server Error",
            detail=detail,
            **extensions
        )


class BadGatewayError(ProblemDetailException):
    """502 Bad Gateway error, used when the document store rejects a query."""

    def __init__(self, detail: str = "Upstream document store error", **extensions: Any):
        super().__init__(
            status=502,
            title="Bad Gateway",
            detail=detail,
            **extensions
        )


class ServiceUnavailableError(ProblemDetailException):
    """503 Service Unavailable error."""

    def __init__(self, detail: str = "Service temporarily unavailable", **extensions: Any):
        super().__init__(
            status=503,
            title="Service Unavailable",
            detail=detail,
            **extensions
        )


def create_problem_response(
    status: int,
    title: str,
    detail: Optional[str] = None,
    type_uri: str = "about:blank",
    instance: Optional[str] = None,
    request: Optional[Request] = None,
    **extensions: Any
) -> JSONResponse:
    """Create a Problem Details response."""
    if instance is None and request:
        instance = str(request.url.path)

    problem = ProblemDetail(
        type=type_uri,
        title=title,
        status=status,
        detail=detail,
        instance=instance,
        **extensions
    )

    return JSONResponse(
        status_code=status,
        content=problem.model_dump(exclude_none=True),
        headers={"Content-Type": "application/problem+json"}
    )


def problem_from_pager_error(exc: Exception) -> ProblemDetailException:
    """Map a domain exception onto the matching Problem Details exception."""
    if isinstance(exc, MalformedIdentifierError):
        return BadRequestError(str(exc), error_code="MALFORMED_IDENTIFIER")
    if isinstance(exc, InvalidLimitError):
        return BadRequestError(str(exc), error_code="INVALID_LIMIT")
    if isinstance(exc, StoreConnectionError):
        return ServiceUnavailableError("Document store is unreachable", error_code="STORE_UNAVAILABLE")
    if isinstance(exc, QueryError):
        return BadGatewayError(str(exc), error_code="QUERY_FAILED")
    return InternalServerError("An unexpected error occurred")
