"""Error handling module for docpager."""

from .exceptions import (
    PagerError,
    MalformedIdentifierError,
    InvalidLimitError,
    StoreConnectionError,
    QueryError
)
from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    BadRequestError,
    InternalServerError,
    BadGatewayError,
    ServiceUnavailableError,
    create_problem_response,
    problem_from_pager_error
)
from .handlers import register_exception_handlers

__all__ = [
    "PagerError",
    "MalformedIdentifierError",
    "InvalidLimitError",
    "StoreConnectionError",
    "QueryError",
    "ProblemDetail",
    "ProblemDetailException",
    "BadRequestError",
    "InternalServerError",
    "BadGatewayError",
    "ServiceUnavailableError",
    "create_problem_response",
    "problem_from_pager_error",
    "register_exception_handlers"
]
