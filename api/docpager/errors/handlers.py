"""Exception handlers for the docpager API."""

import logging
from typing import Union
from fastapi import Request, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import PagerError, StoreConnectionError
from .problem_details import (
    ProblemDetailException,
    create_problem_response,
    problem_from_pager_error
)

logger = logging.getLogger(__name__)


async def problem_detail_exception_handler(
    request: Request,
    exc: ProblemDetailException
) -> JSONResponse:
    """Handle ProblemDetailException instances."""
    logger.info(
        f"Problem detail exception: {exc.status} - {exc.title}",
        extra={
            "status_code": exc.status,
            "path": str(request.url.path),
            "method": request.method,
            "detail": exc.detail
        }
    )
    return exc.to_response(request)


async def pager_exception_handler(
    request: Request,
    exc: PagerError
) -> JSONResponse:
    """Handle domain errors raised while paginating."""
    problem = problem_from_pager_error(exc)
    log = logger.error if isinstance(exc, StoreConnectionError) else logger.info
    log(
        f"Pager error: {type(exc).__name__} - {exc}",
        extra={
            "status_code": problem.status,
            "path": str(request.url.path),
            "method": request.method
        }
    )
    return problem.to_response(request)


async def http_exception_handler(
    request: Request,
    exc: Union[HTTPException, StarletteHTTPException]
) -> JSONResponse:
    """Handle FastAPI HTTPException and Starlette HTTPException."""
    logger.info(
        f"HTTP exception: {exc.status_code} - {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": str(request.url.path),
            "method": request.method,
            "detail": exc.detail
        }
    )

    status_titles = {
        400: "Bad Request",
        404: "Not Found",
        405: "Method Not Allowed",
        422: "Unprocessable Entity",
        500: "Internal Server Error",
        502: "Bad Gateway",
        503: "Service Unavailable",
        504: "Gateway Timeout"
    }

    title = status_titles.get(exc.status_code, "HTTP Error")
    detail = str(exc.detail) if exc.detail else None

    response = create_problem_response(
        status=exc.status_code,
        title=title,
        detail=detail,
        request=request
    )

    if getattr(exc, "headers", None):
        for key, value in exc.headers.items():
            response.headers[key] = value

    return response


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors (bad query parameters)."""
    logger.info(
        f"Validation error: {len(exc.errors())} errors",
        extra={
            "path": str(request.url.path),
            "method": request.method,
            "errors": exc.errors()
        }
    )

    error_messages = []
    for error in exc.errors():
        loc = " -> ".join(str(x) for x in error["loc"])
        error_messages.append(f"{loc}: {error['msg']}")

    return create_problem_response(
        status=422,
        title="Validation Error",
        detail="Validation failed: " + "; ".join(error_messages),
        request=request,
        validation_errors=jsonable_encoder(exc.errors())
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__} - {str(exc)}",
        extra={
            "path": str(request.url.path),
            "method": request.method,
            "exception_type": type(exc).__name__
        },
        exc_info=True
    )

    # Don't expose internal error details
    return create_problem_response(
        status=500,
        title="Internal Server Error",
        detail="An unexpected error occurred",
        request=request
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(ProblemDetailException, problem_detail_exception_handler)
    app.add_exception_handler(PagerError, pager_exception_handler)

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Catch-all for unexpected exceptions
    app.add_exception_handler(Exception, general_exception_handler)
