"""Failure → JSON translation.

Every known failure leaving the app is rendered here, whether it was
returned by a service, raised from a dependency, produced by request
body validation, or is a route Starlette could not match. Known kinds
always become JSON; anything unrecognised falls through to FastAPI's
default handlers.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pressroom.outcome import (
    Failure,
    FailureKind,
    Rejected,
    not_found,
    validation_failed,
)

logger = structlog.get_logger()

STATUS_CODES = {
    FailureKind.VALIDATION: 422,
    FailureKind.AUTHENTICATION: 401,
    FailureKind.NOT_FOUND: 404,
}

# Request locations FastAPI prefixes onto validation error paths
_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def render_failure(failure: Failure) -> JSONResponse:
    """Build the wire response for a Failure."""
    content: dict = {"error": failure.message}
    headers = None

    if failure.kind is FailureKind.VALIDATION:
        content["errors"] = failure.fields
    elif failure.kind is FailureKind.AUTHENTICATION:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=STATUS_CODES[failure.kind],
        content=content,
        headers=headers,
    )


def field_errors(errors) -> dict[str, list[str]]:
    """Group pydantic error dicts into {field: [messages]}.

    The request location ("body", "query", ...) is dropped from the
    path; nested paths are joined with dots. An error on the body as a
    whole (e.g. malformed JSON) is keyed "body".
    """
    grouped: dict[str, list[str]] = {}
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in _LOCATIONS]
        key = ".".join(loc) or "body"
        grouped.setdefault(key, []).append(err.get("msg", "Invalid value."))
    return grouped


async def rejected_handler(request: Request, exc: Rejected) -> JSONResponse:
    logger.info(
        "request.rejected",
        kind=exc.failure.kind.value,
        path=request.url.path,
    )
    return render_failure(exc.failure)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    failure = validation_failed(field_errors(exc.errors()))
    logger.info(
        "request.invalid",
        path=request.url.path,
        fields=sorted(failure.fields),
    )
    return render_failure(failure)


async def starlette_http_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes get the JSON 404 envelope; other statuses use the default."""
    if exc.status_code == 404:
        return render_failure(not_found())
    return await http_exception_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Rejected, rejected_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, starlette_http_handler)
