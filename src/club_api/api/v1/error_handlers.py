"""
FastAPI exception handlers.

Services raise club_api.exceptions.DomainError; the handler renders it with
DomainError.to_payload() and DomainError.http_status(). Request bodies that fail
pydantic validation are rendered in the same shape as ValidationFailed (400).
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from club_api.exceptions.base import DomainError, ErrorKind

logger = logging.getLogger(__name__)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """
    Payload: {"detail": "...", "code": "<kind>"[, "fields": [...]]}
    Internal errors were already logged with their stack trace by the service.
    """
    level = logging.ERROR if exc.kind is ErrorKind.INTERNAL else logging.INFO
    logger.log(
        level,
        "http.domain_error",
        extra={
            "method": request.method,
            "path": request.url.path,
            "kind": exc.kind.value,
            "status_code": exc.http_status(),
        },
    )
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


def _describe(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location}: {error.get('msg')}" if location else str(error.get("msg"))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    fields = sorted({str(e["loc"][-1]) for e in errors if e.get("loc")})
    logger.info(
        "http.request_validation_failed",
        extra={"method": request.method, "path": request.url.path, "fields": fields},
    )
    payload = {
        "detail": "; ".join(_describe(e) for e in errors) or "Invalid request",
        "code": ErrorKind.VALIDATION_FAILED.value,
    }
    if fields:
        payload["fields"] = fields
    return JSONResponse(status_code=400, content=payload)


def register_exception_handlers(app) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
