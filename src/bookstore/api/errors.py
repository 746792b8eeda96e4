"""Translation of exceptions into error responses.

Every rejection leaves the API as ``{"status", "error", "message"}`` plus
``details`` for validation failures.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from bookstore.errors import BookstoreError
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


def error_body(status: int, error: str, message: str, details=None) -> dict:
    body = {"status": status, "error": error, "message": message}
    if details is not None:
        body["details"] = details
    return body


def error_response(exc: BookstoreError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request.failed", error=exc.kind, message=exc.message)
    else:
        logger.info("request.rejected", error=exc.kind, status=exc.status_code, message=exc.message)

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.kind, exc.message, exc.details or None),
    )


def _request_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(BookstoreError)
    async def handle_bookstore_error(request: Request, exc: BookstoreError) -> JSONResponse:
        return error_response(exc)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        logger.info("request.invalid", path=request.url.path, errors=exc.messages)
        return JSONResponse(
            status_code=400,
            content=error_body(400, "InvalidInput", "Validation failed", exc.messages),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = _request_errors(exc)
        logger.info("request.invalid", path=request.url.path, errors=details)
        return JSONResponse(
            status_code=400,
            content=error_body(400, "InvalidInput", "Request validation failed", details),
        )

    @app.exception_handler(ObjectNotFoundError)
    async def handle_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content=error_body(404, "NotFound", str(exc) or "Resource not found"))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request.crashed", path=request.url.path)
        return JSONResponse(status_code=500, content=error_body(500, "InternalError", "Internal server error"))
