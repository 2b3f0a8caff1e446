"""Error Dispatcher: the only place that writes a response for the error path.

Invariants:
    - FieldError / GeneralError → 400 {status: false, errors: [...]}
    - Any other failure (unexpected exception, framework HTTP error) →
      400 {status: false, message: "..."}
    - Unmatched routes → 400 with a RESOURCE_NOT_FOUND "Route not found" error
    - Successful outcomes → 200 {status: true[, content]}

Design Decisions:
    - One fixed client-error status for every failure, server-side ones
      included: clients branch on the error list, not on the status code
    - respond() is a single exhaustive match over the Outcome union
    - DatastoreError gets its own handler so it is rendered by the exception
      middleware instead of escaping through the server-error middleware
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from community_api.core.errors import (
    MSG_ROUTE_NOT_FOUND, DatastoreError, ErrorCode, FieldError, FieldIssue,
    GeneralError, serialize,
)
from community_api.core.outcome import Ok, Outcome

logger = logging.getLogger(__name__)

ERROR_STATUS = status.HTTP_400_BAD_REQUEST


def respond(outcome: Outcome) -> JSONResponse:
    """Render an operation outcome as the response envelope."""
    match outcome:
        case Ok(content=None):
            return JSONResponse({"status": True})
        case Ok(content=content):
            return JSONResponse({"status": True, "content": content})
        case FieldError() | GeneralError():
            return _failure_response(outcome)


def _failure_response(failure: FieldError | GeneralError) -> JSONResponse:
    errors = serialize(failure)
    logger.info(
        f"Request failed: {errors[0]['message'] if errors else ''}",
        extra={"error_code": errors[0]["code"] if errors else None},
    )
    return JSONResponse(
        status_code=ERROR_STATUS, content={"status": False, "errors": errors},
    )


def _message_response(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=ERROR_STATUS, content={"status": False, "message": message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_http_error_handler(app)
    _register_validation_error_handler(app)
    _register_datastore_error_handler(app)
    _register_generic_error_handler(app)


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _failure_response(GeneralError.single(
                MSG_ROUTE_NOT_FOUND, ErrorCode.RESOURCE_NOT_FOUND,
            ))
        logger.warning(
            f"HTTP error on {request.method} {request.url.path}: {exc.detail}",
        )
        return _message_response(str(exc.detail))


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Framework-level validation (path/query coercion) as field errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return _failure_response(FieldError(tuple(
            FieldIssue(
                str(e["loc"][-1]) if e["loc"] else "",
                e["msg"],
                ErrorCode.INVALID_INPUT,
            )
            for e in exc.errors()
        )))


def _register_datastore_error_handler(app: FastAPI) -> None:

    @app.exception_handler(DatastoreError)
    async def datastore_error_handler(request: Request, exc: DatastoreError):
        logger.error(
            f"Datastore error on {request.url.path}: {exc}",
            extra={"path": request.url.path, "method": request.method},
        )
        return _message_response(str(exc))


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: same status as every other failure."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return _message_response(str(exc))
