"""
Global Exception Handlers

Turns every failure that escapes a route into an ErrorResponse body and
logs it with the request it came from.

Design Considerations:
- Assistant errors mapped to gateway/server status codes
- Decryption failures reported without detail
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models.errors import ErrorCode, ErrorResponse, ValidationErrorResponse
from atom_mail.errors import AssistantError, CryptoFailure, EncodingError, RemoteServiceError

logger = logging.getLogger(__name__)

ASSISTANT_ERROR_STATUS = {
    RemoteServiceError: (status.HTTP_502_BAD_GATEWAY, ErrorCode.REMOTE_SERVICE_ERROR),
    EncodingError: (status.HTTP_502_BAD_GATEWAY, ErrorCode.ENCODING_ERROR),
    CryptoFailure: (status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCode.CRYPTO_FAILURE),
}


def add_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(AssistantError, assistant_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Exception handlers registered")


def error_json(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    log_exception(request, exc, exc.status_code)
    return error_json(exc.status_code, ErrorResponse.for_http_status(exc.status_code, exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report each field of the message body that failed validation."""
    log_exception(request, exc, status.HTTP_422_UNPROCESSABLE_ENTITY)
    return error_json(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        ValidationErrorResponse.from_errors(exc.errors())
    )


async def assistant_exception_handler(request: Request, exc: AssistantError) -> JSONResponse:
    """
    Map assistant failures to status codes.

    Subclasses not listed in ASSISTANT_ERROR_STATUS are reported as 500.
    """
    status_code, error_code = ASSISTANT_ERROR_STATUS.get(
        type(exc),
        (status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCode.ASSISTANT_ERROR)
    )
    log_exception(request, exc, status_code)
    return error_json(status_code, ErrorResponse.for_assistant_error(exc, error_code))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions with a sanitized error response."""
    log_exception(request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR, include_traceback=True)
    return error_json(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(
            message="An unexpected error occurred",
            error_code=ErrorCode.INTERNAL_SERVER_ERROR.value,
            details={"error_type": exc.__class__.__name__}
        )
    )


def log_exception(
    request: Request,
    exc: Exception,
    status_code: int,
    include_traceback: bool = False
) -> None:
    """Log a request failure at WARNING for 4xx and ERROR for 5xx."""
    log_level = logging.ERROR if status_code >= 500 else logging.WARNING

    context = {
        "status_code": status_code,
        "error_type": exc.__class__.__name__,
        "client_host": request.client.host if request.client else "unknown"
    }
    if include_traceback:
        context["traceback"] = traceback.format_exc()

    logger.log(log_level, f"Request {request.method} {request.url.path} failed: {context}")
