"""Global exception handlers for the FastAPI application.

Every handler logs a sanitized view of the failure and answers with an
``ErrorResponse``. Status mapping:

- ``ValidationError`` 400, ``UnauthorizedError`` 401, ``ForbiddenError`` 403,
  ``NotFoundError`` 404, ``BusinessRuleError`` 422, other
  ``PaperContestError`` 500
- ``RequestValidationError`` (query/body parsing) 422 with messages grouped
  by wire field name
- Starlette ``HTTPException`` keeps its own status
- anything else 500, details hidden in production
"""

import traceback
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException

from papercontest.api.constants import (
    CORRELATION_ID_HEADER,
    HTTP_422_UNPROCESSABLE,
    HTTP_500_INTERNAL_SERVER_ERROR,
    REQUEST_ID_HEADER,
)
from papercontest.api.schemas.errors import ErrorResponse, ServiceInfo
from papercontest.api.utils.responses import ORJSONResponse
from papercontest.core.config import Settings, get_settings
from papercontest.core.context import RequestContext, current_request_id
from papercontest.core.error_context import sanitize_error_context
from papercontest.core.exceptions import (
    BusinessRuleError,
    ErrorCode,
    ForbiddenError,
    NotFoundError,
    PaperContestError,
    Severity,
    UnauthorizedError,
    ValidationError,
)

_STATUS_BY_ERROR: tuple[tuple[type[PaperContestError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (BusinessRuleError, HTTP_422_UNPROCESSABLE),
)

_CODE_BY_HTTP_STATUS: dict[int, tuple[ErrorCode, Severity]] = {
    status.HTTP_400_BAD_REQUEST: (ErrorCode.VALIDATION_ERROR, Severity.LOW),
    status.HTTP_401_UNAUTHORIZED: (ErrorCode.UNAUTHORIZED, Severity.HIGH),
    status.HTTP_403_FORBIDDEN: (ErrorCode.FORBIDDEN, Severity.HIGH),
    status.HTTP_404_NOT_FOUND: (ErrorCode.NOT_FOUND, Severity.LOW),
}


def get_service_info(settings: Settings) -> ServiceInfo:
    """Create ServiceInfo from application settings."""
    return ServiceInfo(
        name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )


def status_code_for(exc: PaperContestError) -> int:
    """Return the HTTP status a domain error is rendered with."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return HTTP_500_INTERNAL_SERVER_ERROR


def _render(
    request: Request,
    status_code: int,
    settings: Settings,
    **fields: Any,  # noqa: ANN401 - forwarded to ErrorResponse
) -> Response:
    # Request state is shared with the middleware; the unhandled-exception
    # handler runs outside their tasks and may not see their context variables.
    correlation_id = (
        getattr(request.state, "correlation_id", None)
        or RequestContext.get_correlation_id()
    )
    request_id = getattr(request.state, "request_id", None) or current_request_id()
    error_response = ErrorResponse(
        path=request.url.path,
        method=request.method,
        correlation_id=correlation_id,
        request_id=request_id,
        service_info=get_service_info(settings),
        **fields,
    )
    response = ORJSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )
    response.headers[REQUEST_ID_HEADER] = request_id
    if correlation_id:
        response.headers[CORRELATION_ID_HEADER] = correlation_id
    return response


async def paper_contest_error_handler(request: Request, exc: Exception) -> Response:
    """Handle PaperContestError exceptions.

    Args:
        request: The FastAPI request that caused the exception
        exc: The PaperContestError exception to handle

    Returns:
        Response: ORJSONResponse with error details

    Raises:
        TypeError: If exc is not a PaperContestError instance
    """
    if not isinstance(exc, PaperContestError):
        raise TypeError(f"Expected PaperContestError, got {type(exc).__name__}")

    settings = get_settings()
    status_code = status_code_for(exc)

    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": request.url.path,
            "status_code": status_code,
        },
    )
    log = logger.warning if exc.is_expected else logger.error
    log(
        "Handling {exception_type}: {message}",
        exception_type=type(exc).__name__,
        message=exc.message,
        fingerprint=exc.fingerprint,
        **error_context,
    )

    debug_info = None
    if settings.environment == "development":
        debug_info = {
            "stack_trace": exc.stack_trace,
            "error_context": exc.context,
            "exception_type": type(exc).__name__,
        }
        if exc.cause:
            debug_info["cause"] = {
                "type": type(exc.cause).__name__,
                "message": str(exc.cause),
            }

    return _render(
        request,
        status_code,
        settings,
        error_code=exc.error_code,
        message=exc.message,
        details=exc.context or None,
        severity=exc.severity.value,
        debug_info=debug_info,
    )


def group_validation_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    """Group validation messages by dotted field path.

    The location prefix (``query``, ``body``, ``path``) is dropped, so
    ``("query", "pageSize")`` becomes ``"pageSize"``. Errors without a field
    are grouped under ``"root"``.
    """
    field_errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field_path = error.get("loc", ())
        field_name = ".".join(str(loc) for loc in field_path[1:] if loc != "__root__")
        field_errors.setdefault(field_name or "root", []).append(
            error.get("msg", "Invalid value")
        )
    return field_errors


async def validation_error_handler(request: Request, exc: Exception) -> Response:
    """Handle FastAPI RequestValidationError exceptions.

    Raises:
        TypeError: If exc is not a RequestValidationError instance
    """
    if not isinstance(exc, RequestValidationError):
        raise TypeError(f"Expected RequestValidationError, got {type(exc).__name__}")

    field_errors = group_validation_errors(exc)
    logger.warning(
        "Request validation failed",
        status_code=HTTP_422_UNPROCESSABLE,
        **sanitize_error_context(
            exc,
            {
                "path": request.url.path,
                "method": request.method,
                "validation_errors": field_errors,
            },
        ),
    )

    return _render(
        request,
        HTTP_422_UNPROCESSABLE,
        get_settings(),
        error_code=ErrorCode.VALIDATION_ERROR.value,
        message="Request validation failed",
        details={"validation_errors": field_errors},
        severity=Severity.LOW.value,
    )


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle Starlette HTTPException (unknown routes, wrong methods, ...).

    Raises:
        TypeError: If exc is not an HTTPException instance
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    error_code, severity = _CODE_BY_HTTP_STATUS.get(
        exc.status_code, (ErrorCode.INTERNAL_ERROR, Severity.MEDIUM)
    )
    if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        severity = Severity.HIGH

    logger.warning(
        "HTTP exception",
        **sanitize_error_context(
            exc,
            {
                "status": exc.status_code,
                "method": request.method,
                "path": request.url.path,
            },
        ),
    )

    response = _render(
        request,
        exc.status_code,
        get_settings(),
        error_code=error_code.value,
        message=str(exc.detail),
        severity=severity.value,
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle any exception no other handler claimed.

    In production the response hides the exception type and message.
    """
    settings = get_settings()

    logger.exception(
        "Unhandled exception: {exception_type}",
        exception_type=type(exc).__name__,
        **sanitize_error_context(
            exc,
            {
                "request_method": request.method,
                "request_path": request.url.path,
            },
        ),
    )

    if settings.environment == "production":
        message = "An internal server error occurred"
        details = None
        debug_info = None
    else:
        message = f"Internal server error: {type(exc).__name__}"
        details = {"error": str(exc), "type": type(exc).__name__}
        debug_info = {
            "stack_trace": traceback.format_tb(exc.__traceback__),
            "exception_type": type(exc).__name__,
        }

    return _render(
        request,
        HTTP_500_INTERNAL_SERVER_ERROR,
        settings,
        error_code=ErrorCode.INTERNAL_ERROR.value,
        message=message,
        details=details,
        severity=Severity.CRITICAL.value,
        debug_info=debug_info,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(PaperContestError, paper_contest_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
