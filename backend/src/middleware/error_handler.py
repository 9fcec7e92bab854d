"""Error handling for application exceptions."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..models.api import ApiErrorResponse
from ..types import ErrorCode, ErrorSeverity
from ..utils.exceptions import TagAdminError
from ..utils.logging import log_error, log_info, log_warning

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.MISSING_CANONICAL_NAME: 400,
    ErrorCode.AUTHENTICATION_ERROR: 401,
    ErrorCode.DIGEST_MISMATCH: 401,
    ErrorCode.UNKNOWN_TERM_ID: 404,
    ErrorCode.STORE_ERROR: 500,
    ErrorCode.INTERNAL_ERROR: 500,
}


def status_for(code: ErrorCode) -> int:
    """Map an error code to an HTTP status."""
    return STATUS_BY_CODE.get(code, 500)


LOG_BY_SEVERITY = {
    ErrorSeverity.INFO: log_info,
    ErrorSeverity.WARNING: log_warning,
    ErrorSeverity.ERROR: log_error,
    ErrorSeverity.CRITICAL: log_error,
}


async def handle_tag_admin_error(request: Request, exc: TagAdminError) -> JSONResponse:
    """Convert an application error into a JSON error response.

    Args:
        request: FastAPI request
        exc: Application error

    Returns:
        JSON error response
    """
    status_code = status_for(exc.code)
    request_id = getattr(request.state, "request_id", None)
    log = LOG_BY_SEVERITY.get(exc.severity, log_error)
    log(
        f"{type(exc).__name__}: {str(exc)}",
        {"request_id": request_id, "path": request.url.path, "code": exc.code.value}
    )

    body = ApiErrorResponse(
        error=str(exc),
        code=exc.code.value,
        details=exc.details or None,
        request_id=request_id
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def setup_error_handling(app: FastAPI) -> None:
    """Register application error handlers."""
    app.add_exception_handler(TagAdminError, handle_tag_admin_error)
