from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from synergysphere.constants import ErrorMessages
from synergysphere.enums import ErrorCode
from synergysphere.utils.logger import get_logger

logger = get_logger(__name__)


class BaseAPIException(HTTPException):
    """
    Base exception for all API errors.
    Enforces a consistent, frontend-friendly response structure.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.message = message
        self.error_code = error_code
        self.details = details


def _error_body(request: Request, message: str, error_code: ErrorCode, details: dict | None = None):
    return {
        "error": message,
        "error_code": error_code,
        "path": request.url.path,
        "details": details,
    }


# --------------------------------------------------
# GLOBAL EXCEPTION HANDLERS
# --------------------------------------------------

async def base_api_exception_handler(request: Request, exc: BaseAPIException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.message, exc.error_code, exc.details),
    )


_STATUS_CODES = {
    400: ErrorCode.BAD_REQUEST,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
}


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes, wrong methods and other framework-level errors."""
    error_code = _STATUS_CODES.get(exc.status_code, ErrorCode.BAD_REQUEST)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, str(exc.detail), error_code),
        headers=getattr(exc, "headers", None),
    )


def format_validation_error(exc: RequestValidationError) -> str:
    """
    Turns the first pydantic error into a short human message,
    e.g. "title is required" or "status: Input should be 'todo', ...".
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = loc[-1] if loc else "request"

    if first.get("type") == "missing":
        return f"{field} is required"

    msg = first.get("msg", "Invalid value")
    if msg.startswith("Value error, "):
        return msg[len("Value error, "):]
    return f"{field}: {msg}"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=_error_body(request, format_validation_error(exc), ErrorCode.BAD_REQUEST),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    if is_foreign_key_violation(exc):
        return JSONResponse(
            status_code=400,
            content=_error_body(request, ErrorMessages.INVALID_REFERENCE, ErrorCode.BAD_REQUEST),
        )
    return JSONResponse(
        status_code=409,
        content=_error_body(request, ErrorMessages.DUPLICATE_RECORD, ErrorCode.CONFLICT),
    )


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    # PostgreSQL reports SQLSTATE 23503; SQLite only has the message
    if getattr(exc.orig, "pgcode", None) == "23503":
        return True
    return "foreign key" in str(exc.orig).lower()


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=_error_body(request, ErrorMessages.INTERNAL_ERROR, ErrorCode.INTERNAL_SERVER_ERROR),
    )


def register_exception_handlers(app):
    app.add_exception_handler(BaseAPIException, base_api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# --------------------------------------------------
# CENTRAL ERROR FACTORY (ONLY PLACE TO RAISE ERRORS)
# --------------------------------------------------

def raise_api_error(
    status_code: int,
    message: str,
    error_code: ErrorCode,
    details: dict | None = None,
):
    raise BaseAPIException(
        status_code=status_code,
        message=message,
        error_code=error_code,
        details=details,
    )


# --------------------------------------------------
# GENERIC HTTP HELPERS
# --------------------------------------------------

def raise_bad_request(message: str, details: dict | None = None):
    raise_api_error(400, message, ErrorCode.BAD_REQUEST, details)


def raise_unauthorized(
    message: str = ErrorMessages.UNAUTHORIZED,
):
    raise_api_error(401, message, ErrorCode.UNAUTHORIZED)


def raise_forbidden(
    message: str = ErrorMessages.ACCESS_DENIED,
):
    raise_api_error(403, message, ErrorCode.FORBIDDEN)


def raise_not_found(
    message: str,
    error_code: ErrorCode = ErrorCode.NOT_FOUND,
):
    raise_api_error(404, message, error_code)


def raise_conflict(message: str, error_code: ErrorCode = ErrorCode.CONFLICT):
    raise_api_error(409, message, error_code)


# --------------------------------------------------
# DOMAIN-SPECIFIC HELPERS
# --------------------------------------------------

def raise_project_not_found():
    raise_not_found(
        ErrorMessages.PROJECT_NOT_FOUND,
        ErrorCode.PROJECT_NOT_FOUND,
    )


def raise_member_not_found(message: str = ErrorMessages.MEMBER_NOT_FOUND):
    raise_not_found(message, ErrorCode.MEMBER_NOT_FOUND)


def raise_task_not_found():
    raise_not_found(
        ErrorMessages.TASK_NOT_FOUND,
        ErrorCode.TASK_NOT_FOUND,
    )


def raise_comment_not_found():
    raise_not_found(
        ErrorMessages.COMMENT_NOT_FOUND,
        ErrorCode.COMMENT_NOT_FOUND,
    )


def raise_thread_not_found():
    raise_not_found(
        ErrorMessages.THREAD_NOT_FOUND,
        ErrorCode.THREAD_NOT_FOUND,
    )


def raise_message_not_found():
    raise_not_found(
        ErrorMessages.MESSAGE_NOT_FOUND,
        ErrorCode.MESSAGE_NOT_FOUND,
    )


def raise_notification_not_found():
    raise_not_found(
        ErrorMessages.NOTIFICATION_NOT_FOUND,
        ErrorCode.NOTIFICATION_NOT_FOUND,
    )


def raise_email_exists():
    raise_conflict(ErrorMessages.EMAIL_EXISTS, ErrorCode.EMAIL_EXISTS)


def raise_not_project_members(details: dict):
    raise_api_error(
        400,
        ErrorMessages.NO_PROJECT_MEMBERS,
        ErrorCode.NOT_PROJECT_MEMBER,
        details,
    )
