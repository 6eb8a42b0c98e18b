from enum import Enum
from typing import Any, Dict, Optional

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.middleware_factory import lambda_handler_decorator
from pydantic import BaseModel, ValidationError

from .exceptions import (
    ExpiryScheduleError,
    QueryError,
    RetentionToolError,
    SessionError,
    StorageError,
    TableOperationError,
    UpdateError,
    UsageError,
)

logger = Logger()


class ErrorCode(Enum):
    # Usage errors
    USAGE_ERROR = "USAGE_ERROR"
    VALIDATION_INVALID_INPUT = "VALIDATION_INVALID_INPUT"

    # Storage errors
    SESSION_ERROR = "SESSION_ERROR"
    QUERY_ERROR = "QUERY_ERROR"
    UPDATE_ERROR = "UPDATE_ERROR"
    TABLE_OPERATION_ERROR = "TABLE_OPERATION_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"

    # Business errors
    EXPIRY_SCHEDULE_FAILED = "EXPIRY_SCHEDULE_FAILED"

    # System errors
    SYSTEM_INTERNAL_ERROR = "SYSTEM_INTERNAL_ERROR"

    @property
    def default_message(self) -> str:
        messages: Dict["ErrorCode", str] = {
            ErrorCode.USAGE_ERROR: "Invalid usage",
            ErrorCode.VALIDATION_INVALID_INPUT: "Invalid input",
            ErrorCode.SESSION_ERROR: "Failed to initialize DynamoDB session",
            ErrorCode.QUERY_ERROR: "Failed to query partition",
            ErrorCode.UPDATE_ERROR: "Failed to update item",
            ErrorCode.TABLE_OPERATION_ERROR: "Table operation failed",
            ErrorCode.STORAGE_ERROR: "Storage operation failed",
            ErrorCode.EXPIRY_SCHEDULE_FAILED: "Failed to schedule expiry",
            ErrorCode.SYSTEM_INTERNAL_ERROR: "An unexpected error occurred",
        }
        return messages[self]

    @property
    def exit_code(self) -> int:
        if self in (ErrorCode.USAGE_ERROR, ErrorCode.VALIDATION_INVALID_INPUT):
            return 2
        return 1

    @classmethod
    def from_exception(cls, e: Exception) -> "ErrorCode":
        """Map exceptions to error codes."""
        mappings: Dict[type, "ErrorCode"] = {
            ValidationError: ErrorCode.VALIDATION_INVALID_INPUT,
            UsageError: ErrorCode.USAGE_ERROR,
            SessionError: ErrorCode.SESSION_ERROR,
            QueryError: ErrorCode.QUERY_ERROR,
            UpdateError: ErrorCode.UPDATE_ERROR,
            TableOperationError: ErrorCode.TABLE_OPERATION_ERROR,
            StorageError: ErrorCode.STORAGE_ERROR,
            ExpiryScheduleError: ErrorCode.EXPIRY_SCHEDULE_FAILED,
        }
        return mappings.get(type(e), ErrorCode.SYSTEM_INTERNAL_ERROR)


class ErrorResponse(BaseModel):
    message: str
    code: ErrorCode
    details: Optional[Dict[str, Any]] = None

    @classmethod
    def from_code(
        cls, code: ErrorCode, details: Optional[Dict[str, Any]] = None
    ) -> "ErrorResponse":
        return cls(message=code.default_message, code=code, details=details)

    @classmethod
    def from_exception(cls, e: Exception) -> "ErrorResponse":
        """Create an ErrorResponse from an exception."""
        code = ErrorCode.from_exception(e)
        message = str(e) if str(e) else code.default_message
        details = getattr(e, "details", None)

        return cls(message=message, code=code, details=details)


def create_error_response(exit_code: int, error_response: ErrorResponse) -> Dict[str, Any]:
    """Helper to create standardized command results for failures."""
    return {
        "exitCode": exit_code,
        "message": f"{error_response.code.value}: {error_response.message}",
        "error": error_response.model_dump(mode="json"),
    }


@lambda_handler_decorator
def error_handler_middleware(handler, event, context):
    """Middleware to turn exceptions into exit codes and operator-readable messages."""
    try:
        return handler(event, context)

    # --- RetentionToolError exceptions (our custom exceptions) ---
    except RetentionToolError as e:
        log_level = "warning" if isinstance(e, UsageError) else "error"
        getattr(logger, log_level)(
            f"{e.__class__.__name__}: {str(e)}",
            extra={"code": e.code, "details": e.details},
        )

        error_response = ErrorResponse.from_exception(e)
        return create_error_response(e.exit_code, error_response)

    # --- Input Validation Errors ---
    except (ValidationError, ValueError) as e:
        logger.warning(f"Input validation failed: {e}", exc_info=True)
        error_response = ErrorResponse(
            message=str(e) or ErrorCode.VALIDATION_INVALID_INPUT.default_message,
            code=ErrorCode.VALIDATION_INVALID_INPUT,
            details={"errors": str(e)},
        )
        return create_error_response(
            ErrorCode.VALIDATION_INVALID_INPUT.exit_code, error_response
        )

    # --- Generic Fallback Error ---
    except Exception as e:
        logger.exception(f"Unhandled error: {e.__class__.__name__}: {str(e)}")
        error_response = ErrorResponse.from_code(
            ErrorCode.SYSTEM_INTERNAL_ERROR, details={"error": str(e)}
        )
        return create_error_response(
            ErrorCode.SYSTEM_INTERNAL_ERROR.exit_code, error_response
        )
