"""Exception handling for the sync retention tool."""

from typing import Any, Dict, Optional


class RetentionToolError(Exception):
    """Base exception for all sync retention tool errors."""

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
        exit_code: int = 1,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.exit_code = exit_code


from .business import ExpiryScheduleError
from .cli import UsageError
from .storage import (
    QueryError,
    SessionError,
    StorageError,
    TableOperationError,
    UpdateError,
)

__all__ = [
    # Base
    "RetentionToolError",
    # CLI Errors
    "UsageError",
    # Business Errors
    "ExpiryScheduleError",
    # Storage Errors
    "StorageError",
    "SessionError",
    "QueryError",
    "UpdateError",
    "TableOperationError",
]
