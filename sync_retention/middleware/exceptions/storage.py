"""Storage-related exceptions."""

from typing import Any, Dict, Optional

from . import RetentionToolError


class StorageError(RetentionToolError):
    """Base class for storage-related errors."""

    def __init__(
        self, message: str, code: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, code=code, details=details, exit_code=1)


class SessionError(StorageError):
    """Error when a session to the store cannot be established."""

    def __init__(
        self,
        message: str = "Failed to initialize DynamoDB session",
        code: str = "SESSION_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class QueryError(StorageError):
    """Error when any page of a partition query fails.

    The key set collected so far is incomplete and must not be used.
    """

    def __init__(
        self,
        client_id: str,
        message: str = "Failed to query partition",
        code: str = "QUERY_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code=code,
            details={"client_id": client_id, **(details or {})},
        )
        self.client_id = client_id


class UpdateError(StorageError):
    """Error when a single item attribute update is rejected."""

    def __init__(
        self,
        key: Dict[str, str],
        message: str = "Failed to update item",
        code: str = "UPDATE_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code=code,
            details={"key": key, **(details or {})},
        )
        self.key = key


class TableOperationError(StorageError):
    """Error for table lifecycle, scan and put operations used by tooling."""

    def __init__(
        self,
        message: str = "Table operation failed",
        code: str = "TABLE_OPERATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
