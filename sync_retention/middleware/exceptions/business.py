"""Business logic related exceptions."""

from typing import Any, Dict, List, Optional

from . import RetentionToolError


class ExpiryScheduleError(RetentionToolError):
    """Raised when one or more items of a partition could not get a TTL.

    Updates that succeeded before or after the failing ones are kept.
    """

    def __init__(
        self,
        client_id: str,
        updated_count: int,
        failed_keys: List[Dict[str, str]],
        message: str = "Failed to schedule expiry for some items",
        code: str = "EXPIRY_SCHEDULE_FAILED",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code=code,
            details={
                "client_id": client_id,
                "updated_count": updated_count,
                "failed_keys": failed_keys,
                **(details or {}),
            },
        )
        self.client_id = client_id
        self.updated_count = updated_count
        self.failed_keys = failed_keys
