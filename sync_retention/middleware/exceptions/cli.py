"""Command line related exceptions."""

from typing import Any, Dict, Optional

from . import RetentionToolError


class UsageError(RetentionToolError):
    """Unknown command or missing argument."""

    def __init__(
        self,
        message: str = "Invalid usage",
        code: str = "USAGE_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code=code, details=details, exit_code=2)
