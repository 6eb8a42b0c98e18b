"""Unit tests for error code mapping."""

import unittest

from sync_retention.middleware.error_handler import ErrorCode, ErrorResponse
from sync_retention.middleware.exceptions import (
    QueryError,
    SessionError,
    UpdateError,
    UsageError,
)


class TestErrorCode(unittest.TestCase):
    def test_mapping(self):
        self.assertEqual(ErrorCode.SESSION_ERROR, ErrorCode.from_exception(SessionError()))
        self.assertEqual(
            ErrorCode.QUERY_ERROR, ErrorCode.from_exception(QueryError(client_id="c"))
        )
        self.assertEqual(
            ErrorCode.UPDATE_ERROR,
            ErrorCode.from_exception(UpdateError(key={"ClientID": "c", "ID": "1"})),
        )
        self.assertEqual(
            ErrorCode.SYSTEM_INTERNAL_ERROR, ErrorCode.from_exception(KeyError("x"))
        )

    def test_exit_codes(self):
        self.assertEqual(2, ErrorCode.USAGE_ERROR.exit_code)
        self.assertEqual(1, ErrorCode.QUERY_ERROR.exit_code)
        self.assertEqual(2, UsageError().exit_code)

    def test_error_response_keeps_details(self):
        response = ErrorResponse.from_exception(UpdateError(key={"ClientID": "c", "ID": "1"}))

        self.assertEqual("Failed to update item", response.message)
        self.assertEqual({"key": {"ClientID": "c", "ID": "1"}}, response.details)


if __name__ == "__main__":
    unittest.main()
