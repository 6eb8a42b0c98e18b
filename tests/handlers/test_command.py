"""Unit tests for the command handler and the CLI."""

import unittest
from unittest.mock import MagicMock, patch

from sync_retention.cli import main
from sync_retention.config.app import AppConfig
from sync_retention.handlers.command import command_handler
from sync_retention.middleware.exceptions import (
    ExpiryScheduleError,
    QueryError,
    SessionError,
)
from sync_retention.models.domain import ExpiryResult


class TestCommandHandler(unittest.TestCase):
    """Test cases for the command handler."""

    def setUp(self):
        """Set up test fixtures."""
        self.config_patch = patch("sync_retention.handlers.command.AppConfig")
        self.client_patch = patch("sync_retention.handlers.command.DynamoDBClient")
        self.delete_patch = patch("sync_retention.handlers.command.handle_delete")

        self.mock_config_class = self.config_patch.start()
        self.mock_client_class = self.client_patch.start()
        self.mock_handle_delete = self.delete_patch.start()

        self.config = AppConfig()
        self.mock_config_class.from_env.return_value = self.config
        self.mock_handle_delete.return_value = ExpiryResult(
            client_id="client1", expiry_timestamp=12345678, updated_count=3
        )

    def tearDown(self):
        """Tear down test fixtures."""
        self.config_patch.stop()
        self.client_patch.stop()
        self.delete_patch.stop()

    def test_delete_success(self):
        response = command_handler(
            {"command": "delete", "client_id": "client1", "expire_at": 12345678}, None
        )

        self.assertEqual(0, response["exitCode"])
        self.assertEqual("Successfully set ttl for 3 records", response["message"])
        self.mock_client_class.assert_called_once_with(self.config)
        _, kwargs = self.mock_handle_delete.call_args
        self.assertEqual("client1", kwargs["client_id"])
        self.assertEqual(12345678, kwargs["expire_at"])

    def test_unsupported_command(self):
        response = command_handler({"command": "purge", "client_id": "client1"}, None)

        self.assertEqual(2, response["exitCode"])
        self.assertIn("unsupported commands", response["message"])
        self.mock_handle_delete.assert_not_called()

    def test_session_failure(self):
        self.mock_client_class.side_effect = SessionError("Failed to initialize DynamoDB session")

        response = command_handler({"command": "delete", "client_id": "client1"}, None)

        self.assertEqual(1, response["exitCode"])
        self.assertEqual("SESSION_ERROR", response["error"]["code"])
        self.mock_handle_delete.assert_not_called()

    def test_query_failure(self):
        self.mock_handle_delete.side_effect = QueryError(client_id="client1")

        response = command_handler({"command": "delete", "client_id": "client1"}, None)

        self.assertEqual(1, response["exitCode"])
        self.assertEqual("QUERY_ERROR", response["error"]["code"])

    def test_update_failure(self):
        self.mock_handle_delete.side_effect = ExpiryScheduleError(
            client_id="client1",
            updated_count=2,
            failed_keys=[{"ClientID": "client1", "ID": "456"}],
        )

        response = command_handler({"command": "delete", "client_id": "client1"}, None)

        self.assertEqual(1, response["exitCode"])
        self.assertEqual("EXPIRY_SCHEDULE_FAILED", response["error"]["code"])
        self.assertEqual(2, response["error"]["details"]["updated_count"])

    def test_invalid_configuration(self):
        self.mock_config_class.from_env.side_effect = ValueError("Invalid app environment: qa")

        response = command_handler({"command": "delete", "client_id": "client1"}, None)

        self.assertEqual(2, response["exitCode"])
        self.assertIn("Invalid app environment", response["message"])

    def test_unexpected_error(self):
        self.mock_handle_delete.side_effect = RuntimeError("boom")

        response = command_handler({"command": "delete", "client_id": "client1"}, None)

        self.assertEqual(1, response["exitCode"])
        self.assertEqual("SYSTEM_INTERNAL_ERROR", response["error"]["code"])


class TestCli(unittest.TestCase):
    """Test cases for argument parsing and exit codes."""

    @patch("sync_retention.cli.command_handler")
    def test_delete_builds_event(self, mock_handler):
        mock_handler.return_value = {"exitCode": 0, "message": "ok"}

        exit_code = main(["delete", "client1", "--expire-at", "12345678", "--workers", "4"])

        self.assertEqual(0, exit_code)
        mock_handler.assert_called_once_with(
            {
                "command": "delete",
                "client_id": "client1",
                "ttl_seconds": None,
                "expire_at": 12345678,
                "workers": 4,
            },
            None,
        )

    @patch("sync_retention.cli.command_handler")
    def test_failure_exit_code(self, mock_handler):
        mock_handler.return_value = {"exitCode": 1, "message": "QUERY_ERROR: failed"}

        self.assertEqual(1, main(["delete", "client1"]))

    @patch("sync_retention.cli.command_handler")
    def test_no_command(self, mock_handler):
        self.assertEqual(2, main([]))
        mock_handler.assert_not_called()

    def test_missing_client_id(self):
        with self.assertRaises(SystemExit) as context:
            main(["delete"])

        self.assertNotEqual(0, context.exception.code)

    @patch("sync_retention.cli.command_handler")
    def test_non_positive_workers_rejected(self, mock_handler):
        for workers in ("0", "-1", "many"):
            with self.subTest(workers=workers):
                with self.assertRaises(SystemExit) as context:
                    main(["delete", "client1", "--workers", workers])

                self.assertEqual(2, context.exception.code)
        mock_handler.assert_not_called()

    def test_unknown_command(self):
        with self.assertRaises(SystemExit) as context:
            main(["purge", "client1"])

        self.assertNotEqual(0, context.exception.code)


if __name__ == "__main__":
    unittest.main()
