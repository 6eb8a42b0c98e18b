"""Command entry point shared by the CLI."""

from typing import Any, Dict

from aws_lambda_powertools.logging import Logger

from ..clients.dynamodb import DynamoDBClient
from ..config.app import AppConfig
from ..middleware.error_handler import error_handler_middleware
from ..middleware.exceptions import UsageError
from ..middleware.logging import logging_middleware
from .delete import handle_delete

logger = Logger()

SUPPORTED_COMMANDS = ("delete",)


@error_handler_middleware
@logging_middleware
def command_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Run one command.

    Args:
        event: Command and its arguments, e.g. ``{"command": "delete", "client_id": "abc"}``
        context: Optional invocation context, None when run from the command line

    Returns:
        Dictionary with ``exitCode`` and ``message``
    """
    command = event.get("command")
    if command not in SUPPORTED_COMMANDS:
        raise UsageError("unsupported commands", details={"command": command})

    app_config = AppConfig.from_env()
    logger.info(
        "Configuration loaded successfully.",
        extra={
            "app_env": app_config.app_env,
            "region": app_config.aws_region,
            "endpoint": app_config.aws_endpoint,
            "table": app_config.table_name,
        },
    )
    dynamodb_client = DynamoDBClient(app_config)

    result = handle_delete(
        client_id=event.get("client_id") or "",
        app_config=app_config,
        dynamodb_client=dynamodb_client,
        logger=logger,
        expire_at=event.get("expire_at"),
        ttl_seconds=event.get("ttl_seconds"),
        max_workers=event.get("workers"),
    )
    return {
        "exitCode": 0,
        "message": f"Successfully set ttl for {result.updated_count} records",
        "result": result.model_dump(),
    }
