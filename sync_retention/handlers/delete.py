"""Handler for the delete command.

Schedules every record of a client for deletion by setting its TTL,
leaving the removal itself to DynamoDB's TTL process.
"""

import time
from typing import Optional

from aws_lambda_powertools.logging import Logger

from ..clients.dynamodb import DynamoDBClient
from ..config.app import AppConfig
from ..middleware.exceptions import UsageError
from ..models.domain import ExpiryResult
from ..services.retention import RetentionService


def compute_expiry_timestamp(
    ttl_seconds: int, expire_at: Optional[int] = None, now: Optional[float] = None
) -> int:
    """Return the epoch second at which the records should expire.

    An explicit ``expire_at`` wins over ``ttl_seconds``.
    """
    if expire_at is not None:
        return int(expire_at)
    if now is None:
        now = time.time()
    return int(now) + ttl_seconds


def handle_delete(
    client_id: str,
    app_config: AppConfig,
    dynamodb_client: DynamoDBClient,
    logger: Logger,
    expire_at: Optional[int] = None,
    ttl_seconds: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> ExpiryResult:
    """Handle the delete command.

    Args:
        client_id: Client whose data should expire
        app_config: Application configuration
        dynamodb_client: DynamoDB client for the client entity table
        logger: Logger instance
        expire_at: Optional explicit expiry epoch timestamp
        ttl_seconds: Optional override of the configured TTL delay
        max_workers: Optional override of the configured update concurrency

    Returns:
        Result of the expiry scheduling

    Raises:
        UsageError: If the client id is missing
        QueryError: If the partition query fails
        ExpiryScheduleError: If some items could not be updated
    """
    if not client_id or not client_id.strip():
        raise UsageError("missing ClientID arg")

    expiry_timestamp = compute_expiry_timestamp(
        ttl_seconds if ttl_seconds is not None else app_config.ttl_seconds,
        expire_at=expire_at,
    )
    logger.info(
        "Deleting user data",
        extra={"client_id": client_id, "expiry_timestamp": expiry_timestamp},
    )

    service = RetentionService(
        dynamodb_client,
        max_workers=max_workers if max_workers is not None else app_config.max_workers,
    )
    return service.schedule_expiry(client_id, expiry_timestamp)
