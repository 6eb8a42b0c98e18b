"""Service for scheduling expiry of a client's records."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List

from aws_lambda_powertools.logging import Logger

from ..clients.store import PartitionStore
from ..middleware.exceptions import ExpiryScheduleError, UpdateError
from ..models.domain import ExpiryResult, ItemKey

logger = Logger()

TTL_ATTRIBUTE = "TTL"


class RetentionService:
    """Marks every item of a partition for deferred deletion by the store's TTL reaper.

    Items are never deleted here. Each item is updated independently and
    updates that succeeded are kept even when others fail.
    """

    def __init__(self, store: PartitionStore, max_workers: int = 1) -> None:
        """Initialize retention service.

        Args:
            store: Store holding the client entity items
            max_workers: Number of concurrent item updates, 1 for sequential
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.store = store
        self.max_workers = max_workers

    def schedule_expiry(self, client_id: str, expiry_timestamp: int) -> ExpiryResult:
        """Set the TTL attribute of every item under a partition key.

        The full key set is collected before any update is issued, so a
        failed query leaves the partition untouched.

        Args:
            client_id: Partition key of the client whose data expires
            expiry_timestamp: Epoch seconds after which the items expire

        Returns:
            Result with the number of updated items

        Raises:
            QueryError: If the partition query fails, no item is updated
            ExpiryScheduleError: If one or more item updates failed
        """
        logger.info(
            "Scheduling expiry for client data",
            extra={"client_id": client_id, "expiry_timestamp": expiry_timestamp},
        )

        keys: List[ItemKey] = list(self.store.query_keys_by_partition(client_id))
        logger.info(
            "Collected partition keys",
            extra={"client_id": client_id, "key_count": len(keys)},
        )

        if self.max_workers > 1 and len(keys) > 1:
            failures = self._update_concurrently(keys, expiry_timestamp)
        else:
            failures = self._update_sequentially(keys, expiry_timestamp)

        result = ExpiryResult(
            client_id=client_id,
            expiry_timestamp=expiry_timestamp,
            updated_count=len(keys) - len(failures),
            failed_keys=[failure.key for failure in failures],
        )

        if failures:
            logger.error(
                "Failed to set ttl for some records",
                extra={
                    "client_id": client_id,
                    "updated_count": result.updated_count,
                    "failed_count": len(failures),
                },
            )
            raise ExpiryScheduleError(
                client_id=client_id,
                updated_count=result.updated_count,
                failed_keys=result.failed_keys,
                message=(
                    f"Failed to set ttl for {len(failures)} of {len(keys)} records "
                    f"of client {client_id}"
                ),
            )

        logger.info(
            "Successfully set ttl for records",
            extra={"client_id": client_id, "updated_count": result.updated_count},
        )
        return result

    def _update_one(self, key: ItemKey, expiry_timestamp: int) -> None:
        self.store.update_attribute(key, TTL_ATTRIBUTE, expiry_timestamp)

    def _update_sequentially(
        self, keys: List[ItemKey], expiry_timestamp: int
    ) -> List[UpdateError]:
        failures = []
        for key in keys:
            try:
                self._update_one(key, expiry_timestamp)
            except UpdateError as e:
                logger.warning(
                    "Failed to update ttl", extra={"key": e.key, "error": e.message}
                )
                failures.append(e)
        return failures

    def _update_concurrently(
        self, keys: List[ItemKey], expiry_timestamp: int
    ) -> List[UpdateError]:
        # Only this thread collects outcomes, workers share no state
        failures = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                executor.submit(self._update_one, key, expiry_timestamp) for key in keys
            ]
            for future in as_completed(futures):
                try:
                    future.result()
                except UpdateError as e:
                    logger.warning(
                        "Failed to update ttl", extra={"key": e.key, "error": e.message}
                    )
                    failures.append(e)
        return failures
