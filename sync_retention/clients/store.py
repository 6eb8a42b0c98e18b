"""Store interface used by the retention service."""

from typing import Any, Iterator, Optional, Protocol

from ..models.domain import ItemKey, KeyPage


class PartitionStore(Protocol):
    """Interface for a partitioned key-value store keyed by (ClientID, ID)."""

    def query_page(
        self, client_id: str, exclusive_start_key: Optional[dict] = None
    ) -> KeyPage:
        """Fetch one page of keys for a partition.

        Args:
            client_id: Partition key to query.
            exclusive_start_key: Continuation token from the previous page.
        Returns:
            The page of keys and the token for the next page.
        Raises:
            QueryError: If the query fails.
        """
        ...

    def query_keys_by_partition(self, client_id: str) -> Iterator[ItemKey]:
        """Lazily yield every key of a partition, following all pages.

        Args:
            client_id: Partition key to query.
        Raises:
            QueryError: If any page fails.
        """
        ...

    def update_attribute(self, key: ItemKey, attribute_name: str, value: Any) -> None:
        """Set a single attribute on an existing item.

        Args:
            key: Key of the item to update.
            attribute_name: Name of the attribute to set.
            value: New attribute value.
        Raises:
            UpdateError: If the item does not exist or the write is rejected.
        """
        ...
