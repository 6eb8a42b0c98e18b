"""Client wrapper for DynamoDB operations."""

import json
from importlib import resources
from typing import Any, Dict, Iterable, Iterator, List, Optional

import boto3
from aws_lambda_powertools.logging import Logger
from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from ..config.app import AppConfig
from ..middleware.exceptions import (
    QueryError,
    SessionError,
    TableOperationError,
    UpdateError,
)
from ..models.domain import ItemKey, KeyPage
from ..models.domain.item_key import CLIENT_ID_KEY, ID_KEY
from ..models.storage import ClientEntityRecord

logger = Logger()


def load_table_schema() -> Dict[str, Any]:
    """Load the packaged CreateTable request body, without a table name."""
    raw = resources.files("sync_retention.schema").joinpath("table.json").read_text()
    return json.loads(raw)


class DynamoDBClient:
    """Client wrapper for DynamoDB operations on the client entity table."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize DynamoDB client.

        Args:
            config: Application configuration

        Raises:
            SessionError: If the session or resource cannot be created
        """
        self.config = config
        self.table_name = config.table_name
        try:
            session = boto3.session.Session(region_name=config.aws_region)
            self.dynamodb = session.resource(
                "dynamodb", endpoint_url=config.aws_endpoint
            )
            self.table = self.dynamodb.Table(config.table_name)  # type: ignore
        except (BotoCoreError, ClientError, ValueError) as e:
            raise SessionError(
                f"Failed to initialize DynamoDB session: {e}",
                details={
                    "region": config.aws_region,
                    "endpoint": config.aws_endpoint,
                    "error": str(e),
                },
            )

    def query_page(
        self, client_id: str, exclusive_start_key: Optional[Dict[str, Any]] = None
    ) -> KeyPage:
        """Fetch one page of item keys for a partition.

        Only the key attributes are projected, no payload is transferred.

        Args:
            client_id: Partition key to query
            exclusive_start_key: Continuation token returned by the previous page

        Returns:
            Page of keys and the continuation token for the next page

        Raises:
            QueryError: If the query operation fails
        """
        query_params: Dict[str, Any] = {
            "KeyConditionExpression": Key(CLIENT_ID_KEY).eq(client_id),
            "ProjectionExpression": "#pk, #sk",
            "ExpressionAttributeNames": {"#pk": CLIENT_ID_KEY, "#sk": ID_KEY},
        }
        if self.config.query_page_size:
            query_params["Limit"] = self.config.query_page_size
        if exclusive_start_key:
            query_params["ExclusiveStartKey"] = exclusive_start_key

        try:
            response = self.table.query(**query_params)
        except (BotoCoreError, ClientError) as e:
            raise QueryError(
                client_id=client_id,
                message=f"Failed to query items from DynamoDB: {e}",
                details={"error": str(e), "exclusive_start_key": exclusive_start_key},
            )

        return KeyPage(
            keys=[ItemKey.from_item(item) for item in response.get("Items", [])],
            last_evaluated_key=response.get("LastEvaluatedKey"),
        )

    def query_keys_by_partition(self, client_id: str) -> Iterator[ItemKey]:
        """Yield the keys of every item in a partition.

        Pages are requested sequentially, the next one only after the
        current one is consumed. A failing page raises out of the iterator.

        Args:
            client_id: Partition key to query

        Yields:
            Keys of the partition in store order

        Raises:
            QueryError: If any page of the query fails
        """
        last_evaluated_key = None
        pages = 0
        while True:
            page = self.query_page(client_id, last_evaluated_key)
            pages += 1
            logger.debug(
                "Fetched query page",
                extra={"client_id": client_id, "page": pages, "keys": len(page.keys)},
            )
            yield from page.keys

            if not page.has_more:
                break
            last_evaluated_key = page.last_evaluated_key

    def update_attribute(self, key: ItemKey, attribute_name: str, value: Any) -> None:
        """Set a single attribute of an existing item.

        Args:
            key: Key of the item to update
            attribute_name: Attribute to set
            value: Value to store

        Raises:
            UpdateError: If the item does not exist or the update is rejected
        """
        # Fixed placeholders: attribute names may be reserved words (TTL)
        # or contain characters not allowed in expression tokens
        try:
            self.table.update_item(
                Key=key.to_key(),
                UpdateExpression="SET #attr = :val",
                ExpressionAttributeNames={
                    "#attr": attribute_name,
                    "#pk": CLIENT_ID_KEY,
                    "#sk": ID_KEY,
                },
                ExpressionAttributeValues={":val": value},
                ConditionExpression="attribute_exists(#pk) AND attribute_exists(#sk)",
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code == "ConditionalCheckFailedException":
                raise UpdateError(
                    key=key.to_key(),
                    message=f"Item with ClientID={key.client_id} and ID={key.id} not found",
                    code="ITEM_NOT_FOUND",
                )
            raise UpdateError(
                key=key.to_key(),
                message=f"Failed to update item in DynamoDB: {e}",
                details={"error": str(e)},
            )
        except BotoCoreError as e:
            raise UpdateError(
                key=key.to_key(),
                message=f"Failed to update item in DynamoDB: {e}",
                details={"error": str(e)},
            )

    def create_table(self, schema: Optional[Dict[str, Any]] = None) -> None:
        """Create the configured table and wait until it exists.

        Args:
            schema: CreateTable parameters, defaults to the packaged schema

        Raises:
            TableOperationError: If the table cannot be created
        """
        params = dict(schema or load_table_schema())
        params["TableName"] = self.table_name
        try:
            self.dynamodb.meta.client.create_table(**params)
            self.dynamodb.meta.client.get_waiter("table_exists").wait(
                TableName=self.table_name
            )
        except (BotoCoreError, ClientError) as e:
            raise TableOperationError(
                f"Failed to create table {self.table_name}",
                details={"error": str(e)},
            )
        logger.info("Created table", extra={"table": self.table_name})

    def delete_table(self) -> None:
        """Delete the configured table and wait until it is gone.

        A table that does not exist counts as deleted.

        Raises:
            TableOperationError: If the table cannot be deleted
        """
        try:
            self.dynamodb.meta.client.delete_table(TableName=self.table_name)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code == "ResourceNotFoundException":
                return
            raise TableOperationError(
                f"Failed to delete table {self.table_name}",
                details={"error": str(e)},
            )
        except BotoCoreError as e:
            raise TableOperationError(
                f"Failed to delete table {self.table_name}",
                details={"error": str(e)},
            )

        try:
            self.dynamodb.meta.client.get_waiter("table_not_exists").wait(
                TableName=self.table_name
            )
        except (BotoCoreError, ClientError) as e:
            raise TableOperationError(
                f"Timed out waiting for table {self.table_name} deletion",
                details={"error": str(e)},
            )
        logger.info("Deleted table", extra={"table": self.table_name})

    def reset_table(self) -> None:
        """Drop and recreate the configured table."""
        self.delete_table()
        self.create_table()

    def scan_table(self) -> List[ClientEntityRecord]:
        """Read every item of the table.

        Returns:
            Records sorted by ClientID followed by ID

        Raises:
            TableOperationError: If the scan fails
        """
        try:
            items = []
            scan_params: Dict[str, Any] = {}
            while True:
                response = self.table.scan(**scan_params)
                items.extend(response.get("Items", []))

                last_evaluated_key = response.get("LastEvaluatedKey")
                if not last_evaluated_key:
                    break
                scan_params["ExclusiveStartKey"] = last_evaluated_key
        except (BotoCoreError, ClientError) as e:
            raise TableOperationError(
                f"Failed to scan table {self.table_name}",
                details={"error": str(e)},
            )

        records = [ClientEntityRecord.from_item(item) for item in items]
        return sorted(records, key=lambda record: record.sort_key)

    def put_items(self, records: Iterable[ClientEntityRecord]) -> None:
        """Write records with the table batch writer.

        Args:
            records: Records to put

        Raises:
            TableOperationError: If the batch put fails
        """
        try:
            with self.table.batch_writer() as batch:
                for record in records:
                    batch.put_item(Item=record.to_dynamo())
        except (BotoCoreError, ClientError) as e:
            raise TableOperationError(
                "Failed to perform batch put operation",
                details={"error": str(e)},
            )
