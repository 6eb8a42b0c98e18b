"""Storage model for client entity records."""

from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ClientEntityRecord(BaseModel):
    """DynamoDB record of a client entity.

    Payload attributes other than the key and TTL are kept as extra fields.

    Attributes:
        client_id: Partition key
        id: Sort key
        ttl: Optional TTL timestamp, absent when no expiry is scheduled
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    client_id: str = Field(..., alias="ClientID", description="Partition key")
    id: str = Field(..., alias="ID", description="Sort key")
    ttl: Optional[int] = Field(None, alias="TTL", description="TTL timestamp")

    @field_validator("ttl", mode="before")
    @classmethod
    def _ttl_from_decimal(cls, value: Any) -> Any:
        # boto3 deserializes numbers as Decimal
        if isinstance(value, Decimal):
            return int(value)
        return value

    def to_dynamo(self) -> Dict[str, Any]:
        """Convert record to DynamoDB item format.

        Returns:
            Dictionary in DynamoDB item format, without TTL when unset
        """
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "ClientEntityRecord":
        return cls.model_validate(item)

    @property
    def sort_key(self) -> str:
        return self.client_id + self.id
