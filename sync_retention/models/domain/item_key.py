"""Key projection of a client entity item."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

CLIENT_ID_KEY = "ClientID"
ID_KEY = "ID"


class ItemKey(BaseModel):
    """Composite primary key of an item: partition key plus sort key."""

    model_config = ConfigDict(frozen=True)

    client_id: str = Field(..., description="Partition key (client identifier)")
    id: str = Field(..., description="Sort key within the partition")

    def to_key(self) -> Dict[str, str]:
        """Return the key in DynamoDB item format."""
        return {CLIENT_ID_KEY: self.client_id, ID_KEY: self.id}

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "ItemKey":
        return cls(client_id=item[CLIENT_ID_KEY], id=item[ID_KEY])


class KeyPage(BaseModel):
    """One page of a partition query.

    Attributes:
        keys: Keys returned on this page
        last_evaluated_key: Continuation token for the next page, None on the last page
    """

    keys: List[ItemKey] = Field(default_factory=list)
    last_evaluated_key: Optional[Dict[str, Any]] = None

    @property
    def has_more(self) -> bool:
        return self.last_evaluated_key is not None
