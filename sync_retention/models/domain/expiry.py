from typing import Dict, List

from pydantic import BaseModel, Field


class ExpiryResult(BaseModel):
    """Outcome of scheduling expiry for one partition."""

    client_id: str
    expiry_timestamp: int
    updated_count: int = 0
    failed_keys: List[Dict[str, str]] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failed_keys
