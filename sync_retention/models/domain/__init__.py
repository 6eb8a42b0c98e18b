"""Domain models for the sync retention tool."""

from .expiry import ExpiryResult
from .item_key import ItemKey, KeyPage

__all__ = [
    "ItemKey",
    "KeyPage",
    "ExpiryResult",
]
