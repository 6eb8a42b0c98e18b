"""Storage models for the sync retention tool."""

from .client_entity_record import ClientEntityRecord

__all__ = [
    "ClientEntityRecord",
]
