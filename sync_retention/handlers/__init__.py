# Reexport all handlers

from .delete import compute_expiry_timestamp, handle_delete

__all__ = [
    "compute_expiry_timestamp",
    "handle_delete",
]
