"""Schedule TTL-based expiry of every record stored for a client."""

__version__ = "0.1.0"
