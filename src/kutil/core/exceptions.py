"""Custom exceptions for kutil."""

from typing import Optional, Dict, Any


class KutilException(Exception):
    """Base exception for kutil."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ClientConnectionException(KutilException):
    """Raised when client connections fail."""

    def __init__(self, client_type: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.client_type = client_type
        super().__init__(f"{client_type} connection failed: {message}", details)


class InventoryException(KutilException):
    """Raised when node or pod inventory cannot be retrieved."""

    def __init__(self, inventory_type: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.inventory_type = inventory_type
        super().__init__(message, details)


class EmptyInventoryException(InventoryException):
    """Raised when the cluster returns no nodes or no pods."""

    def __init__(self, inventory_type: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(inventory_type, f"No {inventory_type} discovered", details)


class AggregationException(KutilException):
    """Raised when the aggregator is driven out of order."""
    pass


class ConfigurationException(KutilException):
    """Raised when configuration is invalid."""
    pass
