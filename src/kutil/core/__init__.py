from .exceptions import *
from .base_client import BaseClient
from .utils import *

__all__ = [
    "BaseClient",
    "KutilException",
    "ClientConnectionException",
    "InventoryException",
    "EmptyInventoryException",
    "AggregationException",
    "ConfigurationException",
    "calc_pct",
    "setup_logging",
]
