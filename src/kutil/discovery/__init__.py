from .inventory_discovery import InventoryDiscoveryService
from .orchestrator import UtilizationReportOrchestrator

__all__ = [
    "InventoryDiscoveryService",
    "UtilizationReportOrchestrator"
]
