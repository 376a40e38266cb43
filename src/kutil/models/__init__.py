from .quantity import *
from .inventory_models import *
from .utilization_models import *

__all__ = [
    "Quantity",
    "ParsedQuantity",
    "quantity_of",
    "Taint",
    "NodeCondition",
    "NodeInventory",
    "ContainerStatus",
    "ContainerSpec",
    "PodInventory",
    "ClusterInventory",
    "ResourceStat",
    "CountStat",
    "NodeRecord",
    "NamespaceRecord",
    "ClusterRecord",
]
