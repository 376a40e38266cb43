"""
Inventory models
Point-in-time node and pod facts consumed by the resource aggregator
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any

from .quantity import Quantity, quantity_of


class Taint(BaseModel):
    """Node taint."""

    key: str
    effect: str = ""
    value: Optional[str] = None


class NodeCondition(BaseModel):
    """Node condition as reported by the kubelet."""

    type: str
    status: str = "Unknown"


class NodeInventory(BaseModel):
    """Node facts needed for utilization reporting."""

    name: str
    labels: Dict[str, str] = Field(default_factory=dict)
    taints: List[Taint] = Field(default_factory=list)
    conditions: List[NodeCondition] = Field(default_factory=list)
    allocatable: Dict[str, Any] = Field(default_factory=dict, description="Allocatable quantities (cpu, memory, pods)")
    capacity: Dict[str, Any] = Field(default_factory=dict, description="Capacity quantities (cpu, memory, pods)")

    def allocatable_quantity(self, resource: str) -> Quantity:
        return quantity_of(self.allocatable, resource)

    def capacity_quantity(self, resource: str) -> Quantity:
        return quantity_of(self.capacity, resource)


class ContainerStatus(BaseModel):
    """Latest reported status of a container."""

    name: str
    ready: bool = False


class ContainerSpec(BaseModel):
    """Declared container with its resource requests and limits."""

    name: str
    requests: Dict[str, Any] = Field(default_factory=dict)
    limits: Dict[str, Any] = Field(default_factory=dict)

    def request(self, resource: str) -> Quantity:
        return quantity_of(self.requests, resource)

    def limit(self, resource: str) -> Quantity:
        return quantity_of(self.limits, resource)


class PodInventory(BaseModel):
    """Pod facts needed for utilization reporting."""

    name: str = ""
    namespace: str
    node_name: Optional[str] = None
    container_statuses: List[ContainerStatus] = Field(default_factory=list)
    containers: List[ContainerSpec] = Field(default_factory=list)

    @property
    def ready_container_names(self) -> set:
        """Names of containers whose latest status reports ready."""
        return {status.name for status in self.container_statuses if status.ready}


class ClusterInventory(BaseModel):
    """Both inventory lists for one observation instant."""

    nodes: List[NodeInventory] = Field(default_factory=list)
    pods: List[PodInventory] = Field(default_factory=list)
