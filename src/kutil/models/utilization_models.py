"""
Utilization models
Node, namespace and cluster accumulators filled by the resource aggregator
"""

from pydantic import BaseModel, Field
from typing import Dict, Optional


class ResourceStat(BaseModel):
    """One measured resource dimension (CPU in millicores, memory in bytes)."""

    requested: int = Field(0, description="Sum of requests from ready containers")
    limit: int = Field(0, description="Sum of limits from ready containers")
    available: int = Field(0, description="Allocatable quantity open to scheduling")
    capacity: int = Field(0, description="Raw node-reported maximum")
    utilization: int = Field(0, description="Truncated percentage of requested over available")


class CountStat(BaseModel):
    """Pod slot counts."""

    in_use: int = Field(0, description="Pods with at least one ready container")
    available: int = 0
    capacity: int = 0
    utilization: int = 0


class NodeRecord(BaseModel):
    """Per-node accumulator."""

    name: str
    role: str = ""
    taints: str = ""
    schedulable: Optional[bool] = Field(None, description="None until the node itself has been seen")
    status: str = ""
    cpu: ResourceStat = Field(default_factory=ResourceStat)
    memory: ResourceStat = Field(default_factory=ResourceStat)
    pods: CountStat = Field(default_factory=CountStat)


class NamespaceRecord(BaseModel):
    """Per-namespace accumulator."""

    name: str
    cpu: ResourceStat = Field(default_factory=ResourceStat)
    memory: ResourceStat = Field(default_factory=ResourceStat)
    pods: CountStat = Field(default_factory=CountStat)


class ClusterRecord(BaseModel):
    """Cluster-wide accumulator plus the per-node and per-namespace records."""

    namespaces: Dict[str, NamespaceRecord] = Field(default_factory=dict)
    nodes: Dict[str, NodeRecord] = Field(default_factory=dict)
    cpu: ResourceStat = Field(default_factory=ResourceStat)
    memory: ResourceStat = Field(default_factory=ResourceStat)
    pods: CountStat = Field(default_factory=CountStat)
