"""Inventory mapping from Kubernetes API objects."""

from typing import Any, Dict, List, Optional
import structlog

from kutil.models.inventory_models import (
    ContainerSpec,
    ContainerStatus,
    NodeCondition,
    NodeInventory,
    PodInventory,
    Taint,
)

logger = structlog.get_logger(__name__)


class InventoryMapper:
    """Maps kubernetes client objects (V1Node, V1Pod) to inventory models."""

    def map_node(self, node: Any) -> NodeInventory:
        metadata = node.metadata
        spec = node.spec
        status = node.status

        return NodeInventory(
            name=metadata.name,
            labels=dict(metadata.labels or {}),
            taints=[
                Taint(key=taint.key, effect=taint.effect or "", value=taint.value)
                for taint in ((spec.taints if spec else None) or [])
            ],
            conditions=[
                NodeCondition(type=cond.type, status=cond.status)
                for cond in ((status.conditions if status else None) or [])
            ],
            allocatable=self._resource_list(status.allocatable if status else None),
            capacity=self._resource_list(status.capacity if status else None),
        )

    def map_pod(self, pod: Any) -> PodInventory:
        metadata = pod.metadata
        spec = pod.spec
        status = pod.status

        return PodInventory(
            name=metadata.name or "",
            namespace=metadata.namespace,
            node_name=spec.node_name if spec else None,
            container_statuses=[
                ContainerStatus(name=cs.name, ready=bool(cs.ready))
                for cs in ((status.container_statuses if status else None) or [])
            ],
            containers=[
                ContainerSpec(
                    name=container.name,
                    requests=self._resource_list(container.resources.requests if container.resources else None),
                    limits=self._resource_list(container.resources.limits if container.resources else None),
                )
                for container in ((spec.containers if spec else None) or [])
            ],
        )

    def map_nodes(self, nodes: List[Any]) -> List[NodeInventory]:
        return [self.map_node(node) for node in nodes]

    def map_pods(self, pods: List[Any]) -> List[PodInventory]:
        return [self.map_pod(pod) for pod in pods]

    @staticmethod
    def _resource_list(resources: Optional[Dict[str, Any]]) -> Dict[str, str]:
        return {name: str(value) for name, value in (resources or {}).items() if value is not None}
