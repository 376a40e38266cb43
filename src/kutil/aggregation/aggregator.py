"""Resource aggregation engine.

Turns one node/pod inventory snapshot into per-node, per-namespace and
cluster-wide utilization. A ``ResourceAggregator`` is used exactly once:
``ingest_nodes``, then ``ingest_pods``, then ``compute_utilization``.
"""

from enum import Enum
from typing import NamedTuple, Optional, Sequence
import structlog

from kutil.aggregation.merge import merge_namespace, merge_node
from kutil.aggregation.node_facts import (
    derive_ready_conditions,
    derive_role,
    derive_taints,
    is_schedulable,
)
from kutil.core.exceptions import AggregationException, EmptyInventoryException
from kutil.core.utils import calc_pct
from kutil.models.inventory_models import NodeInventory, PodInventory
from kutil.models.utilization_models import (
    ClusterRecord,
    CountStat,
    NamespaceRecord,
    NodeRecord,
    ResourceStat,
)

logger = structlog.get_logger(__name__)


class AggregationStage(str, Enum):
    NEW = "new"
    NODES_INGESTED = "nodes_ingested"
    PODS_INGESTED = "pods_ingested"
    DERIVED = "derived"


class PodUsage(NamedTuple):
    """Requests and limits summed over the ready containers of one pod."""

    cpu_request: int
    cpu_limit: int
    memory_request: int
    memory_limit: int
    active: bool


class ResourceAggregator:
    """Accumulates one inventory snapshot into a ClusterRecord."""

    def __init__(self, legacy_node_memory_limit: bool = False):
        self.legacy_node_memory_limit = legacy_node_memory_limit
        self._cluster = ClusterRecord()
        self._stage = AggregationStage.NEW
        self.logger = logger.bind(component="aggregator")

    @property
    def cluster(self) -> ClusterRecord:
        return self._cluster

    @property
    def stage(self) -> AggregationStage:
        return self._stage

    def _require_stage(self, expected: AggregationStage, operation: str) -> None:
        if self._stage != expected:
            raise AggregationException(
                f"Cannot {operation} at stage '{self._stage.value}', expected '{expected.value}'",
                {"stage": self._stage.value, "expected": expected.value},
            )

    def ingest_nodes(self, nodes: Sequence[NodeInventory]) -> None:
        """Seed node records and the cluster capacity/available pools."""
        self._require_stage(AggregationStage.NEW, "ingest nodes")
        if not nodes:
            raise EmptyInventoryException("nodes")

        cluster = self._cluster
        for node in nodes:
            record = self._node_record(node)
            cluster.nodes[node.name] = merge_node(cluster.nodes.get(node.name), record)

            cluster.cpu.capacity += record.cpu.capacity
            cluster.memory.capacity += record.memory.capacity
            cluster.pods.capacity += record.pods.capacity

            # Unschedulable capacity is counted but cannot take new workloads
            if record.schedulable:
                cluster.cpu.available += record.cpu.available
                cluster.memory.available += record.memory.available
                cluster.pods.available += record.pods.available
            else:
                self.logger.debug("Node excluded from available pool", node=node.name, taints=record.taints)

        self._stage = AggregationStage.NODES_INGESTED
        self.logger.info(
            "Ingested nodes",
            nodes=len(cluster.nodes),
            cpu_available=cluster.cpu.available,
            memory_available=cluster.memory.available,
            pods_available=cluster.pods.available,
        )

    @staticmethod
    def _node_record(node: NodeInventory) -> NodeRecord:
        return NodeRecord(
            name=node.name,
            role=derive_role(node.labels),
            taints=derive_taints(node.taints),
            schedulable=is_schedulable(node.taints),
            status=derive_ready_conditions(node.conditions),
            cpu=ResourceStat(
                available=node.allocatable_quantity("cpu").milli_value(),
                capacity=node.capacity_quantity("cpu").milli_value(),
            ),
            memory=ResourceStat(
                available=node.allocatable_quantity("memory").value(),
                capacity=node.capacity_quantity("memory").value(),
            ),
            pods=CountStat(
                available=node.allocatable_quantity("pods").value(),
                capacity=node.capacity_quantity("pods").value(),
            ),
        )

    @staticmethod
    def pod_usage(pod: PodInventory) -> PodUsage:
        """Sum requests and limits of the pod's ready containers only."""
        active = pod.ready_container_names
        cpu_request = cpu_limit = memory_request = memory_limit = 0
        for container in pod.containers:
            if container.name not in active:
                continue
            cpu_request += container.request("cpu").milli_value()
            cpu_limit += container.limit("cpu").milli_value()
            memory_request += container.request("memory").value()
            memory_limit += container.limit("memory").value()
        return PodUsage(cpu_request, cpu_limit, memory_request, memory_limit, bool(active))

    def ingest_pods(self, pods: Sequence[PodInventory]) -> None:
        """Accumulate ready-container requests/limits into namespaces, nodes and the cluster."""
        self._require_stage(AggregationStage.NODES_INGESTED, "ingest pods")
        if not pods:
            raise EmptyInventoryException("pods")

        for pod in pods:
            self._ingest_pod(pod)

        self._stage = AggregationStage.PODS_INGESTED
        self.logger.info(
            "Ingested pods",
            pods=len(pods),
            pods_in_use=self._cluster.pods.in_use,
            namespaces=len(self._cluster.namespaces),
        )

    def _ingest_pod(self, pod: PodInventory) -> None:
        cluster = self._cluster
        usage = self.pod_usage(pod)
        pod_count = 1 if usage.active else 0

        ns_delta = NamespaceRecord(
            name=pod.namespace,
            cpu=ResourceStat(requested=usage.cpu_request, limit=usage.cpu_limit),
            memory=ResourceStat(requested=usage.memory_request, limit=usage.memory_limit),
            pods=CountStat(in_use=pod_count),
        )
        cluster.namespaces[pod.namespace] = merge_namespace(cluster.namespaces.get(pod.namespace), ns_delta)

        cluster.cpu.requested += usage.cpu_request
        cluster.cpu.limit += usage.cpu_limit
        cluster.memory.requested += usage.memory_request
        cluster.memory.limit += usage.memory_limit
        cluster.pods.in_use += pod_count

        if not pod.node_name:
            # Unscheduled pods have no owning node
            self.logger.debug("Pod has no node assignment", pod=pod.name, namespace=pod.namespace)
            return

        node = self._merge_pod_into_node(pod.node_name, usage, pod_count)

        # Pods already running on a tainted node still occupy cluster resources
        if node.schedulable is False:
            cluster.cpu.available += usage.cpu_request
            cluster.memory.available += usage.memory_request
            cluster.pods.available += pod_count

    def _merge_pod_into_node(self, node_name: str, usage: PodUsage, pod_count: int) -> NodeRecord:
        if self.legacy_node_memory_limit:
            memory = ResourceStat(requested=usage.memory_request + usage.memory_limit)
        else:
            memory = ResourceStat(requested=usage.memory_request, limit=usage.memory_limit)

        delta = NodeRecord(
            name=node_name,
            cpu=ResourceStat(requested=usage.cpu_request, limit=usage.cpu_limit),
            memory=memory,
            pods=CountStat(in_use=pod_count),
        )

        existing: Optional[NodeRecord] = self._cluster.nodes.get(node_name)
        if existing is None:
            self.logger.warning("Pod references a node missing from node inventory", node=node_name)

        merged = merge_node(existing, delta)
        self._cluster.nodes[node_name] = merged
        return merged

    def compute_utilization(self) -> ClusterRecord:
        """Derive utilization at every level and return the finished record.

        Namespaces share the cluster's available pool as denominator,
        nodes use their own.
        """
        self._require_stage(AggregationStage.PODS_INGESTED, "compute utilization")
        cluster = self._cluster

        for name, namespace in cluster.namespaces.items():
            cluster.namespaces[name] = merge_namespace(namespace, NamespaceRecord(
                name=name,
                cpu=ResourceStat(utilization=calc_pct(cluster.cpu.available, namespace.cpu.requested)),
                memory=ResourceStat(utilization=calc_pct(cluster.memory.available, namespace.memory.requested)),
                pods=CountStat(utilization=calc_pct(cluster.pods.available, namespace.pods.in_use)),
            ))

        for name, node in cluster.nodes.items():
            cluster.nodes[name] = merge_node(node, NodeRecord(
                name=name,
                cpu=ResourceStat(utilization=calc_pct(node.cpu.available, node.cpu.requested)),
                memory=ResourceStat(utilization=calc_pct(node.memory.available, node.memory.requested)),
                pods=CountStat(utilization=calc_pct(node.pods.available, node.pods.in_use)),
            ))

        cluster.cpu.utilization = calc_pct(cluster.cpu.available, cluster.cpu.requested)
        cluster.memory.utilization = calc_pct(cluster.memory.available, cluster.memory.requested)
        cluster.pods.utilization = calc_pct(cluster.pods.available, cluster.pods.in_use)

        self._stage = AggregationStage.DERIVED
        self.logger.info(
            "Computed utilization",
            cpu_utilization=cluster.cpu.utilization,
            memory_utilization=cluster.memory.utilization,
            pods_utilization=cluster.pods.utilization,
        )
        return cluster.model_copy(deep=True)


def aggregate(
    nodes: Sequence[NodeInventory],
    pods: Sequence[PodInventory],
    legacy_node_memory_limit: bool = False,
) -> ClusterRecord:
    """Run the node pass, the pod pass and the derivation pass in order."""
    aggregator = ResourceAggregator(legacy_node_memory_limit=legacy_node_memory_limit)
    aggregator.ingest_nodes(nodes)
    aggregator.ingest_pods(pods)
    return aggregator.compute_utilization()
