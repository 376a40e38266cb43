"""Orchestrates one utilization report run: connect, discover, aggregate."""

from typing import Dict, Any, Optional
import structlog

from kutil.aggregation.aggregator import ResourceAggregator
from kutil.clients.kubernetes.client_factory import KubernetesClientFactory
from kutil.clients.kubernetes.k8s_client import KubernetesClient
from kutil.discovery.inventory_discovery import InventoryDiscoveryService
from kutil.models.utilization_models import ClusterRecord

logger = structlog.get_logger(__name__)


class UtilizationReportOrchestrator:
    """
    Coordinates a single snapshot report.

    The Kubernetes client is created from the ``kubernetes`` config section
    unless one is passed in. Errors from discovery and aggregation are not
    caught here; the caller decides how the run ends.
    """

    def __init__(self, config: Dict[str, Any], k8s_client: Optional[KubernetesClient] = None):
        self.k8s_config = config.get("kubernetes", {})
        self.aggregation_config = config.get("aggregation", {})
        self.k8s_client = k8s_client
        self.logger = logger.bind(orchestrator="utilization_report")

    async def __aenter__(self):
        if self.k8s_client is None:
            self.k8s_client = KubernetesClientFactory(self.k8s_config).create_client()
        await self.k8s_client.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.k8s_client is not None and self.k8s_client.is_connected:
            await self.k8s_client.disconnect()

    async def run_report(self) -> ClusterRecord:
        """Fetch inventory and return the finished ClusterRecord."""
        inventory = await InventoryDiscoveryService(self.k8s_client).discover()

        aggregator = ResourceAggregator(
            legacy_node_memory_limit=self.aggregation_config.get("legacy_node_memory_limit", False)
        )
        aggregator.ingest_nodes(inventory.nodes)
        aggregator.ingest_pods(inventory.pods)
        cluster = aggregator.compute_utilization()

        self.logger.info(
            "Utilization report ready",
            nodes=len(cluster.nodes),
            namespaces=len(cluster.namespaces),
        )
        return cluster
