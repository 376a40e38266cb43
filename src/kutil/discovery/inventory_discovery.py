"""Node and pod inventory discovery service."""

from typing import Dict, Any
from datetime import datetime, timezone
import structlog

from kutil.clients.kubernetes.k8s_client import KubernetesClient
from kutil.core.exceptions import EmptyInventoryException
from kutil.models.inventory_models import ClusterInventory

logger = structlog.get_logger(__name__)


class InventoryDiscoveryService:
    """Reads the full node and pod lists for one observation instant."""

    def __init__(self, k8s_client: KubernetesClient):
        self.client = k8s_client
        self.logger = logger.bind(service=self.__class__.__name__)
        self._discovery_metadata = {
            'start_time': None,
            'end_time': None,
            'duration_seconds': None,
            'nodes_discovered': 0,
            'pods_discovered': 0,
        }

    async def discover(self) -> ClusterInventory:
        """Fetch both lists in full; an empty list aborts the run."""
        self.logger.info("Starting inventory discovery")
        self._discovery_metadata['start_time'] = datetime.now(timezone.utc)

        try:
            if not self.client.is_connected:
                await self.client.connect()

            nodes = await self.client.list_nodes()
            self._discovery_metadata['nodes_discovered'] = len(nodes)
            if not nodes:
                raise EmptyInventoryException("nodes")

            pods = await self.client.list_pods()
            self._discovery_metadata['pods_discovered'] = len(pods)
            if not pods:
                raise EmptyInventoryException("pods")

        finally:
            self._discovery_metadata['end_time'] = datetime.now(timezone.utc)
            duration = self._discovery_metadata['end_time'] - self._discovery_metadata['start_time']
            self._discovery_metadata['duration_seconds'] = duration.total_seconds()

        self.logger.info(
            "Inventory discovery completed",
            nodes=len(nodes),
            pods=len(pods),
            duration_seconds=self._discovery_metadata['duration_seconds'],
        )
        return ClusterInventory(nodes=nodes, pods=pods)

    def get_metadata(self) -> Dict[str, Any]:
        """Get discovery metadata."""
        return self._discovery_metadata.copy()
