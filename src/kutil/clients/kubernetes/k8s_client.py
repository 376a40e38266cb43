# src/kutil/clients/kubernetes/k8s_client.py
"""Kubernetes client for node and pod inventory."""

from typing import List, Optional
import urllib3
import yaml
import structlog
from kubernetes import client, config
from kubernetes.client.rest import ApiException

from kutil.core.base_client import BaseClient
from kutil.core.exceptions import ClientConnectionException, InventoryException
from kutil.mappers.inventory_mapper import InventoryMapper
from kutil.models.inventory_models import NodeInventory, PodInventory

logger = structlog.get_logger(__name__)

API_ERROR_MESSAGE = "There was a problem connecting with the API"


class KubernetesClient(BaseClient):
    """Kubernetes client listing every node and every pod in the cluster."""

    def __init__(self,
                 kubeconfig_path: Optional[str] = None,
                 context: Optional[str] = None,
                 kubeconfig_data: Optional[bytes] = None,
                 mapper: Optional[InventoryMapper] = None):
        super().__init__("KubernetesClient")
        self.kubeconfig_path = kubeconfig_path
        self.context = context
        self.kubeconfig_data = kubeconfig_data
        self.mapper = mapper or InventoryMapper()

        self.v1 = None

    def _load_configuration(self) -> client.Configuration:
        configuration = client.Configuration()
        if self.kubeconfig_data:
            kubeconfig_dict = yaml.safe_load(self.kubeconfig_data.decode('utf-8'))
            config.load_kube_config_from_dict(
                kubeconfig_dict, context=self.context, client_configuration=configuration
            )
            self.logger.info("Loaded kubeconfig from provided data")
        elif self.kubeconfig_path:
            config.load_kube_config(
                config_file=self.kubeconfig_path, context=self.context, client_configuration=configuration
            )
            self.logger.info(f"Loaded kubeconfig from {self.kubeconfig_path}")
        else:
            config.load_kube_config(context=self.context, client_configuration=configuration)
            self.logger.info("Loaded default kubeconfig")

        # Single-shot snapshot: a failed request ends the run
        configuration.retries = False
        return configuration

    async def connect(self) -> None:
        """Connect to Kubernetes cluster."""
        try:
            configuration = self._load_configuration()
        except Exception as e:
            raise ClientConnectionException("Kubernetes", f"Could not load kubeconfig: {e}")

        self.v1 = client.CoreV1Api(client.ApiClient(configuration))
        self._connected = True
        self.logger.info("Kubernetes client connected", context=self.context, host=configuration.host)

    async def disconnect(self) -> None:
        """Disconnect from Kubernetes cluster."""
        if self.v1 is not None:
            self.v1.api_client.close()
            self.v1 = None
        self._connected = False
        self.logger.info("Kubernetes client disconnected")

    def _require_connection(self, inventory_type: str) -> None:
        if not self._connected:
            raise InventoryException(inventory_type, "Client not connected")

    @staticmethod
    def _inventory_error(inventory_type: str, error: Exception) -> InventoryException:
        if isinstance(error, ApiException):
            details = {"status": error.status, "reason": error.reason}
        else:
            details = {"reason": str(error)}
        return InventoryException(inventory_type, API_ERROR_MESSAGE, details)

    async def list_nodes(self) -> List[NodeInventory]:
        """List all cluster nodes."""
        self._require_connection("nodes")
        try:
            node_list = self.v1.list_node()
        except (ApiException, urllib3.exceptions.HTTPError) as e:
            raise self._inventory_error("nodes", e)

        nodes = self.mapper.map_nodes(node_list.items or [])
        self.logger.info(f"Discovered {len(nodes)} nodes")
        return nodes

    async def list_pods(self) -> List[PodInventory]:
        """List pods across all namespaces."""
        self._require_connection("pods")
        try:
            pod_list = self.v1.list_pod_for_all_namespaces()
        except (ApiException, urllib3.exceptions.HTTPError) as e:
            raise self._inventory_error("pods", e)

        pods = self.mapper.map_pods(pod_list.items or [])
        self.logger.info(f"Discovered {len(pods)} pods")
        return pods
