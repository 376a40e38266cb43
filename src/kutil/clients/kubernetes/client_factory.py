# src/kutil/clients/kubernetes/client_factory.py
"""Kubernetes client factory."""

from pathlib import Path
from typing import Dict, Any, Optional
import structlog

from kutil.core.exceptions import ConfigurationException
from .k8s_client import KubernetesClient

logger = structlog.get_logger(__name__)


class KubernetesClientFactory:
    """Factory for creating Kubernetes clients."""

    def __init__(self, config: Dict[str, Any]):
        self.kubeconfig_path = config.get("kubeconfig_path")
        self.context = config.get("context")

        self.logger = logger.bind(factory="kubernetes")

    def create_client(self, kubeconfig_data: Optional[bytes] = None) -> KubernetesClient:
        """Create Kubernetes client."""
        if self.kubeconfig_path and not kubeconfig_data and not Path(self.kubeconfig_path).expanduser().is_file():
            raise ConfigurationException(
                f"Could not access kubeconfig file {self.kubeconfig_path}",
                {"kubeconfig_path": self.kubeconfig_path}
            )

        self.logger.debug("Creating Kubernetes client", kubeconfig_path=self.kubeconfig_path, context=self.context)
        return KubernetesClient(
            kubeconfig_path=str(Path(self.kubeconfig_path).expanduser()) if self.kubeconfig_path else None,
            context=self.context,
            kubeconfig_data=kubeconfig_data
        )
