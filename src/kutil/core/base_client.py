"""Base client interface for external service clients."""

from abc import ABC, abstractmethod
from typing import Optional
import structlog

logger = structlog.get_logger(__name__)


class BaseClient(ABC):
    """Abstract base class for external service clients."""

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__
        self._connected = False
        self.logger = logger.bind(client=self.name)

    @abstractmethod
    async def connect(self) -> None:
        """Establish connection to the external service."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close connection to the external service."""
        pass

    @property
    def is_connected(self) -> bool:
        """Check if client is connected."""
        return self._connected
