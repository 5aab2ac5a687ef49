from abc import ABC, abstractmethod
from typing import Dict, Type

from dcf_service.api.schemas import DCFAPIResponse


class BaseConnector(ABC):
    """Abstract base class for company data connectors."""

    @abstractmethod
    def get_dcf_inputs(self, ticker: str) -> DCFAPIResponse:
        """
        Fetch the assumption set and company metadata for a ticker.

        Implementations raise ``ValueError`` for tickers they cannot serve.
        """
        pass


class ConnectorFactory:
    """Simple factory to manage data connectors (Singleton Pattern)."""

    _connector_classes: Dict[str, Type[BaseConnector]] = {}
    _instances: Dict[str, BaseConnector] = {}

    @classmethod
    def register(cls, name: str, connector_cls: Type[BaseConnector]) -> None:
        cls._connector_classes[name] = connector_cls

    @classmethod
    def get_connector(cls, name: str) -> BaseConnector:
        if name in cls._instances:
            return cls._instances[name]

        connector_cls = cls._connector_classes.get(name)
        if not connector_cls:
            raise ValueError(f"Connector '{name}' not found.")

        instance = connector_cls()
        cls._instances[name] = instance
        return instance
