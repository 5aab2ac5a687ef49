from dcf_service.connectors.base import BaseConnector, ConnectorFactory
from dcf_service.connectors.mock import MockConnector

__all__ = ["BaseConnector", "ConnectorFactory", "MockConnector"]
