from abc import ABC, abstractmethod
from typing import Any, Dict, List, Type


class ListingNotFoundError(LookupError):
    """Raised by a connector when a listing id is unknown."""


class BaseConnector(ABC):
    """Abstract base class for listing-source connectors."""

    @abstractmethod
    def get_listing(self, listing_id: str) -> Dict[str, Any]:
        """
        Fetch one listing record by id.

        Returns the raw record with listing column names (``title``,
        ``industry``, ``price``, ``revenue``, ``cash_flow``, ``owner_hours`` ...),
        omitting empty cells. Raises ``ListingNotFoundError`` for unknown ids.
        """
        pass

    @abstractmethod
    def list_listings(self) -> List[Dict[str, Any]]:
        """All listing records, in source order."""
        pass


class ConnectorFactory:
    """Simple factory to manage listing connectors (Singleton Pattern)."""

    _connector_classes: Dict[str, Type[BaseConnector]] = {}
    _instances: Dict[str, BaseConnector] = {}

    @classmethod
    def register(cls, name: str, connector_cls: Type[BaseConnector]) -> None:
        cls._connector_classes[name] = connector_cls
        cls._instances.pop(name, None)

    @classmethod
    def get_connector(cls, name: str) -> BaseConnector:
        # Check cache first
        if name in cls._instances:
            return cls._instances[name]

        # Create new instance if registered
        connector_cls = cls._connector_classes.get(name)
        if not connector_cls:
            raise ValueError(f"Connector '{name}' not found.")

        instance = connector_cls()
        cls._instances[name] = instance
        return instance

    @classmethod
    def clear_instances(cls) -> None:
        """Drop cached instances so the next lookup re-reads settings."""
        cls._instances.clear()
