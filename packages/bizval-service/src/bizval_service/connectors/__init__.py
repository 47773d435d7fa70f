from bizval_service.connectors.base import BaseConnector, ConnectorFactory, ListingNotFoundError
from bizval_service.connectors.csv_listings import CsvListingConnector

__all__ = ["BaseConnector", "ConnectorFactory", "CsvListingConnector", "ListingNotFoundError"]
