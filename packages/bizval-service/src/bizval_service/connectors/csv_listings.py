import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from bizval_service.config import get_settings

from .base import BaseConnector, ConnectorFactory, ListingNotFoundError

logger = logging.getLogger(__name__)

# Columns that may carry the listing id, checked in order.
ID_COLUMNS = ("id", "listing_id", "source_id")


class CsvListingConnector(BaseConnector):
    """
    Listings loaded from a broker-export CSV.

    Headers are lowercased and trimmed; every cell is kept as text so the
    engine's input builder can parse currency strings like ``"$1,250,000"``.
    Rows are keyed by the first id column present, else by 1-based row number.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._frame: Optional[pd.DataFrame] = None

    def _resolve_path(self) -> str:
        path = self.path or get_settings().listings_csv
        if not path:
            raise ValueError("No listings CSV configured. Set BIZVAL_LISTINGS_CSV.")
        return path

    def _load(self) -> pd.DataFrame:
        if self._frame is not None:
            return self._frame

        path = self._resolve_path()
        try:
            frame = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
        except FileNotFoundError:
            raise ValueError(f"Listings CSV not found: {path}")

        frame.columns = [str(col).strip().lower() for col in frame.columns]
        frame = frame.apply(lambda col: col.str.strip())

        id_column = next((col for col in ID_COLUMNS if col in frame.columns), None)
        if id_column is None:
            frame.index = [str(i) for i in range(1, len(frame) + 1)]
        else:
            frame.index = frame[id_column]

        logger.info(f"Loaded {len(frame)} listings from {path}")
        self._frame = frame
        return frame

    @staticmethod
    def _row_to_record(row: pd.Series) -> Dict[str, Any]:
        return {col: value for col, value in row.items() if value != ""}

    def get_listing(self, listing_id: str) -> Dict[str, Any]:
        frame = self._load()
        if listing_id not in frame.index:
            raise ListingNotFoundError(f"Listing '{listing_id}' not found")
        row = frame.loc[listing_id]
        if isinstance(row, pd.DataFrame):
            # Duplicate ids: first row wins
            row = row.iloc[0]
        record = self._row_to_record(row)
        record.setdefault("id", listing_id)
        return record

    def list_listings(self) -> List[Dict[str, Any]]:
        frame = self._load()
        records = []
        for listing_id, row in frame.iterrows():
            record = self._row_to_record(row)
            record.setdefault("id", listing_id)
            records.append(record)
        return records


# Register the connector
ConnectorFactory.register("csv", CsvListingConnector)
