"""CSV-backed listing and amenity repository."""

from __future__ import annotations

from typing import Dict, List, Optional

import pandas as pd

from ..config import DATA_DIR
from ..utils.io import load_csv
from ..utils.logging import get_logger
from .mappers import map_amenity_row, map_listing_row

LOGGER = get_logger("db.csv_repo")

LISTINGS_CSV = "listings.csv"
AMENITIES_CSV = "amenities.csv"


class CSVRepository:
    def __init__(self, data_dir: str = DATA_DIR) -> None:
        self._listings = load_csv(LISTINGS_CSV, data_dir)
        try:
            self._amenities = load_csv(AMENITIES_CSV, data_dir)
        except FileNotFoundError:
            LOGGER.warning("amenities_csv_missing data_dir=%s", data_dir)
            self._amenities = pd.DataFrame(columns=["listing_id", "category", "distance_miles"])
        self._listing_lookup = self._build_listing_lookup()

    def list_listings(self, city: Optional[str] = None, limit: Optional[int] = 50) -> List[Dict]:
        records = list(self._listing_lookup.values())
        if city:
            key = city.strip().lower()
            records = [row for row in records if row["city"].lower() == key]
        records.sort(key=lambda row: row["price"] or 0, reverse=True)
        if limit is not None:
            records = records[:limit]
        return records

    def get_listing(self, listing_id: str) -> Optional[Dict]:
        record = self._listing_lookup.get(str(listing_id))
        return dict(record) if record else None

    def get_amenities(self, listing_id: str) -> List[Dict]:
        df = self._amenities
        if df.empty:
            return []
        subset = df[df["listing_id"].astype(str) == str(listing_id)]
        subset = subset.astype(object).where(pd.notnull(subset), None)
        return [map_amenity_row(row) for row in subset.to_dict("records")]

    def _build_listing_lookup(self) -> Dict[str, Dict]:
        df = self._listings.astype(object).where(pd.notnull(self._listings), None)
        lookup: Dict[str, Dict] = {}
        for row in df.to_dict("records"):
            mapped = map_listing_row(row)
            if mapped["id"]:
                lookup[mapped["id"]] = mapped
        LOGGER.debug("listings_loaded count=%d", len(lookup))
        return lookup
