"""Repository abstraction over the listing data sources."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Protocol

from ..config import DATA_DIR
from ..utils.logging import get_logger
from .csv_repo import CSVRepository
from .mappers import map_amenity_row, map_listing_row

LOGGER = get_logger("db.repo")


class ListingSource(Protocol):
    def get_listing(self, listing_id: str) -> Optional[Dict]: ...

    def get_amenities(self, listing_id: str) -> List[Dict]: ...


class InMemoryRepository:
    """Listing source over plain records, used for fixtures and embedding."""

    def __init__(self, listings: Iterable[Dict], amenities: Iterable[Dict] = ()) -> None:
        self._listings = {row["id"]: row for row in (map_listing_row(r) for r in listings)}
        self._amenities: Dict[str, List[Dict]] = {}
        for raw in amenities:
            row = map_amenity_row(raw)
            self._amenities.setdefault(row["listing_id"], []).append(row)

    def list_listings(self, city: Optional[str] = None, limit: Optional[int] = 50) -> List[Dict]:
        rows = [dict(r) for r in self._listings.values() if not city or r["city"].lower() == city.lower()]
        return rows[:limit] if limit is not None else rows

    def get_listing(self, listing_id: str) -> Optional[Dict]:
        row = self._listings.get(str(listing_id))
        return dict(row) if row else None

    def get_amenities(self, listing_id: str) -> List[Dict]:
        return [dict(r) for r in self._amenities.get(str(listing_id), [])]


class Repo:
    def __init__(self, data_dir: str = DATA_DIR) -> None:
        self._csv_repo = CSVRepository(data_dir)
        LOGGER.info("Repository running in CSV mode data_dir=%s", data_dir)

    def list_listings(self, city: Optional[str] = None, limit: Optional[int] = 50) -> List[Dict]:
        return self._csv_repo.list_listings(city=city, limit=limit)

    def get_listing(self, listing_id: str) -> Optional[Dict]:
        return self._csv_repo.get_listing(listing_id)

    def get_amenities(self, listing_id: str) -> List[Dict]:
        return self._csv_repo.get_amenities(listing_id)


_repo_singleton: Repo | None = None


def get_repository() -> Repo:
    global _repo_singleton
    if _repo_singleton is None:
        _repo_singleton = Repo()
    return _repo_singleton


def reset_repository() -> None:
    global _repo_singleton
    _repo_singleton = None
