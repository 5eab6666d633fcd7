"""Amenity observations and walkability results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple

from ..utils.coerce import require_non_negative


class AmenityCategory(str, Enum):
    RESTAURANT = "restaurant"
    GROCERY = "grocery"
    SCHOOL = "school"
    HOSPITAL = "hospital"
    BANK = "bank"
    TRANSIT = "transit"

    @classmethod
    def from_source(cls, name: str) -> "AmenityCategory":
        """Resolve a category from its own value or a places-API type name."""

        key = str(name).strip().lower()
        return cls(_SOURCE_ALIASES.get(key, key))


_SOURCE_ALIASES: Dict[str, str] = {
    "grocery_or_supermarket": "grocery",
    "supermarket": "grocery",
    "transit_station": "transit",
    "bus_station": "transit",
    "train_station": "transit",
    "subway_station": "transit",
}


class WalkabilityTier(str, Enum):
    WALKERS_PARADISE = "Walker's Paradise"
    VERY_WALKABLE = "Very Walkable"
    SOMEWHAT_WALKABLE = "Somewhat Walkable"
    CAR_DEPENDENT = "Car-Dependent"


@dataclass(frozen=True)
class AmenityObservation:
    category: AmenityCategory
    distance_miles: float

    def __post_init__(self) -> None:
        if not isinstance(self.category, AmenityCategory):
            object.__setattr__(self, "category", AmenityCategory.from_source(self.category))
        object.__setattr__(self, "distance_miles", require_non_negative("distance_miles", self.distance_miles))


@dataclass(frozen=True)
class CategoryScore:
    category: AmenityCategory
    weight: float
    count: int
    proximity_bonus: float
    score: float
    contribution: float


@dataclass(frozen=True)
class WalkabilityScore:
    score: int
    tier: WalkabilityTier
    categories: Tuple[CategoryScore, ...] = field(default_factory=tuple)


__all__ = [
    "AmenityCategory",
    "WalkabilityTier",
    "AmenityObservation",
    "CategoryScore",
    "WalkabilityScore",
]
