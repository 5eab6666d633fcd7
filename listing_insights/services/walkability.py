"""Amenity-proximity walkability estimate used when no third-party walk score exists."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

import numpy as np

from ..models.location import AmenityCategory, AmenityObservation, CategoryScore, WalkabilityScore, WalkabilityTier
from ..utils.logging import get_logger
from ..utils.money import round_score

LOGGER = get_logger("services.walkability")

COUNT_POINTS = 20.0
PROXIMITY_POINTS = 10.0
CATEGORY_CAP = 100.0


@dataclass(frozen=True)
class CategoryConfig:
    weight: float
    max_distance_miles: float

    def __post_init__(self) -> None:
        if self.weight < 0:
            raise ValueError(f"Category weight must be >= 0, got {self.weight}")
        if self.max_distance_miles <= 0:
            raise ValueError(f"max_distance_miles must be > 0, got {self.max_distance_miles}")


DEFAULT_WALKABILITY_CONFIG: Mapping[AmenityCategory, CategoryConfig] = MappingProxyType(
    {
        AmenityCategory.RESTAURANT: CategoryConfig(weight=0.20, max_distance_miles=0.5),
        AmenityCategory.GROCERY: CategoryConfig(weight=0.25, max_distance_miles=0.8),
        AmenityCategory.SCHOOL: CategoryConfig(weight=0.15, max_distance_miles=1.0),
        AmenityCategory.HOSPITAL: CategoryConfig(weight=0.10, max_distance_miles=2.0),
        AmenityCategory.BANK: CategoryConfig(weight=0.10, max_distance_miles=1.0),
        AmenityCategory.TRANSIT: CategoryConfig(weight=0.20, max_distance_miles=0.5),
    }
)

# Highest threshold first; anything below the last band is still Car-Dependent.
TIER_BANDS: Sequence[Tuple[int, WalkabilityTier]] = (
    (90, WalkabilityTier.WALKERS_PARADISE),
    (70, WalkabilityTier.VERY_WALKABLE),
    (50, WalkabilityTier.SOMEWHAT_WALKABLE),
    (25, WalkabilityTier.CAR_DEPENDENT),
)


def tier_for_score(score: float) -> WalkabilityTier:
    for threshold, tier in TIER_BANDS:
        if score >= threshold:
            return tier
    return WalkabilityTier.CAR_DEPENDENT


def score_category(distances: Sequence[float], config: CategoryConfig) -> Tuple[int, float, float]:
    """Return ``(count, proximity_bonus, category_score)`` for one category.

    Every observation counts; only those within ``max_distance_miles`` earn a
    proximity bonus that shrinks linearly to zero at the limit.
    """

    arr = np.asarray(distances, dtype=float)
    count = int(arr.size)
    within = arr[arr <= config.max_distance_miles]
    bonus = float(np.sum((1.0 - within / config.max_distance_miles) * PROXIMITY_POINTS))
    return count, bonus, min(CATEGORY_CAP, count * COUNT_POINTS + bonus)


def estimate_walkability(
    observations: Iterable[AmenityObservation],
    config: Mapping[AmenityCategory, CategoryConfig] = DEFAULT_WALKABILITY_CONFIG,
) -> WalkabilityScore:
    grouped: Dict[AmenityCategory, List[float]] = {category: [] for category in config}
    for obs in observations:
        bucket = grouped.get(obs.category)
        if bucket is None:
            LOGGER.debug("walkability_category_skipped category=%s", obs.category.value)
            continue
        bucket.append(obs.distance_miles)

    total_score = 0.0
    max_possible = 0.0
    breakdown: List[CategoryScore] = []
    for category, cat_config in config.items():
        count, bonus, cat_score = score_category(grouped[category], cat_config)
        contribution = cat_score * cat_config.weight
        total_score += contribution
        max_possible += CATEGORY_CAP * cat_config.weight
        breakdown.append(
            CategoryScore(
                category=category,
                weight=cat_config.weight,
                count=count,
                proximity_bonus=bonus,
                score=cat_score,
                contribution=contribution,
            )
        )

    final_score = min(100.0, total_score / max_possible * 100) if max_possible > 0 else 0.0
    score = round_score(final_score)
    result = WalkabilityScore(score=score, tier=tier_for_score(score), categories=tuple(breakdown))
    LOGGER.debug("walkability score=%d tier=%s raw=%.3f", score, result.tier.value, final_score)
    return result


__all__ = [
    "CategoryConfig",
    "DEFAULT_WALKABILITY_CONFIG",
    "TIER_BANDS",
    "tier_for_score",
    "score_category",
    "estimate_walkability",
]
