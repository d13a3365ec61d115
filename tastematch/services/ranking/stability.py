from enum import Enum

from tastematch.models.catalog import RarityTier
from tastematch.models.vectors import WeightVector
from tastematch.services.ranking.constants import (
    NEUTRAL_SCORE,
    STABLE_SEPARATION,
    STABLE_SWIPE_COUNT,
    VOLATILE_SEPARATION,
    VOLATILE_SWIPE_COUNT,
)


class StabilityMode(str, Enum):
    STABLE = "stable"
    NEUTRAL = "neutral"
    VOLATILE = "volatile"


# Settled tastes get the archive, unsettled ones get the emergent.
RARITY_BOOST: dict[tuple[RarityTier, StabilityMode], float] = {
    (RarityTier.ARCHIVE, StabilityMode.STABLE): 1.0,
    (RarityTier.ARCHIVE, StabilityMode.NEUTRAL): 0.7,
    (RarityTier.ARCHIVE, StabilityMode.VOLATILE): 0.3,
    (RarityTier.CONTEMPORARY, StabilityMode.STABLE): 0.6,
    (RarityTier.CONTEMPORARY, StabilityMode.NEUTRAL): 1.0,
    (RarityTier.CONTEMPORARY, StabilityMode.VOLATILE): 0.6,
    (RarityTier.EMERGENT, StabilityMode.STABLE): 0.3,
    (RarityTier.EMERGENT, StabilityMode.NEUTRAL): 0.7,
    (RarityTier.EMERGENT, StabilityMode.VOLATILE): 1.0,
}


def detect_stability(vector: WeightVector, swipe_count: int) -> StabilityMode:
    separation = vector.separation
    if swipe_count >= STABLE_SWIPE_COUNT and separation >= STABLE_SEPARATION:
        return StabilityMode.STABLE
    if separation < VOLATILE_SEPARATION or swipe_count < VOLATILE_SWIPE_COUNT:
        return StabilityMode.VOLATILE
    return StabilityMode.NEUTRAL


def rarity_boost(tier: RarityTier | None, mode: StabilityMode) -> float:
    if tier is None:
        return NEUTRAL_SCORE
    return RARITY_BOOST[(tier, mode)]
