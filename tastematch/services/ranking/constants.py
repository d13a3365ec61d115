from typing import Final

from tastematch.models.axes import Axis
from tastematch.models.catalog import ItemCategory

# Stability mode gates
STABLE_SWIPE_COUNT: Final[int] = 14
STABLE_SEPARATION: Final[float] = 0.15
VOLATILE_SWIPE_COUNT: Final[int] = 7
VOLATILE_SEPARATION: Final[float] = 0.10

NEUTRAL_SCORE: Final[float] = 0.5

# Score weights: alignment, rarity, cluster, freshness
OBJECT_WEIGHTS: Final[tuple[float, float, float, float]] = (0.6, 0.2, 0.1, 0.1)
ART_WEIGHTS: Final[tuple[float, float, float, float]] = (0.60, 0.15, 0.15, 0.10)
# alignment, rarity, cluster, material/category
COMMERCE_WEIGHTS: Final[tuple[float, float, float, float]] = (0.55, 0.15, 0.15, 0.15)
# alignment, cluster, rarity, affinity, freshness
DISCOVERY_WEIGHTS: Final[tuple[float, float, float, float, float]] = (0.55, 0.20, 0.10, 0.10, 0.05)

# Latest year in a year range -> freshness
YEAR_FRESHNESS: Final[list[tuple[int, float]]] = [(2020, 1.0), (2000, 0.7), (1980, 0.5)]
YEAR_FRESHNESS_OLDEST: Final[float] = 0.3
YEAR_MIN: Final[int] = 1900
YEAR_MAX: Final[int] = 2100

# Discovery item age in days -> freshness
AGE_FRESHNESS: Final[list[tuple[int, float]]] = [(7, 1.0), (30, 0.7)]
AGE_FRESHNESS_OLDEST: Final[float] = 0.3

AFFINITY_DISMISSED: Final[float] = -1.0
AFFINITY_SAVED: Final[float] = 1.0
AFFINITY_VIEWED: Final[float] = 0.3

MAX_CATEGORY_RUN: Final[int] = 4
MAX_DISCOVERY_TYPE_RUN: Final[int] = 2
MAX_DISCOVERY_CLUSTER_RUN: Final[int] = 2

RADAR_LIMIT: Final[int] = 6
PAGE_SIZE: Final[int] = 20

# Materials that read as each pole of a space axis: (negative pole, positive pole)
MATERIAL_AFFINITY: Final[dict[Axis, tuple[frozenset[str], frozenset[str]]]] = {
    Axis.MINIMAL_ORNATE: (
        frozenset({"oak", "ash", "matte ceramic", "plaster"}),
        frozenset({"brass", "velvet", "marble", "gilded"}),
    ),
    Axis.WARM_COOL: (
        frozenset({"glass", "chrome", "aluminum", "steel"}),
        frozenset({"walnut", "teak", "leather", "terracotta"}),
    ),
    Axis.SOFT_STRUCTURED: (
        frozenset({"boucle", "wool", "linen", "velvet"}),
        frozenset({"steel", "oak", "lacquer", "stone"}),
    ),
    Axis.ORGANIC_INDUSTRIAL: (
        frozenset({"rattan", "jute", "linen", "wood", "cane"}),
        frozenset({"steel", "iron", "concrete", "aluminum"}),
    ),
    Axis.LIGHT_DARK: (
        frozenset({"ash", "linen", "white oak", "paper"}),
        frozenset({"walnut", "smoked glass", "blackened steel", "leather"}),
    ),
    Axis.NEUTRAL_SATURATED: (
        frozenset({"linen", "stone", "plaster", "wool"}),
        frozenset({"velvet", "glazed ceramic", "lacquer", "silk"}),
    ),
    Axis.SPARSE_LAYERED: (
        frozenset({"glass", "steel", "oak"}),
        frozenset({"wool", "jute", "velvet", "silk"}),
    ),
}

# Categories that suit each pole of a space axis: (negative pole, positive pole)
CATEGORY_AFFINITY: Final[dict[Axis, tuple[frozenset[ItemCategory], frozenset[ItemCategory]]]] = {
    Axis.MINIMAL_ORNATE: (frozenset({ItemCategory.FURNITURE}), frozenset({ItemCategory.DECOR, ItemCategory.ART})),
    Axis.WARM_COOL: (frozenset({ItemCategory.LIGHTING}), frozenset({ItemCategory.TEXTILE})),
    Axis.SOFT_STRUCTURED: (frozenset({ItemCategory.TEXTILE}), frozenset({ItemCategory.FURNITURE})),
    Axis.ORGANIC_INDUSTRIAL: (frozenset({ItemCategory.TEXTILE, ItemCategory.DECOR}), frozenset({ItemCategory.LIGHTING})),
    Axis.LIGHT_DARK: (frozenset({ItemCategory.LIGHTING}), frozenset({ItemCategory.ART})),
    Axis.NEUTRAL_SATURATED: (frozenset({ItemCategory.FURNITURE}), frozenset({ItemCategory.ART, ItemCategory.TEXTILE})),
    Axis.SPARSE_LAYERED: (frozenset({ItemCategory.FURNITURE}), frozenset({ItemCategory.TEXTILE, ItemCategory.DECOR})),
}

DOMINANT_MATCH_BOOST: Final[float] = 1.0
SECONDARY_MATCH_BOOST: Final[float] = 0.6
