from typing import Final

from tastematch.models.axes import Axis

# Per-tag contribution to each space axis, in Axis declaration order:
# minimalOrnate, warmCool, softStructured, organicIndustrial, lightDark, neutralSaturated, sparseLayered
_CONTRIBUTION_ROWS: Final[dict[str, tuple[float, ...]]] = {
    "midCenturyModern": (-0.3, 0.7, 0.2, -0.4, 0.0, 0.0, -0.1),
    "scandinavian": (-0.8, -0.4, -0.3, -0.3, -0.7, -0.5, -0.6),
    "industrial": (-0.2, -0.5, 0.8, 0.9, 0.7, -0.3, 0.3),
    "bohemian": (0.8, 0.8, -0.6, -0.7, 0.0, 0.6, 0.9),
    "minimalist": (-0.9, 0.0, 0.3, 0.0, -0.5, -0.6, -0.8),
    "traditional": (0.6, 0.7, 0.4, -0.3, 0.1, 0.2, 0.5),
    "coastal": (-0.4, -0.3, -0.5, -0.4, -0.6, -0.2, -0.3),
    "rustic": (0.3, 0.8, 0.5, -0.5, 0.6, -0.3, 0.4),
    "artDeco": (0.9, 0.4, 0.7, 0.3, 0.2, 0.8, 0.7),
    "japandi": (-0.7, 0.2, -0.2, -0.3, -0.6, -0.5, -0.7),
}

TAG_CONTRIBUTIONS: Final[dict[str, dict[Axis, float]]] = {
    tag: dict(zip(Axis, row)) for tag, row in _CONTRIBUTION_ROWS.items()
}

# Naming gate / stability thresholds
STRONG_SWIPE_COUNT: Final[int] = 14
DEVELOPING_SWIPE_COUNT: Final[int] = 7
STRONG_SEPARATION: Final[float] = 0.15
VOLATILE_SEPARATION: Final[float] = 0.10
