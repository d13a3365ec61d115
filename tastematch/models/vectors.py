from enum import Enum

from pydantic import BaseModel, Field

from tastematch.models.axes import OBJECT_AXES, ObjectAxis


class StyleTag(str, Enum):
    """Canonical space style tags."""

    MID_CENTURY_MODERN = "midCenturyModern"
    SCANDINAVIAN = "scandinavian"
    INDUSTRIAL = "industrial"
    BOHEMIAN = "bohemian"
    MINIMALIST = "minimalist"
    TRADITIONAL = "traditional"
    COASTAL = "coastal"
    RUSTIC = "rustic"
    ART_DECO = "artDeco"
    JAPANDI = "japandi"


class SwipeDirection(str, Enum):
    LEFT = "left"  # reject
    RIGHT = "right"  # confirm
    UP = "up"  # strong confirm


SWIPE_DELTAS: dict[SwipeDirection, float] = {
    SwipeDirection.LEFT: -0.8,
    SwipeDirection.RIGHT: 1.0,
    SwipeDirection.UP: 2.0,
}

INFLUENCE_THRESHOLD = 0.3
AVOID_THRESHOLD = -0.2
SIGNIFICANT_THRESHOLD = 0.1


class WeightVector(BaseModel):
    """
    Sparse mapping from a closed key vocabulary to an unbounded weight.

    Weights accumulate freely at write time and are clamped to [-1, 1]
    only when read through ``normalized()``.
    """

    weights: dict[str, float] = Field(default_factory=dict)

    def get(self, key: str) -> float:
        return self.weights.get(key, 0.0)

    def add(self, key: str, delta: float) -> None:
        self.weights[key] = self.weights.get(key, 0.0) + delta

    def apply_swipe(self, key: str, direction: SwipeDirection) -> None:
        self.add(key, SWIPE_DELTAS[direction])

    def normalized(self):
        return self.__class__(weights={k: min(1.0, max(-1.0, v)) for k, v in self.weights.items()})

    @property
    def influences(self) -> list[str]:
        """Keys with weight > 0.3, strongest first."""
        picked = [(k, v) for k, v in self.weights.items() if v > INFLUENCE_THRESHOLD]
        return [k for k, _ in sorted(picked, key=lambda kv: kv[1], reverse=True)]

    @property
    def avoids(self) -> list[str]:
        """Keys with weight < -0.2, most negative first."""
        picked = [(k, v) for k, v in self.weights.items() if v < AVOID_THRESHOLD]
        return [k for k, _ in sorted(picked, key=lambda kv: kv[1])]

    @property
    def confidence(self) -> float:
        """Fraction of keys with a significant (|w| > 0.1) weight."""
        if not self.weights:
            return 0.0
        significant = sum(1 for v in self.weights.values() if abs(v) > SIGNIFICANT_THRESHOLD)
        return significant / len(self.weights)

    @property
    def separation(self) -> float:
        """Gap between the two largest normalized weights."""
        ranked = sorted(self.normalized().weights.values(), reverse=True)
        top1 = ranked[0] if ranked else 0.0
        top2 = ranked[1] if len(ranked) > 1 else 0.0
        return top1 - top2

    def _gated_level(self, swipe_count: int, strong_label: str) -> str:
        if swipe_count >= 14 and self.separation >= 0.15:
            return strong_label
        if swipe_count >= 7 or self.confidence > 0.2:
            return "Developing"
        return "Low"

    def confidence_level(self, swipe_count: int) -> str:
        """Strong / Developing / Low, gated on swipe count and top-two separation."""
        return self._gated_level(swipe_count, "Strong")


class TasteVector(WeightVector):
    """Space preference vector keyed by ``StyleTag`` values."""

    @classmethod
    def zero(cls) -> "TasteVector":
        return cls(weights={tag.value: 0.0 for tag in StyleTag})


class ObjectVector(WeightVector):
    """Object preference vector keyed by ``ObjectAxis`` values."""

    @classmethod
    def zero(cls) -> "ObjectVector":
        return cls(weights={axis.value: 0.0 for axis in OBJECT_AXES})

    def apply_axis_swipe(self, axis: ObjectAxis, direction: SwipeDirection) -> None:
        self.apply_swipe(axis.value, direction)

    def stability_level(self, swipe_count: int) -> str:
        """Stable / Developing / Low, same gate as ``confidence_level``."""
        return self._gated_level(swipe_count, "Stable")
