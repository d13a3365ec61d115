from enum import Enum

from pydantic import BaseModel


class Axis(str, Enum):
    """Space axes. Negative pole first: -1 = minimal, +1 = ornate."""

    MINIMAL_ORNATE = "minimalOrnate"
    WARM_COOL = "warmCool"  # -1 cool, +1 warm
    SOFT_STRUCTURED = "softStructured"
    ORGANIC_INDUSTRIAL = "organicIndustrial"
    LIGHT_DARK = "lightDark"
    NEUTRAL_SATURATED = "neutralSaturated"
    SPARSE_LAYERED = "sparseLayered"


class ObjectAxis(str, Enum):
    """Object axes."""

    PRECISION = "precision"  # -1 rough, +1 exacting
    PATINA = "patina"  # -1 factory-new, +1 aged
    UTILITY = "utility"  # -1 decorative, +1 daily-carry
    FORMALITY = "formality"  # -1 casual, +1 ceremonial
    SUBCULTURE = "subculture"  # -1 mainstream, +1 niche
    ORNAMENT = "ornament"  # -1 austere, +1 embellished
    HERITAGE = "heritage"  # -1 new-gen, +1 storied house
    TECHNICALITY = "technicality"  # -1 analog, +1 engineered
    MINIMALISM = "minimalism"  # -1 maximal, +1 essential


SPACE_AXES: list[Axis] = list(Axis)
OBJECT_AXES: list[ObjectAxis] = list(ObjectAxis)

SECONDARY_AXIS_THRESHOLD = 0.15


def _clamp(value: float) -> float:
    return min(1.0, max(-1.0, value))


def _dominant(values: dict, order: list):
    # max() keeps the first maximal element, so ties resolve to declaration order
    return max(order, key=lambda axis: abs(values.get(axis, 0.0)))


def _secondary(values: dict, order: list):
    ranked = sorted(order, key=lambda axis: abs(values.get(axis, 0.0)), reverse=True)
    if len(ranked) < 2 or abs(values.get(ranked[1], 0.0)) <= SECONDARY_AXIS_THRESHOLD:
        return None
    return ranked[1]


class AxisScores(BaseModel):
    """Seven space axis scores, each in [-1, 1]."""

    scores: dict[Axis, float] = {}

    @classmethod
    def zero(cls) -> "AxisScores":
        return cls(scores={axis: 0.0 for axis in SPACE_AXES})

    @classmethod
    def from_mapping(cls, raw: dict[str, float]) -> "AxisScores":
        """Build scores from a raw ``axis name -> value`` mapping, clamping each value."""
        return cls(scores={axis: _clamp(float(raw.get(axis.value, 0.0))) for axis in SPACE_AXES})

    def value(self, axis: Axis) -> float:
        return self.scores.get(axis, 0.0)

    @property
    def dominant_axis(self) -> Axis:
        return _dominant(self.scores, SPACE_AXES)

    @property
    def secondary_axis(self) -> Axis | None:
        return _secondary(self.scores, SPACE_AXES)

    def ranked_axes(self) -> list[Axis]:
        """Axes ordered by descending magnitude, declaration order on ties."""
        return sorted(SPACE_AXES, key=lambda axis: abs(self.value(axis)), reverse=True)

    def to_dict(self) -> dict[str, float]:
        return {axis.value: self.value(axis) for axis in SPACE_AXES}


class ObjectAxisScores(BaseModel):
    """Nine object axis scores, each in [-1, 1]."""

    scores: dict[ObjectAxis, float] = {}

    @classmethod
    def zero(cls) -> "ObjectAxisScores":
        return cls(scores={axis: 0.0 for axis in OBJECT_AXES})

    @classmethod
    def from_mapping(cls, raw: dict[str, float]) -> "ObjectAxisScores":
        return cls(scores={axis: _clamp(float(raw.get(axis.value, 0.0))) for axis in OBJECT_AXES})

    def value(self, axis: ObjectAxis) -> float:
        return self.scores.get(axis, 0.0)

    @property
    def dominant_axis(self) -> ObjectAxis:
        return _dominant(self.scores, OBJECT_AXES)

    @property
    def secondary_axis(self) -> ObjectAxis | None:
        return _secondary(self.scores, OBJECT_AXES)

    def ranked_axes(self) -> list[ObjectAxis]:
        return sorted(OBJECT_AXES, key=lambda axis: abs(self.value(axis)), reverse=True)

    def to_dict(self) -> dict[str, float]:
        return {axis.value: self.value(axis) for axis in OBJECT_AXES}
