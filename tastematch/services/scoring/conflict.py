import math

from tastematch.models.advisory import ConflictResult
from tastematch.models.axes import OBJECT_AXES, ObjectAxisScores
from tastematch.services.scoring.constants import CONFLICT_AXIS_COUNT


def _clamp01(value: float) -> float:
    return min(1.0, max(0.0, value))


def _normalize(values: dict[str, float]) -> dict[str, float]:
    magnitude = math.sqrt(sum(v * v for v in values.values()))
    if magnitude <= 0:
        return values
    return {k: v / magnitude for k, v in values.items()}


class TasteConflictEngine:
    """
    Measures how far an object sits from the user's object profile.
    """

    @staticmethod
    def evaluate_objects(user_scores: ObjectAxisScores, item_axes: dict[str, float]) -> ConflictResult:
        """
        Compare the user's object scores with an item's axis weights.

        Both sides are L2-normalized over the nine object axes.

        Returns:
            ConflictResult: alignment (cosine mapped to 0..1, 0.5 when undefined),
            drift (distance scaled by sqrt(9)) and the two most divergent axes
        """
        user = _normalize({axis.value: user_scores.value(axis) for axis in OBJECT_AXES})
        item = _normalize({axis.value: float(item_axes.get(axis.value, 0.0)) for axis in OBJECT_AXES})

        dot = mag_user = mag_item = 0.0
        for key in user:
            dot += user[key] * item[key]
            mag_user += user[key] * user[key]
            mag_item += item[key] * item[key]
        denom = math.sqrt(mag_user) * math.sqrt(mag_item)
        alignment = 0.5 if denom <= 0 else _clamp01((dot / denom + 1.0) / 2.0)

        diffs = [(key, user[key] - item[key]) for key in user]
        drift = _clamp01(math.sqrt(sum(d * d for _, d in diffs)) / math.sqrt(len(OBJECT_AXES)))

        ranked = sorted(diffs, key=lambda pair: abs(pair[1]), reverse=True)
        conflict_axes = [key.capitalize() for key, _ in ranked[:CONFLICT_AXIS_COUNT]]

        return ConflictResult(alignment=alignment, drift=drift, conflict_axes=conflict_axes)
