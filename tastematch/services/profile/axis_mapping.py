from tastematch.models.axes import OBJECT_AXES, SPACE_AXES, AxisScores, ObjectAxisScores
from tastematch.models.vectors import ObjectVector, TasteVector
from tastematch.services.profile.constants import TAG_CONTRIBUTIONS


def _clamp(value: float) -> float:
    return min(1.0, max(-1.0, value))


class AxisMapper:
    """
    Reduces weighted tag / axis vectors to named axis scores.
    """

    @staticmethod
    def axis_scores(vector: TasteVector) -> AxisScores:
        """
        Compute space axis scores from a tag vector.

        Each tag adds ``weight * contribution`` per axis; the totals are divided
        by the sum of absolute input weights and clamped to [-1, 1].

        Args:
            vector: Weighted space tag vector (raw, unnormalized)

        Returns:
            AxisScores, all zero when every weight is zero
        """
        total_weight = sum(abs(w) for w in vector.weights.values())
        if total_weight <= 0:
            return AxisScores.zero()

        accumulated = {axis: 0.0 for axis in SPACE_AXES}
        for tag, weight in vector.weights.items():
            contribution = TAG_CONTRIBUTIONS.get(tag)
            if contribution is None:
                continue
            for axis in SPACE_AXES:
                accumulated[axis] += weight * contribution[axis]

        return AxisScores(scores={axis: _clamp(accumulated[axis] / total_weight) for axis in SPACE_AXES})

    @staticmethod
    def object_axis_scores(vector: ObjectVector) -> ObjectAxisScores:
        """Object axes map one-to-one onto the clamped vector weights."""
        normalized = vector.normalized()
        return ObjectAxisScores(scores={axis: _clamp(normalized.get(axis.value)) for axis in OBJECT_AXES})
