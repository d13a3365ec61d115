from tastematch.models.vectors import WeightVector

HIGH_BUCKET = 0.5
MEDIUM_BUCKET = 0.2


def bucket(value: float) -> str:
    """Sign plus magnitude band: ``+H`` (>= 0.5), ``+M`` (>= 0.2) or ``+L``."""
    sign = "+" if value >= 0 else "-"
    magnitude = abs(value)
    if magnitude >= HIGH_BUCKET:
        band = "H"
    elif magnitude >= MEDIUM_BUCKET:
        band = "M"
    else:
        band = "L"
    return f"{sign}{band}"


class BasisHashBuilder:
    """
    Coarse fingerprint of a profile, used to decide whether its name may evolve.

    Small weight changes that leave every axis in the same band, the same top
    two keys and the same confidence label produce the same fingerprint.
    """

    @staticmethod
    def build(scores, vector: WeightVector, swipe_count: int) -> str:
        """
        Args:
            scores: AxisScores or ObjectAxisScores for the vector
            vector: The raw weight vector the scores were computed from
            swipe_count: Swipes recorded for the profile

        Returns:
            ``|``-joined fingerprint string
        """
        parts = [bucket(value) for value in scores.to_dict().values()]
        ranked = sorted(vector.weights.items(), key=lambda kv: (-kv[1], kv[0]))[:2]
        parts.extend(sorted(key for key, _ in ranked))
        parts.append(vector.confidence_level(swipe_count))
        return "|".join(parts)
