import math

from tastematch.models.evaluation import TagScore
from tastematch.models.vectors import WeightVector
from tastematch.services.scoring.constants import (
    AMBIGUOUS_ALIGNMENT_RANGE,
    AVOID_HIT_CANDIDATE_MIN,
    AVOID_HIT_IDENTITY_MAX,
    AVOID_HIT_PENALTY,
    LOW_CONFIDENCE,
    RISK_AMBIGUOUS,
    RISK_LOW_CONFIDENCE,
    RISK_PER_AVOID_HIT,
)


def _cosine(a: dict[str, float], b: dict[str, float]) -> float:
    keys = sorted(set(a) | set(b))
    dot = sum(a.get(k, 0.0) * b.get(k, 0.0) for k in keys)
    mag_a = math.sqrt(sum(a.get(k, 0.0) ** 2 for k in keys))
    mag_b = math.sqrt(sum(b.get(k, 0.0) ** 2 for k in keys))
    if mag_a == 0 or mag_b == 0:
        return 0.0
    return dot / (mag_a * mag_b)


class TagVectorScorer:
    """
    Compares two tag vectors directly, without going through axis scores.
    """

    @staticmethod
    def score(candidate: WeightVector, identity: WeightVector) -> TagScore:
        """
        Score a candidate's tags against an identity vector.

        Both vectors are normalized first. Alignment is the cosine over the union
        of keys remapped to 0..100, less 8 points for every avoid hit (a key the
        identity avoids, below -0.2, that the candidate leans into, above 0.3).

        Args:
            candidate: Tag vector describing the item
            identity: The user's tag vector

        Returns:
            TagScore with alignment, confidence, risk, reasons and the avoid hits
        """
        cand = candidate.normalized().weights
        ident = identity.normalized().weights

        avoid_hits = sorted(
            k for k, v in ident.items() if v < AVOID_HIT_IDENTITY_MAX and cand.get(k, 0.0) > AVOID_HIT_CANDIDATE_MIN
        )

        alignment = (_cosine(cand, ident) + 1.0) / 2.0 * 100.0
        alignment = max(0.0, min(100.0, alignment - AVOID_HIT_PENALTY * len(avoid_hits)))

        confidence = 0.5 * candidate.confidence + 0.5 * identity.confidence

        risk = 0.0
        low, high = AMBIGUOUS_ALIGNMENT_RANGE
        if low <= alignment <= high:
            risk += RISK_AMBIGUOUS
        risk += RISK_PER_AVOID_HIT * len(avoid_hits)
        if confidence < LOW_CONFIDENCE:
            risk += RISK_LOW_CONFIDENCE
        risk = max(0.0, min(1.0, risk))

        reasons = []
        shared = [k for k in candidate.normalized().influences if ident.get(k, 0.0) > 0.3]
        if shared:
            reasons.append(f"Shares {', '.join(shared[:3])}")
        for key in avoid_hits:
            reasons.append(f"Leans into avoided {key}")
        if confidence < LOW_CONFIDENCE:
            reasons.append("Limited signal so far")

        return TagScore(
            alignment=alignment,
            confidence=confidence,
            risk=risk,
            reasons=reasons,
            avoid_hits=avoid_hits,
        )
