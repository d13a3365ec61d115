from typing import Final

# Embedding evaluation
TENSION_PENALTY_DIVISOR: Final[int] = 3
CONFIDENCE_SLOPE: Final[float] = 0.3
CONFIDENCE_MIDPOINT: Final[int] = 5
NEUTRAL_CONTEXT_SCORE: Final[float] = 0.5

PURCHASE_WEIGHT_ALIGNMENT: Final[float] = 0.40
PURCHASE_WEIGHT_SCALE: Final[float] = 0.25
PURCHASE_WEIGHT_BUDGET: Final[float] = 0.25
PURCHASE_WEIGHT_STABILITY: Final[float] = 0.10

HIGH_TENSION: Final[int] = 50  # flags + regret penalty above this
VISIBLE_TENSION: Final[int] = 40  # mentioned in reasons above this
TENSION_REGRET_PENALTY: Final[float] = 0.15

BUDGET_COMFORT_RATIO: Final[float] = 0.70
BELOW_BUDGET_STRESS: Final[float] = 0.1

# (upper bound of item/room area ratio, fit score); anything larger scores 0.2
SCALE_FIT_BANDS: Final[list[tuple[float, float]]] = [
    (0.05, 0.3),
    (0.10, 0.6),
    (0.25, 1.0),
    (0.35, 0.7),
]
SCALE_FIT_OVERSIZED: Final[float] = 0.2

# Tag vector scoring
AVOID_HIT_PENALTY: Final[float] = 8.0
AVOID_HIT_CANDIDATE_MIN: Final[float] = 0.3
AVOID_HIT_IDENTITY_MAX: Final[float] = -0.2
AMBIGUOUS_ALIGNMENT_RANGE: Final[tuple[float, float]] = (40.0, 70.0)
RISK_AMBIGUOUS: Final[float] = 0.30
RISK_PER_AVOID_HIT: Final[float] = 0.20
RISK_LOW_CONFIDENCE: Final[float] = 0.25
LOW_CONFIDENCE: Final[float] = 0.35

# Object conflict
CONFLICT_AXIS_COUNT: Final[int] = 2
