from typing import Final

from tastematch.models.advisory import AdvisoryLevel

# level -> ((red drift, red alignment), (yellow drift, yellow alignment))
# red/yellow when drift >= threshold or alignment + tolerance <= threshold
VERDICT_THRESHOLDS: Final[dict[AdvisoryLevel, tuple[tuple[float, float], tuple[float, float]]]] = {
    AdvisoryLevel.SOFT: ((0.40, 0.42), (0.28, 0.55)),
    AdvisoryLevel.STANDARD: ((0.30, 0.50), (0.20, 0.62)),
    AdvisoryLevel.STRICT: ((0.22, 0.58), (0.16, 0.70)),
}

TOLERANCE_BOUND: Final[float] = 0.15
TOLERANCE_STEP: Final[float] = 0.03
TOLERANCE_ADJUST_INTERVAL_SECONDS: Final[int] = 86400
OVERRIDES_TO_LOOSEN: Final[int] = 3
NON_PROCEEDS_TO_TIGHTEN: Final[int] = 5

SIGNAL_RETENTION_DAYS: Final[int] = 14
WEEKLY_WINDOW_DAYS: Final[int] = 7

INTENTIONAL_SHIFT_ALPHA: Final[float] = 0.10
