from datetime import datetime, timedelta

from loguru import logger

from tastematch.models.advisory import (
    AdvisoryAction,
    AdvisorySignal,
    AdvisoryVerdict,
    AdvisoryWeeklyStats,
    ToleranceState,
)
from tastematch.models.identity import utcnow
from tastematch.services.advisory.constants import (
    NON_PROCEEDS_TO_TIGHTEN,
    OVERRIDES_TO_LOOSEN,
    SIGNAL_RETENTION_DAYS,
    TOLERANCE_ADJUST_INTERVAL_SECONDS,
    TOLERANCE_BOUND,
    TOLERANCE_STEP,
    WEEKLY_WINDOW_DAYS,
)

_WARNING_VERDICTS = (AdvisoryVerdict.YELLOW, AdvisoryVerdict.RED)


def clamp_tolerance(value: float) -> float:
    return min(TOLERANCE_BOUND, max(-TOLERANCE_BOUND, value))


class AdvisorySignalLog:
    """Pure operations over the list of advisory signals for one profile."""

    @staticmethod
    def append(signals: list[AdvisorySignal], signal: AdvisorySignal, now: datetime | None = None) -> list[AdvisorySignal]:
        """Add a signal and drop everything older than the retention window."""
        cutoff = (now or utcnow()) - timedelta(days=SIGNAL_RETENTION_DAYS)
        return [s for s in [*signals, signal] if s.timestamp > cutoff]

    @staticmethod
    def weekly_stats(signals: list[AdvisorySignal], now: datetime | None = None) -> AdvisoryWeeklyStats:
        cutoff = (now or utcnow()) - timedelta(days=WEEKLY_WINDOW_DAYS)
        recent = [s for s in signals if s.timestamp > cutoff]

        def count(action: AdvisoryAction, verdicts: tuple[AdvisoryVerdict, ...]) -> int:
            return sum(1 for s in recent if s.action == action and s.verdict in verdicts)

        shown_red = count(AdvisoryAction.SHOWN, (AdvisoryVerdict.RED,))
        proceeded_red = count(AdvisoryAction.PROCEEDED, (AdvisoryVerdict.RED,))
        shown_warning = count(AdvisoryAction.SHOWN, _WARNING_VERDICTS)
        proceeded_warning = count(AdvisoryAction.PROCEEDED, _WARNING_VERDICTS)

        return AdvisoryWeeklyStats(
            near_misses=max(0, shown_red - proceeded_red),
            overrides=proceeded_red,
            intentional_shifts=sum(1 for s in recent if s.action == AdvisoryAction.INTENTIONAL_SHIFT),
            non_proceeds=max(0, shown_warning - proceeded_warning),
        )


class ToleranceAdjuster:
    @staticmethod
    def adjust(state: ToleranceState, stats: AdvisoryWeeklyStats, now: datetime | None = None) -> ToleranceState:
        """
        Nudge the tolerance from last week's behaviour, at most once per day.

        Frequent red overrides loosen the policy (+0.03); frequent walk-aways
        from warnings tighten it (-0.03). Both can apply and cancel out. The
        adjustment timestamp moves even when the delta is zero.

        Args:
            state: Current tolerance state
            stats: Weekly advisory stats
            now: Current time

        Returns:
            New ToleranceState (the input state when the interval has not elapsed)
        """
        now = now or utcnow()
        if state.last_adjusted_at is not None:
            if (now - state.last_adjusted_at).total_seconds() < TOLERANCE_ADJUST_INTERVAL_SECONDS:
                return state

        delta = 0.0
        if stats.overrides >= OVERRIDES_TO_LOOSEN:
            delta += TOLERANCE_STEP
        if stats.non_proceeds >= NON_PROCEEDS_TO_TIGHTEN:
            delta -= TOLERANCE_STEP

        tolerance = clamp_tolerance(state.tolerance + delta) if delta != 0 else state.tolerance
        if delta != 0:
            logger.info(f"Advisory tolerance adjusted {state.tolerance:+.2f} -> {tolerance:+.2f}")
        return ToleranceState(tolerance=tolerance, last_adjusted_at=now)
