from loguru import logger

from tastematch.models.advisory import AdvisoryDecision, AdvisoryLevel, AdvisoryVerdict, ConflictResult
from tastematch.services.advisory.constants import VERDICT_THRESHOLDS


class AdvisoryPolicy:
    @staticmethod
    def decide(level: AdvisoryLevel, conflict: ConflictResult, tolerance: float = 0.0) -> AdvisoryDecision:
        """
        Turn a conflict measurement into a verdict for the given strictness.

        A positive tolerance makes the alignment checks more forgiving; drift
        checks are unaffected. Soft only intercepts red; standard and strict
        intercept yellow too.
        """
        (red_drift, red_alignment), (yellow_drift, yellow_alignment) = VERDICT_THRESHOLDS[level]
        a = conflict.alignment + tolerance

        if conflict.drift >= red_drift or a <= red_alignment:
            verdict = AdvisoryVerdict.RED
        elif conflict.drift >= yellow_drift or a <= yellow_alignment:
            verdict = AdvisoryVerdict.YELLOW
        else:
            verdict = AdvisoryVerdict.GREEN

        should_intercept = verdict == AdvisoryVerdict.RED or (
            verdict == AdvisoryVerdict.YELLOW and level != AdvisoryLevel.SOFT
        )
        logger.debug(
            f"Advisory {level.value}: alignment={conflict.alignment:.2f}+{tolerance:.2f} "
            f"drift={conflict.drift:.2f} -> {verdict.value}"
        )
        return AdvisoryDecision(verdict=verdict, should_intercept=should_intercept, conflict=conflict)
