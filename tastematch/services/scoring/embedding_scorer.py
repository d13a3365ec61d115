import math

from loguru import logger

from tastematch.models.embedding import StyleEmbedding, StyleSignals
from tastematch.models.evaluation import (
    CandidateSnapshot,
    EvaluationContext,
    IdentitySnapshot,
    ScoreSnapshot,
    TasteEvaluation,
)
from tastematch.models.identity import FurnitureCategory, TasteIdentity
from tastematch.services.scoring.constants import (
    BELOW_BUDGET_STRESS,
    BUDGET_COMFORT_RATIO,
    CONFIDENCE_MIDPOINT,
    CONFIDENCE_SLOPE,
    HIGH_TENSION,
    NEUTRAL_CONTEXT_SCORE,
    PURCHASE_WEIGHT_ALIGNMENT,
    PURCHASE_WEIGHT_BUDGET,
    PURCHASE_WEIGHT_SCALE,
    PURCHASE_WEIGHT_STABILITY,
    SCALE_FIT_BANDS,
    SCALE_FIT_OVERSIZED,
    TENSION_PENALTY_DIVISOR,
    TENSION_REGRET_PENALTY,
    VISIBLE_TENSION,
)


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


class ScoringService:
    """
    Scores a candidate embedding against a taste identity.
    """

    @staticmethod
    def score(
        candidate: StyleEmbedding,
        signals: StyleSignals,
        identity: TasteIdentity,
        category: FurnitureCategory | None = None,
        context: EvaluationContext | None = None,
    ) -> TasteEvaluation:
        """
        Evaluate a candidate.

        Alignment is the cosine to the identity embedding mapped to 0..100, less a
        third of the tension (cosine to the anti-embedding, 0 when there is none).

        Args:
            candidate: Candidate embedding (normalized here)
            signals: The signals the candidate was projected from
            identity: Identity to compare against
            category: Optional furniture category, recorded on the evaluation
            context: Optional price and size context

        Returns:
            TasteEvaluation with snapshots of the candidate, identity and scores
        """
        norm_candidate = candidate.normalized()
        norm_embedding = identity.embedding.normalized()
        norm_anti = identity.anti_embedding.normalized()

        alignment = int((norm_candidate.cosine(norm_embedding) + 1.0) / 2.0 * 100.0)

        if norm_anti.is_zero:
            tension = 0
        else:
            tension = int((norm_candidate.cosine(norm_anti) + 1.0) / 2.0 * 100.0)

        alignment = max(0, min(100, alignment - tension // TENSION_PENALTY_DIVISOR))

        budget_stress = ScoringService.budget_stress(context) if context else NEUTRAL_CONTEXT_SCORE
        scale_fit = ScoringService.scale_fit(context) if context else NEUTRAL_CONTEXT_SCORE

        confidence = 1.0 / (1.0 + math.exp(-CONFIDENCE_SLOPE * (identity.total_decisions - CONFIDENCE_MIDPOINT)))

        purchase_confidence = _clamp01(
            alignment / 100.0 * PURCHASE_WEIGHT_ALIGNMENT
            + scale_fit * PURCHASE_WEIGHT_SCALE
            + (1.0 - budget_stress) * PURCHASE_WEIGHT_BUDGET
            + identity.stability * PURCHASE_WEIGHT_STABILITY
        )

        risk = 1.0 - purchase_confidence
        if tension > HIGH_TENSION:
            risk += TENSION_REGRET_PENALTY
        risk = _clamp01(risk)

        tension_flags = []
        if tension > HIGH_TENSION:
            if signals.ornate_vs_minimal > 0.6:
                tension_flags.append("ornate against minimal identity")
            if signals.clutter > 0.6:
                tension_flags.append("high clutter")
            if signals.material_hardness > 0.7:
                tension_flags.append("hard materials vs soft preference")

        reasons = [
            f"Dominant signal: {ScoringService.top_signal_name(signals)}",
            f"Alignment: {ScoringService.alignment_label(alignment)}",
        ]
        if tension > VISIBLE_TENSION:
            reasons.append(f"Tension present: {ScoringService.risk_label(risk)} risk")
        reasons.append(f"Confidence: {ScoringService.confidence_label(confidence)}")

        logger.debug(f"Scored candidate against identity {identity.id}: alignment={alignment}, tension={tension}")

        return TasteEvaluation(
            candidate=CandidateSnapshot(embedding=candidate, signals=signals),
            identity=IdentitySnapshot(
                version=identity.version,
                stability=identity.stability,
                count_me=identity.count_me,
                count_not_me=identity.count_not_me,
                count_maybe=identity.count_maybe,
            ),
            score=ScoreSnapshot(
                alignment_score=alignment,
                tension_score=tension,
                confidence=confidence,
                risk_of_regret=risk,
                purchase_confidence=purchase_confidence,
                budget_stress_score=budget_stress,
                scale_fit_score=scale_fit,
                tension_flags=tension_flags,
                reasons=reasons,
            ),
            furniture_category=category,
            purchase_context=context,
        )

    # Labels

    @staticmethod
    def alignment_label(score: int) -> str:
        if score >= 70:
            return "ALIGNED"
        if score >= 40:
            return "MODERATE"
        return "TENSION"

    @staticmethod
    def confidence_label(confidence: float) -> str:
        if confidence >= 0.65:
            return "High"
        if confidence >= 0.35:
            return "Moderate"
        return "Low"

    @staticmethod
    def risk_label(risk: float) -> str:
        if risk >= 0.5:
            return "High"
        if risk >= 0.25:
            return "Moderate"
        return "Low"

    @staticmethod
    def purchase_confidence_label(confidence: float) -> str:
        if confidence >= 0.70:
            return "Strong"
        if confidence >= 0.45:
            return "Moderate"
        return "Uncertain"

    # Context heuristics

    @staticmethod
    def budget_stress(context: EvaluationContext) -> float:
        """0 = comfortably inside budget, 1 = over budget."""
        price = context.item_price
        if price is None:
            return NEUTRAL_CONTEXT_SCORE
        max_budget = context.declared_budget_max
        if max_budget is not None and max_budget > 0:
            if price > max_budget:
                return 1.0
            comfort = max_budget * BUDGET_COMFORT_RATIO
            if price <= comfort:
                return 0.0
            return (price - comfort) / (max_budget - comfort)
        min_budget = context.declared_budget_min
        if min_budget is not None and price < min_budget:
            return BELOW_BUDGET_STRESS
        return NEUTRAL_CONTEXT_SCORE

    @staticmethod
    def scale_fit(context: EvaluationContext) -> float:
        """Footprint of the item relative to the room; 1 is the ideal band."""
        dims = (context.item_width, context.item_depth, context.room_width, context.room_length)
        if any(d is None for d in dims):
            return NEUTRAL_CONTEXT_SCORE
        item_width, item_depth, room_width, room_length = dims
        if room_width <= 0 or room_length <= 0:
            return NEUTRAL_CONTEXT_SCORE
        ratio = (item_width * item_depth) / (room_width * room_length)
        for upper, fit in SCALE_FIT_BANDS:
            if ratio < upper:
                return fit
        return SCALE_FIT_OVERSIZED

    @staticmethod
    def top_signal_name(signals: StyleSignals) -> str:
        named = [
            ("minimal", 1.0 - signals.ornate_vs_minimal),
            ("ornate", signals.ornate_vs_minimal),
            ("warm", signals.warmth),
            ("cool", 1.0 - signals.warmth),
            ("bright", signals.brightness),
            ("dark", 1.0 - signals.brightness),
            ("organic", signals.organic_vs_industrial),
            ("industrial", 1.0 - signals.organic_vs_industrial),
            ("vintage", signals.vintage_vs_modern),
            ("modern", 1.0 - signals.vintage_vs_modern),
        ]
        return max(named, key=lambda pair: pair[1])[0]
