"""Tests for embedding scoring, tag-vector scoring and object conflict."""

import math

import pytest

from tastematch.models.axes import ObjectAxisScores
from tastematch.models.embedding import StyleSignals
from tastematch.models.evaluation import EvaluationContext
from tastematch.models.identity import FurnitureCategory, TasteIdentity
from tastematch.models.vectors import WeightVector
from tastematch.services.scoring.conflict import TasteConflictEngine
from tastematch.services.scoring.embedding_scorer import ScoringService
from tastematch.services.scoring.tag_scorer import TagVectorScorer

from .helpers import unit_embedding


class TestEmbeddingScoring:
    def test_identical_direction_is_fully_aligned(self):
        identity = TasteIdentity(embedding=unit_embedding(0))
        evaluation = ScoringService.score(unit_embedding(0), StyleSignals(), identity)
        assert evaluation.score.alignment_score == 100
        assert evaluation.score.tension_score == 0
        assert "Alignment: ALIGNED" in evaluation.score.reasons

    def test_opposite_direction_is_not_aligned(self):
        identity = TasteIdentity(embedding=unit_embedding(0, -1.0))
        evaluation = ScoringService.score(unit_embedding(0), StyleSignals(), identity)
        assert evaluation.score.alignment_score == 0

    def test_tension_penalizes_alignment(self):
        identity = TasteIdentity(embedding=unit_embedding(0), anti_embedding=unit_embedding(0))
        signals = StyleSignals(ornate_vs_minimal=0.8, clutter=0.7)
        evaluation = ScoringService.score(unit_embedding(0), signals, identity, FurnitureCategory.RUG)

        assert evaluation.score.tension_score == 100
        assert evaluation.score.alignment_score == 67
        assert evaluation.score.tension_flags == ["ornate against minimal identity", "high clutter"]
        assert evaluation.furniture_category == FurnitureCategory.RUG
        assert any(r.startswith("Tension present") for r in evaluation.score.reasons)

    def test_confidence_midpoint(self):
        identity = TasteIdentity(count_me=3, count_not_me=1, count_maybe=1)
        evaluation = ScoringService.score(unit_embedding(0), StyleSignals(), identity)
        assert evaluation.score.confidence == pytest.approx(0.5)

    def test_purchase_confidence_without_context(self):
        identity = TasteIdentity(embedding=unit_embedding(0), stability=1.0)
        evaluation = ScoringService.score(unit_embedding(0), StyleSignals(), identity)
        expected = 1.0 * 0.40 + 0.5 * 0.25 + 0.5 * 0.25 + 1.0 * 0.10
        assert evaluation.score.purchase_confidence == pytest.approx(expected)
        assert evaluation.score.risk_of_regret == pytest.approx(1.0 - expected)

    def test_snapshot_records_identity_state(self):
        identity = TasteIdentity(version=5, count_me=2)
        evaluation = ScoringService.score(unit_embedding(0), StyleSignals(), identity)
        assert evaluation.identity.version == 5
        assert evaluation.identity.count_me == 2


class TestContextHeuristics:
    @pytest.mark.parametrize(
        "context, expected",
        [
            (EvaluationContext(), 0.5),
            (EvaluationContext(item_price=50, declared_budget_max=100), 0.0),
            (EvaluationContext(item_price=85, declared_budget_max=100), 0.5),
            (EvaluationContext(item_price=120, declared_budget_max=100), 1.0),
            (EvaluationContext(item_price=10, declared_budget_min=50), 0.1),
            (EvaluationContext(item_price=60, declared_budget_min=50), 0.5),
        ],
    )
    def test_budget_stress(self, context, expected):
        assert ScoringService.budget_stress(context) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "item, expected",
        [((2, 1), 1.0), ((0.5, 0.5), 0.3), ((1, 1), 0.6), ((3, 1.5), 0.7), ((4, 4), 0.2)],
    )
    def test_scale_fit(self, item, expected):
        context = EvaluationContext(item_width=item[0], item_depth=item[1], room_width=4, room_length=4)
        assert ScoringService.scale_fit(context) == expected

    def test_scale_fit_needs_all_dimensions(self):
        assert ScoringService.scale_fit(EvaluationContext(item_width=1, room_width=4, room_length=4)) == 0.5

    def test_labels(self):
        assert ScoringService.alignment_label(70) == "ALIGNED"
        assert ScoringService.alignment_label(40) == "MODERATE"
        assert ScoringService.alignment_label(39) == "TENSION"
        assert ScoringService.purchase_confidence_label(0.7) == "Strong"
        assert ScoringService.risk_label(0.1) == "Low"

    def test_top_signal_name(self):
        assert ScoringService.top_signal_name(StyleSignals(warmth=0.95)) == "warm"


class TestTagScoring:
    def test_identical_vectors(self):
        vector = WeightVector(weights={"a": 1.0, "b": 0.5})
        result = TagVectorScorer.score(vector, vector)
        assert result.alignment == pytest.approx(100.0)
        assert result.risk == 0.0
        assert result.reasons == ["Shares a, b"]
        assert result.avoid_hits == []

    def test_avoid_hit_penalty(self):
        candidate = WeightVector(weights={"a": 1.0, "b": 0.5})
        identity = WeightVector(weights={"a": -0.5, "b": 0.5})
        result = TagVectorScorer.score(candidate, identity)

        cosine = (-0.5 + 0.25) / (math.sqrt(1.25) * math.sqrt(0.5))
        assert result.avoid_hits == ["a"]
        assert result.alignment == pytest.approx((cosine + 1) / 2 * 100 - 8)
        assert result.risk == pytest.approx(0.2)
        assert "Leans into avoided a" in result.reasons

    def test_empty_identity_is_ambiguous(self):
        result = TagVectorScorer.score(WeightVector(weights={"a": 1.0}), WeightVector())
        assert result.alignment == pytest.approx(50.0)
        assert result.confidence == pytest.approx(0.5)
        assert result.risk == pytest.approx(0.3)

    def test_weights_are_clamped_before_scoring(self):
        small = TagVectorScorer.score(WeightVector(weights={"a": 1.0}), WeightVector(weights={"a": 1.0}))
        large = TagVectorScorer.score(WeightVector(weights={"a": 5.0}), WeightVector(weights={"a": 1.0}))
        assert small.alignment == pytest.approx(large.alignment)


class TestConflict:
    def test_matching_item(self):
        scores = ObjectAxisScores.from_mapping({"precision": 1.0})
        result = TasteConflictEngine.evaluate_objects(scores, {"precision": 1.0})
        assert result.alignment == pytest.approx(1.0)
        assert result.drift == pytest.approx(0.0)

    def test_opposite_item(self):
        scores = ObjectAxisScores.from_mapping({"precision": 1.0})
        result = TasteConflictEngine.evaluate_objects(scores, {"precision": -1.0})
        assert result.alignment == pytest.approx(0.0)
        assert result.drift == pytest.approx(2.0 / 3.0)
        assert result.conflict_axes[0] == "Precision"
        assert len(result.conflict_axes) == 2

    def test_undefined_alignment_is_neutral(self):
        result = TasteConflictEngine.evaluate_objects(ObjectAxisScores.zero(), {"patina": 0.4})
        assert result.alignment == 0.5

    def test_scale_invariant(self):
        scores = ObjectAxisScores.from_mapping({"precision": 0.4, "utility": 0.2})
        a = TasteConflictEngine.evaluate_objects(scores, {"precision": 0.8, "utility": 0.4})
        b = TasteConflictEngine.evaluate_objects(scores, {"precision": 0.2, "utility": 0.1})
        assert a.alignment == pytest.approx(b.alignment)
        assert a.drift == pytest.approx(b.drift)
