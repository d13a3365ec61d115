"""Tests for identity reinforcement, including the deferred anchor path."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from tastematch.models.embedding import StyleEmbedding
from tastematch.models.identity import (
    FurnitureCategory,
    PendingReinforcement,
    ReturnReason,
    TasteIdentity,
    TasteVote,
)
from tastematch.services.reinforcement.service import ReinforcementService, updated_stability

from .helpers import uniform_embedding, unit_embedding

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def identity():
    return TasteIdentity()


class TestImmediateVotes:
    def test_me_blends_embedding(self, identity):
        candidate = unit_embedding(0)
        outcome = ReinforcementService.apply(TasteVote.ME, candidate, None, identity, now=NOW)

        assert outcome.pending is None
        assert outcome.identity.embedding.dims[0] == pytest.approx(0.18)
        assert outcome.identity.anti_embedding.is_zero
        assert outcome.identity.count_me == 1
        assert outcome.identity.version == identity.version + 1
        assert outcome.identity.updated_at == NOW

    def test_not_me_blends_anti_embedding(self, identity):
        outcome = ReinforcementService.apply(TasteVote.NOT_ME, unit_embedding(3), FurnitureCategory.RUG, identity)
        assert outcome.identity.anti_embedding.dims[3] == pytest.approx(0.14)
        assert outcome.identity.embedding.is_zero
        assert outcome.identity.count_not_me == 1

    def test_maybe_applies_weakly_even_for_anchor(self, identity):
        outcome = ReinforcementService.apply(TasteVote.MAYBE, unit_embedding(1), FurnitureCategory.SOFA, identity)
        assert outcome.pending is None
        assert outcome.identity.embedding.dims[1] == pytest.approx(0.05)
        assert outcome.identity.count_maybe == 1

    def test_returned_for_style_reason_updates_anti(self, identity):
        outcome = ReinforcementService.apply(
            TasteVote.RETURNED, unit_embedding(2), None, identity, return_reason=ReturnReason.COLOR_MISMATCH
        )
        assert outcome.identity.anti_embedding.dims[2] == pytest.approx(0.14)
        assert outcome.identity.count_not_me == 1

    def test_returned_for_fit_reason_only_counts(self, identity):
        outcome = ReinforcementService.apply(
            TasteVote.RETURNED, unit_embedding(2), None, identity, return_reason=ReturnReason.TOO_LARGE
        )
        assert outcome.identity.anti_embedding.is_zero
        assert outcome.identity.embedding.is_zero
        assert outcome.identity.count_not_me == 1
        assert outcome.identity.version == 2

    def test_input_identity_is_not_mutated(self, identity):
        ReinforcementService.apply(TasteVote.ME, unit_embedding(0), None, identity)
        assert identity.embedding.is_zero
        assert identity.count_me == 0
        assert identity.version == 1

    def test_version_increments_once_per_call(self, identity):
        current = identity
        votes = [TasteVote.ME, TasteVote.NOT_ME, TasteVote.MAYBE, TasteVote.RETURNED, TasteVote.ME]
        for vote in votes:
            current = ReinforcementService.apply(vote, unit_embedding(5), FurnitureCategory.SOFA, current).identity
        assert current.version == identity.version + len(votes)
        assert current.total_decisions == len(votes)


class TestStability:
    def test_small_move_keeps_stability_high(self, identity):
        outcome = ReinforcementService.apply(TasteVote.ME, uniform_embedding(0.125), None, identity)
        # mean |delta| = 0.18 * 0.125 = 0.0225 -> raw 0.775
        assert outcome.identity.stability == pytest.approx(0.9 * 0.5 + 0.1 * 0.775)

    def test_unchanged_embedding_pulls_toward_one(self):
        assert updated_stability(StyleEmbedding.zero(), StyleEmbedding.zero(), 0.5) == pytest.approx(0.55)

    def test_large_move_drags_stability_down(self):
        after = uniform_embedding(0.5)
        assert updated_stability(StyleEmbedding.zero(), after, 0.8) == pytest.approx(0.72)


class TestAnchorDeferral:
    def test_me_on_sofa_is_deferred(self, identity):
        candidate = unit_embedding(7)
        evaluation_id = uuid4()
        outcome = ReinforcementService.apply(
            TasteVote.ME, candidate, FurnitureCategory.SOFA, identity, evaluation_id=evaluation_id, now=NOW
        )

        assert outcome.deferred
        assert outcome.identity.embedding.is_zero
        assert outcome.identity.count_me == 1
        assert outcome.identity.version == 2
        assert outcome.identity.stability == identity.stability

        pending = outcome.pending
        assert pending.evaluation_id == evaluation_id
        assert pending.identity_version_at_time == 1
        assert pending.unlock_at == NOW + timedelta(days=14)
        assert pending.candidate_embedding.dims == candidate.dims
        assert not pending.is_ready(NOW + timedelta(days=13))
        assert pending.is_ready(NOW + timedelta(days=14))

    def test_not_me_on_sectional_is_deferred(self, identity):
        outcome = ReinforcementService.apply(TasteVote.NOT_ME, unit_embedding(0), FurnitureCategory.SECTIONAL, identity)
        assert outcome.deferred
        assert outcome.identity.anti_embedding.is_zero
        assert outcome.identity.count_not_me == 1

    def test_finalize_applies_amplified_blend(self, identity):
        outcome = ReinforcementService.apply(TasteVote.ME, unit_embedding(7), FurnitureCategory.SOFA, identity)
        finalized = ReinforcementService.finalize(outcome.pending, outcome.identity, now=NOW)

        assert finalized.embedding.dims[7] == pytest.approx(0.18 * 1.8)
        assert finalized.version == outcome.identity.version + 1
        assert finalized.count_me == 1

    def test_finalize_not_me_uses_gamma(self, identity):
        outcome = ReinforcementService.apply(TasteVote.NOT_ME, unit_embedding(4), FurnitureCategory.SOFA, identity)
        finalized = ReinforcementService.finalize(outcome.pending, outcome.identity)
        assert finalized.anti_embedding.dims[4] == pytest.approx(0.14 * 1.8)
        assert finalized.count_not_me == 1

    def test_finalize_rejects_non_deferrable_vote(self, identity):
        pending = PendingReinforcement.make(
            evaluation_id=uuid4(),
            identity_version=1,
            candidate_embedding=unit_embedding(0),
            vote=TasteVote.MAYBE,
            category=FurnitureCategory.SOFA,
        )
        with pytest.raises(ValueError):
            ReinforcementService.finalize(pending, identity)

    def test_finalize_uses_captured_embedding(self, identity):
        outcome = ReinforcementService.apply(TasteVote.ME, unit_embedding(9), FurnitureCategory.SOFA, identity)
        later = ReinforcementService.apply(TasteVote.ME, unit_embedding(10), None, outcome.identity).identity
        finalized = ReinforcementService.finalize(outcome.pending, later)
        assert finalized.embedding.dims[9] == pytest.approx(0.324)
        assert finalized.embedding.dims[10] == pytest.approx(0.18 * (1 - 0.324))


class TestCategories:
    def test_anchor_categories(self):
        assert FurnitureCategory.SOFA.is_anchor
        assert FurnitureCategory.SECTIONAL.is_anchor
        assert not FurnitureCategory.RUG.is_anchor
        assert FurnitureCategory.SOFA.anchor_multiplier == 1.8
        assert FurnitureCategory.OTHER.anchor_multiplier == 1.0

    def test_style_return_reasons(self):
        assert ReturnReason.MATERIAL_MISMATCH.affects_style_learning
        assert not ReturnReason.PRICE_DISCOMFORT.affects_style_learning
        assert ReturnReason.TOO_SMALL.display_label == "Too small"
