from datetime import datetime
from uuid import UUID, uuid4

from loguru import logger

from tastematch.models.embedding import StyleEmbedding
from tastematch.models.identity import (
    ANCHOR_MULTIPLIER,
    FurnitureCategory,
    PendingReinforcement,
    ReinforcementOutcome,
    ReturnReason,
    TasteIdentity,
    TasteVote,
    utcnow,
)
from tastematch.services.reinforcement.constants import (
    ALPHA,
    ALPHA_MAYBE,
    GAMMA,
    STABILITY_DELTA_SCALE,
    STABILITY_PRIOR_WEIGHT,
    STABILITY_UPDATE_WEIGHT,
)

_DEFERRABLE_VOTES = (TasteVote.ME, TasteVote.NOT_ME)


def updated_stability(before: StyleEmbedding, after: StyleEmbedding, prior: float) -> float:
    """Smoothed stability: large moves of the positive embedding pull it down."""
    raw = max(0.0, min(1.0, 1.0 - before.mean_abs_delta(after) * STABILITY_DELTA_SCALE))
    return STABILITY_PRIOR_WEIGHT * prior + STABILITY_UPDATE_WEIGHT * raw


class ReinforcementService:
    """
    The only writer of TasteIdentity. Every call returns a new identity whose
    version is exactly one higher than the input.
    """

    @staticmethod
    def apply(
        vote: TasteVote,
        candidate_embedding: StyleEmbedding,
        category: FurnitureCategory | None,
        identity: TasteIdentity,
        return_reason: ReturnReason | None = None,
        evaluation_id: UUID | None = None,
        now: datetime | None = None,
    ) -> ReinforcementOutcome:
        """
        Apply a vote to an identity.

        me/notMe on anchor categories (sofa, sectional) are deferred: the
        embeddings stay untouched, the matching counter and version move, and
        a pending record unlocking in 14 days is returned alongside.

        Args:
            vote: The user's vote on the candidate
            candidate_embedding: Embedding of the voted candidate
            category: Furniture category, None for non-furniture
            identity: Identity before the vote
            return_reason: Why the item was returned (returned votes only)
            evaluation_id: Evaluation the vote belongs to, stored on pending records
            now: Current time

        Returns:
            ReinforcementOutcome with the new identity and an optional pending record
        """
        now = now or utcnow()
        updated = identity.model_copy(deep=True)
        updated.version = identity.version + 1
        updated.updated_at = now

        if category is not None and category.is_anchor and vote in _DEFERRABLE_VOTES:
            if vote == TasteVote.ME:
                updated.count_me += 1
            else:
                updated.count_not_me += 1
            pending = PendingReinforcement.make(
                evaluation_id=evaluation_id or uuid4(),
                identity_version=identity.version,
                candidate_embedding=candidate_embedding,
                vote=vote,
                category=category,
                now=now,
            )
            logger.debug(f"Deferred {vote.value} on {category.value} for identity {identity.id} until {pending.unlock_at}")
            return ReinforcementOutcome(identity=updated, pending=pending)

        before = identity.embedding
        if vote == TasteVote.ME:
            updated.embedding = identity.embedding.blend(candidate_embedding, ALPHA)
            updated.count_me += 1
        elif vote == TasteVote.NOT_ME:
            updated.anti_embedding = identity.anti_embedding.blend(candidate_embedding, GAMMA)
            updated.count_not_me += 1
        elif vote == TasteVote.MAYBE:
            updated.embedding = identity.embedding.blend(candidate_embedding, ALPHA_MAYBE)
            updated.count_maybe += 1
        elif vote == TasteVote.RETURNED:
            if return_reason is not None and return_reason.affects_style_learning:
                updated.anti_embedding = identity.anti_embedding.blend(candidate_embedding, GAMMA)
            updated.count_not_me += 1

        updated.stability = updated_stability(before, updated.embedding, identity.stability)
        return ReinforcementOutcome(identity=updated)

    @staticmethod
    def finalize(pending: PendingReinforcement, identity: TasteIdentity, now: datetime | None = None) -> TasteIdentity:
        """
        Apply a held anchor vote at 1.8x the normal rate.

        Counters are not touched; they were incremented when the vote was deferred.
        Does not check ``pending.is_ready``; callers decide when to finalize.

        Raises:
            ValueError: if the pending vote is neither me nor notMe
        """
        if pending.vote not in _DEFERRABLE_VOTES:
            raise ValueError(f"Pending reinforcement {pending.id} carries non-deferrable vote {pending.vote.value}")

        updated = identity.model_copy(deep=True)
        before = identity.embedding
        if pending.vote == TasteVote.ME:
            updated.embedding = identity.embedding.blend(pending.candidate_embedding, ALPHA * ANCHOR_MULTIPLIER)
        else:
            updated.anti_embedding = identity.anti_embedding.blend(pending.candidate_embedding, GAMMA * ANCHOR_MULTIPLIER)

        updated.stability = updated_stability(before, updated.embedding, identity.stability)
        updated.version = identity.version + 1
        updated.updated_at = now or utcnow()
        logger.info(f"Finalized pending {pending.vote.value} ({pending.category.value}) for identity {identity.id}")
        return updated
