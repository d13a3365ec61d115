from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel

from tastematch.core.constants import SECONDS_PER_DAY
from tastematch.models.axes import AxisScores
from tastematch.models.catalog import DiscoveryItem, DiscoverySignals
from tastematch.models.identity import utcnow
from tastematch.models.profile import TasteDomain
from tastematch.models.vectors import WeightVector
from tastematch.services.naming.hashing import (
    CONTEXT_MULTIPLIER,
    DESCRIPTOR_MULTIPLIER,
    RADAR_MULTIPLIER,
    rolling_hash,
)
from tastematch.services.ranking.clusters import cluster_for
from tastematch.services.ranking.constants import (
    AFFINITY_DISMISSED,
    AFFINITY_SAVED,
    AFFINITY_VIEWED,
    AGE_FRESHNESS,
    AGE_FRESHNESS_OLDEST,
    DISCOVERY_WEIGHTS,
    MAX_DISCOVERY_CLUSTER_RUN,
    MAX_DISCOVERY_TYPE_RUN,
    NEUTRAL_SCORE,
    PAGE_SIZE,
    RADAR_LIMIT,
)
from tastematch.services.ranking.diversify import diversify_discovery
from tastematch.services.ranking.engine import vector_alignment


class DiscoveryPage(BaseModel):
    items: list[DiscoveryItem]
    has_more: bool


class DiscoveryEngine:
    @staticmethod
    def user_affinity(item: DiscoveryItem, signals: DiscoverySignals | None) -> float:
        if signals is None:
            return NEUTRAL_SCORE
        if item.id in signals.dismissed_ids:
            return AFFINITY_DISMISSED
        if item.id in signals.saved_ids:
            return AFFINITY_SAVED
        if item.id in signals.viewed_ids:
            return AFFINITY_VIEWED
        return NEUTRAL_SCORE

    @staticmethod
    def freshness(item: DiscoveryItem, now: datetime | None = None) -> float:
        if item.created_at is None:
            return NEUTRAL_SCORE
        created = item.created_at
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        days = ((now or utcnow()) - created).total_seconds() / SECONDS_PER_DAY
        for limit, value in AGE_FRESHNESS:
            if days < limit:
                return value
        return AGE_FRESHNESS_OLDEST

    @staticmethod
    def rank(
        items: list[DiscoveryItem],
        scores: AxisScores,
        signals: DiscoverySignals | None = None,
        domain: TasteDomain = TasteDomain.SPACE,
        now: datetime | None = None,
    ) -> list[DiscoveryItem]:
        """
        Rank discovery items: 0.55 alignment, 0.20 primary-cluster match,
        0.10 item rarity, 0.10 user affinity, 0.05 freshness. Ties break on
        item id; the result is then diversified so that neither type nor
        primary cluster repeats more than twice in a row.
        """
        now = now or utcnow()
        dominant_cluster = cluster_for(scores, domain)
        w_align, w_cluster, w_rarity, w_affinity, w_fresh = DISCOVERY_WEIGHTS

        scored = []
        for item in items:
            score = (
                w_align * vector_alignment(scores, item.axis_weights)
                + w_cluster * (1.0 if item.primary_cluster == dominant_cluster else 0.0)
                + w_rarity * item.rarity
                + w_affinity * DiscoveryEngine.user_affinity(item, signals)
                + w_fresh * DiscoveryEngine.freshness(item, now)
            )
            scored.append((item, score))

        ordered = [item for item, _ in sorted(scored, key=lambda entry: (-entry[1], entry[0].id))]
        return diversify_discovery(ordered, MAX_DISCOVERY_TYPE_RUN, MAX_DISCOVERY_CLUSTER_RUN)

    @staticmethod
    def current_day_index(now: datetime | None = None) -> int:
        return int((now or utcnow()).timestamp() // SECONDS_PER_DAY)

    @staticmethod
    def build_day_key(day_index: int, profile_id: UUID, vector: WeightVector) -> str:
        """``"{day}|{profile hash}|{vector hash}"``; the vector hash sees weights truncated to hundredths."""
        profile_hash = rolling_hash(str(profile_id).upper(), DESCRIPTOR_MULTIPLIER)
        canonical = "|".join(f"{key}:{int(value * 100)}" for key, value in sorted(vector.weights.items()))
        vector_hash = rolling_hash(canonical, CONTEXT_MULTIPLIER)
        return f"{day_index}|{profile_hash}|{vector_hash}"

    @staticmethod
    def daily_radar(
        items: list[DiscoveryItem],
        scores: AxisScores,
        profile_id: UUID,
        vector: WeightVector,
        signals: DiscoverySignals | None = None,
        limit: int = RADAR_LIMIT,
        day_index: int | None = None,
        domain: TasteDomain = TasteDomain.SPACE,
    ) -> list[DiscoveryItem]:
        """A day-keyed selection that rotates daily and whenever the vector changes."""
        ranked = DiscoveryEngine.rank(items, scores, signals, domain=domain)
        if not ranked:
            return []
        day = DiscoveryEngine.current_day_index() if day_index is None else day_index
        day_key = DiscoveryEngine.build_day_key(day, profile_id, vector)
        shuffled = sorted(ranked, key=lambda item: rolling_hash(day_key + item.id, RADAR_MULTIPLIER))
        return shuffled[:limit]

    @staticmethod
    def page(ranked: list[DiscoveryItem], offset: int, limit: int = PAGE_SIZE) -> DiscoveryPage:
        offset = max(0, offset)
        return DiscoveryPage(items=ranked[offset : offset + limit], has_more=offset + limit < len(ranked))
