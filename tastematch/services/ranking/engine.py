import math
import re

from loguru import logger

from tastematch.models.axes import OBJECT_AXES, SPACE_AXES, Axis, AxisScores, ObjectAxis, ObjectAxisScores
from tastematch.models.catalog import CatalogItem, ItemCategory, RecommendationItem
from tastematch.models.profile import TasteDomain
from tastematch.models.vectors import ObjectVector, TasteVector, WeightVector
from tastematch.services.ranking.clusters import art_cluster, object_axis_cluster, space_cluster
from tastematch.services.ranking.constants import (
    ART_WEIGHTS,
    CATEGORY_AFFINITY,
    COMMERCE_WEIGHTS,
    DOMINANT_MATCH_BOOST,
    MATERIAL_AFFINITY,
    NEUTRAL_SCORE,
    OBJECT_WEIGHTS,
    SECONDARY_MATCH_BOOST,
    YEAR_FRESHNESS,
    YEAR_FRESHNESS_OLDEST,
    YEAR_MAX,
    YEAR_MIN,
)
from tastematch.services.ranking.diversify import diversify
from tastematch.services.ranking.reasons import build_reason
from tastematch.services.ranking.stability import detect_stability, rarity_boost

_YEAR_PATTERN = re.compile(r"\d+")


def vector_alignment(scores: AxisScores | ObjectAxisScores, item_weights: dict[str, float]) -> float:
    """Cosine of the item's axis weights against the user's scores, mapped to 0..1 (0.5 when undefined)."""
    axes = OBJECT_AXES if isinstance(scores, ObjectAxisScores) else SPACE_AXES
    dot = mag_a = mag_b = 0.0
    for axis in axes:
        a = scores.value(axis)
        b = float(item_weights.get(axis.value, 0.0))
        dot += a * b
        mag_a += a * a
        mag_b += b * b
    denom = math.sqrt(mag_a) * math.sqrt(mag_b)
    if denom <= 0:
        return NEUTRAL_SCORE
    return (dot / denom + 1.0) / 2.0


def year_freshness(year_range: str | None) -> float:
    """Freshness from the latest plausible year in a range like ``"1965-1972"``."""
    if not year_range:
        return NEUTRAL_SCORE
    years = [int(n) for n in _YEAR_PATTERN.findall(year_range) if YEAR_MIN <= int(n) <= YEAR_MAX]
    if not years:
        return NEUTRAL_SCORE
    latest = max(years)
    for floor, freshness in YEAR_FRESHNESS:
        if latest >= floor:
            return freshness
    return YEAR_FRESHNESS_OLDEST


def approximate_space_scores(scores: ObjectAxisScores) -> AxisScores:
    """Rough projection of object scores onto the space axes, for items that only carry space weights."""
    v = scores.value
    return AxisScores.from_mapping(
        {
            Axis.MINIMAL_ORNATE.value: v(ObjectAxis.ORNAMENT),
            Axis.WARM_COOL.value: v(ObjectAxis.PATINA),
            Axis.SOFT_STRUCTURED.value: v(ObjectAxis.PRECISION),
            Axis.ORGANIC_INDUSTRIAL.value: v(ObjectAxis.TECHNICALITY),
            Axis.LIGHT_DARK.value: 0.0,
            Axis.NEUTRAL_SATURATED.value: -v(ObjectAxis.MINIMALISM),
            Axis.SPARSE_LAYERED.value: -v(ObjectAxis.MINIMALISM),
        }
    )


def tag_alignment(vector: WeightVector, tags: list[str]) -> float:
    normalized = vector.normalized()
    total = sum(normalized.get(tag) for tag in tags)
    return max(0.0, min(1.0, (total + 1.0) / 2.0))


def material_category_boost(item: CatalogItem, scores: AxisScores) -> float:
    """
    1.0 when the item's materials or category suit the dominant pole of the
    user's space scores, 0.6 for the secondary pole, otherwise 0.
    """
    materials = {m.lower() for m in item.material_tags}

    def matches(axis: Axis | None) -> bool:
        if axis is None:
            return False
        positive = scores.value(axis) >= 0
        material_pool = MATERIAL_AFFINITY[axis][int(positive)]
        category_pool = CATEGORY_AFFINITY[axis][int(positive)]
        return bool(materials & material_pool) or item.category in category_pool

    if matches(scores.dominant_axis):
        return DOMINANT_MATCH_BOOST
    if matches(scores.secondary_axis):
        return SECONDARY_MATCH_BOOST
    return 0.0


def _sorted(
    scored: list[tuple[CatalogItem, float]], scores: AxisScores | ObjectAxisScores
) -> list[RecommendationItem]:
    ordered = sorted(scored, key=lambda entry: (-entry[1], entry[0].sku_id))
    return [
        RecommendationItem.from_catalog(item, score, reason=build_reason(item, scores, index))
        for index, (item, score) in enumerate(ordered)
    ]


class RankingEngine:
    """
    Scores catalog items against a user's axis scores.

    Every ranking is a fixed convex combination of alignment, a rarity boost
    keyed by the calibration vector's stability mode, a dominant-cluster match
    and a domain-specific extra term. Results are sorted by score descending,
    ties by sku id ascending, then optionally diversified by category.
    """

    @staticmethod
    def rank_objects(
        vector: ObjectVector,
        scores: ObjectAxisScores,
        items: list[CatalogItem],
        swipe_count: int,
        diversified: bool = True,
    ) -> list[RecommendationItem]:
        """0.6 alignment, 0.2 rarity, 0.1 cluster, 0.1 freshness."""
        mode = detect_stability(vector, swipe_count)
        dominant_cluster = object_axis_cluster(scores)
        w_align, w_rarity, w_cluster, w_fresh = OBJECT_WEIGHTS

        scored = []
        for item in items:
            if item.object_axis_weights:
                alignment = vector_alignment(scores, item.object_axis_weights)
            elif item.commerce_axis_weights:
                alignment = vector_alignment(approximate_space_scores(scores), item.commerce_axis_weights)
            else:
                alignment = NEUTRAL_SCORE
            cluster = 1.0 if dominant_cluster in item.discovery_clusters else 0.0
            score = (
                w_align * alignment
                + w_rarity * rarity_boost(item.rarity_tier, mode)
                + w_cluster * cluster
                + w_fresh * year_freshness(item.year_range)
            )
            scored.append((item, score))

        logger.debug(f"Ranked {len(scored)} object items in {mode.value} mode, cluster={dominant_cluster}")
        ranked = _sorted(scored, scores)
        return diversify(ranked, key=lambda r: r.category) if diversified else ranked

    @staticmethod
    def rank_art(
        vector: TasteVector,
        scores: AxisScores,
        items: list[CatalogItem],
        swipe_count: int,
        diversified: bool = True,
    ) -> list[RecommendationItem]:
        """0.60 alignment, 0.15 rarity, 0.15 cluster, 0.10 freshness; tag fallback without axis weights."""
        mode = detect_stability(vector, swipe_count)
        dominant_cluster = art_cluster(scores)
        w_align, w_rarity, w_cluster, w_fresh = ART_WEIGHTS

        scored = []
        for item in items:
            if item.commerce_axis_weights:
                alignment = vector_alignment(scores, item.commerce_axis_weights)
            else:
                alignment = tag_alignment(vector, item.tags)
            cluster = 1.0 if dominant_cluster in item.discovery_clusters else 0.0
            score = (
                w_align * alignment
                + w_rarity * rarity_boost(item.rarity_tier, mode)
                + w_cluster * cluster
                + w_fresh * year_freshness(item.year_range)
            )
            scored.append((item, score))

        logger.debug(f"Ranked {len(scored)} art items in {mode.value} mode, cluster={dominant_cluster}")
        ranked = _sorted(scored, scores)
        return diversify(ranked, key=lambda r: r.category) if diversified else ranked

    @staticmethod
    def rank_commerce(
        vector: TasteVector,
        scores: AxisScores,
        items: list[CatalogItem],
        swipe_count: int = 0,
        material_filter: str | None = None,
        category_filter: ItemCategory | None = None,
        diversified: bool = True,
    ) -> list[RecommendationItem]:
        """
        Rank space commerce items.

        Args:
            vector: Space taste vector, used for the stability mode and tag fallback
            scores: Space axis scores
            items: Catalog items
            swipe_count: Calibration swipe count
            material_filter: Keep only items carrying this material (case-insensitive)
            category_filter: Keep only items in this category
            diversified: Break up runs of more than four items of one category

        Returns:
            Ranked recommendations
        """
        if material_filter:
            wanted = material_filter.lower()
            items = [i for i in items if wanted in {m.lower() for m in i.material_tags}]
        if category_filter is not None:
            items = [i for i in items if i.category == category_filter]

        mode = detect_stability(vector, swipe_count)
        dominant_cluster = space_cluster(scores)
        w_align, w_rarity, w_cluster, w_boost = COMMERCE_WEIGHTS

        scored = []
        for item in items:
            if item.commerce_axis_weights:
                alignment = vector_alignment(scores, item.commerce_axis_weights)
            else:
                alignment = tag_alignment(vector, item.tags)
            cluster = 1.0 if dominant_cluster in item.discovery_clusters else 0.0
            score = (
                w_align * alignment
                + w_rarity * rarity_boost(item.rarity_tier, mode)
                + w_cluster * cluster
                + w_boost * material_category_boost(item, scores)
            )
            scored.append((item, score))

        ranked = _sorted(scored, scores)
        return diversify(ranked, key=lambda r: r.category) if diversified else ranked

    @staticmethod
    def rank(
        domain: TasteDomain,
        vector: WeightVector,
        scores: AxisScores | ObjectAxisScores,
        items: list[CatalogItem],
        swipe_count: int = 0,
    ) -> list[RecommendationItem]:
        """Dispatch to the ranking for ``domain``."""
        if domain == TasteDomain.OBJECTS:
            if not isinstance(scores, ObjectAxisScores):
                raise ValueError("objects ranking needs object axis scores")
            return RankingEngine.rank_objects(ObjectVector(weights=vector.weights), scores, items, swipe_count)
        if isinstance(scores, ObjectAxisScores):
            raise ValueError(f"{domain.value} ranking needs space axis scores")
        if domain == TasteDomain.ART:
            return RankingEngine.rank_art(TasteVector(weights=vector.weights), scores, items, swipe_count)
        return RankingEngine.rank_commerce(TasteVector(weights=vector.weights), scores, items, swipe_count)
