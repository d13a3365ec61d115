"""
Dominant cluster per domain: the arg-max of a few fixed linear combinations
of axis scores. Ties resolve to the first cluster listed.
"""

from tastematch.models.axes import Axis, AxisScores, ObjectAxis, ObjectAxisScores
from tastematch.models.profile import TasteDomain


def _arg_max(clusters: list[tuple[str, float]]) -> str:
    return max(clusters, key=lambda c: c[1])[0]


def space_cluster(scores: AxisScores) -> str:
    v = scores.value
    return _arg_max(
        [
            ("industrialDark", v(Axis.ORGANIC_INDUSTRIAL) + v(Axis.LIGHT_DARK)),
            ("warmOrganic", v(Axis.WARM_COOL) - v(Axis.ORGANIC_INDUSTRIAL)),
            ("minimalNeutral", -v(Axis.MINIMAL_ORNATE) - v(Axis.NEUTRAL_SATURATED)),
            ("layeredSaturated", v(Axis.SPARSE_LAYERED) + v(Axis.NEUTRAL_SATURATED)),
        ]
    )


def objects_cluster(scores: AxisScores) -> str:
    """Objects cluster inferred from space scores."""
    v = scores.value
    return _arg_max(
        [
            ("precision", v(Axis.SOFT_STRUCTURED) + v(Axis.ORGANIC_INDUSTRIAL)),
            ("heritageCraft", v(Axis.WARM_COOL) - v(Axis.MINIMAL_ORNATE) + v(Axis.SPARSE_LAYERED)),
            ("technicalLuxury", v(Axis.LIGHT_DARK) + v(Axis.NEUTRAL_SATURATED) + v(Axis.SOFT_STRUCTURED)),
            ("minimalUtility", -v(Axis.MINIMAL_ORNATE) - v(Axis.SPARSE_LAYERED) - v(Axis.NEUTRAL_SATURATED)),
        ]
    )


def object_axis_cluster(scores: ObjectAxisScores) -> str:
    """Objects cluster read directly from the nine object axes."""
    v = scores.value
    return _arg_max(
        [
            ("precision", v(ObjectAxis.PRECISION) + v(ObjectAxis.MINIMALISM)),
            ("heritageCraft", v(ObjectAxis.HERITAGE) + v(ObjectAxis.PATINA) - v(ObjectAxis.TECHNICALITY)),
            ("technicalLuxury", v(ObjectAxis.TECHNICALITY) + v(ObjectAxis.FORMALITY) + v(ObjectAxis.PRECISION)),
            ("minimalUtility", v(ObjectAxis.MINIMALISM) + v(ObjectAxis.UTILITY) - v(ObjectAxis.ORNAMENT)),
        ]
    )


def art_cluster(scores: AxisScores) -> str:
    v = scores.value
    return _arg_max(
        [
            ("archiveCanon", v(Axis.WARM_COOL) + v(Axis.SPARSE_LAYERED) + v(Axis.MINIMAL_ORNATE)),
            ("postMonochrome", -v(Axis.NEUTRAL_SATURATED) - v(Axis.MINIMAL_ORNATE) + v(Axis.LIGHT_DARK)),
            ("brutalGesture", v(Axis.ORGANIC_INDUSTRIAL) + v(Axis.LIGHT_DARK) + v(Axis.SOFT_STRUCTURED)),
            ("afroFuturism", v(Axis.NEUTRAL_SATURATED) + v(Axis.WARM_COOL) - v(Axis.LIGHT_DARK)),
            ("conceptualArchive", -v(Axis.SPARSE_LAYERED) - v(Axis.WARM_COOL) + v(Axis.SOFT_STRUCTURED)),
        ]
    )


def cluster_for(scores: AxisScores, domain: TasteDomain) -> str:
    if domain == TasteDomain.OBJECTS:
        return objects_cluster(scores)
    if domain == TasteDomain.ART:
        return art_cluster(scores)
    return space_cluster(scores)
